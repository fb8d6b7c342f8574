from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from app.utils.auth import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        """Enforce the minimum length and bcrypt's 72-byte limit (UTF-8)."""
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password too long: must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        return v


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("email and password are required")
        return v


class UserOut(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class RegisterOut(BaseModel):
    message: str
    user: UserOut


class LoginOut(BaseModel):
    token: str
    user: UserOut


class VerifyOut(BaseModel):
    user: UserOut
