from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.errors import InvalidTokenError, ValidationError

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of the secret
MAX_PASSWORD_BYTES = 72


def check_password_length(password: str):
    """Reject passwords bcrypt cannot hash faithfully.

    Raises ValidationError if the password is shorter than MIN_PASSWORD_LENGTH
    characters or its UTF-8 encoding exceeds MAX_PASSWORD_BYTES.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password too long: must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash_password(self, password: str) -> str:
        check_password_length(password)
        return self.pwd_context.hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        """Verify a plaintext password against a hash.

        If verification raises a ValueError (for example plain >72 bytes or a
        corrupt hash), return False so the caller answers with an
        authentication failure instead of an error.
        """
        try:
            return self.pwd_context.verify(plain, hashed)
        except ValueError:
            return False


@dataclass(frozen=True)
class Claims:
    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and checks signed, time-limited bearer tokens (JWT)."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", lifetime: timedelta = timedelta(hours=24)):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user_id: int, email: str, now: Optional[datetime] = None) -> str:
        issued = now or datetime.now(UTC)
        expire = issued + self.lifetime
        data = {
            "sub": str(user_id),
            "email": email,
            # JWT claims are Unix timestamps
            "iat": int(issued.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(data, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Claims:
        try:
            # jwt.decode validates exp automatically
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        sub = payload.get("sub")
        email = payload.get("email")
        iat = payload.get("iat")
        exp = payload.get("exp")
        if not sub or not isinstance(email, str) or not email:
            raise InvalidTokenError("token is missing user claims")
        if not isinstance(iat, int) or not isinstance(exp, int):
            raise InvalidTokenError("token is missing timestamps")
        try:
            user_id = int(sub)
        except ValueError as e:
            raise InvalidTokenError("token subject is not a user id") from e

        return Claims(
            user_id=user_id,
            email=email,
            issued_at=datetime.fromtimestamp(iat, UTC),
            expires_at=datetime.fromtimestamp(exp, UTC),
        )
