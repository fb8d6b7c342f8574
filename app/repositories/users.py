import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import AuthError, DuplicateError, ValidationError
from app.models.user import User
from app.utils.auth import PasswordHasher

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Strip whitespace and lowercase the domain, as EmailStr does on registration."""
    email = (email or "").strip()
    local, sep, domain = email.rpartition("@")
    if not sep:
        return email
    return f"{local}@{domain.lower()}"


class UserStore:
    """Credential store: users and their salted password hashes."""

    def __init__(self, db: Session, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    def register(self, name: str, email: str, password: str) -> User:
        name = (name or "").strip()
        email = normalize_email(email)
        if not name or not email or not password:
            raise ValidationError("Name, email and password are required")

        exists = self.db.query(User.id).filter(User.email == email).first()
        if exists:
            raise DuplicateError("Email already exists")

        hashed = self.hasher.hash_password(password)
        new_user = User(name=name, email=email, password=hashed)
        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError:
            # another request registered the same email in between
            self.db.rollback()
            raise DuplicateError("Email already exists")
        self.db.refresh(new_user)
        logger.info("Registered user id=%s", new_user.id)
        return new_user

    def verify(self, email: str, password: str) -> User:
        user = self.db.query(User).filter(User.email == normalize_email(email)).first()
        if not user or not self.hasher.verify_password(password or "", user.password):
            logger.info("Rejected login attempt")
            raise AuthError("Invalid credentials")
        return user

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()
