from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.config import Settings
from app.database import get_db
from app.errors import Forbidden, InvalidTokenError, Unauthenticated
from app.repositories.tasks import TaskRepository
from app.repositories.users import UserStore
from app.utils.auth import TokenService


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_user_store(request: Request, db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db, request.app.state.hasher)


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer <token>` header, if any."""
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    tok = _extract_token(authorization)
    if not tok:
        raise Unauthenticated("Access token required")
    try:
        claims = tokens.verify(tok)
    except InvalidTokenError:
        raise Forbidden("Invalid or expired token")
    identity = Identity(user_id=claims.user_id, email=claims.email)
    request.state.identity = identity
    return identity
