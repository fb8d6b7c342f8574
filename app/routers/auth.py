from fastapi import APIRouter, Depends

from app.dependencies import (
    Identity,
    get_current_identity,
    get_token_service,
    get_user_store,
)
from app.errors import NotFoundError
from app.repositories.users import UserStore
from app.schemas.user import LoginOut, RegisterOut, UserCreate, UserLogin, UserOut, VerifyOut
from app.utils.auth import TokenService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterOut, status_code=201)
def register(user: UserCreate, users: UserStore = Depends(get_user_store)):
    new_user = users.register(user.name, user.email, user.password)
    return {"message": "User created successfully", "user": UserOut.model_validate(new_user)}


@router.post("/login", response_model=LoginOut)
def login(
    credentials: UserLogin,
    users: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
):
    db_user = users.verify(credentials.email, credentials.password)
    token = tokens.issue(db_user.id, db_user.email)
    return {"token": token, "user": UserOut.model_validate(db_user)}


@router.get("/verify", response_model=VerifyOut)
def verify(
    identity: Identity = Depends(get_current_identity),
    users: UserStore = Depends(get_user_store),
):
    db_user = users.get(identity.user_id)
    if not db_user:
        raise NotFoundError("User not found")
    return {"user": UserOut.model_validate(db_user)}
