"""
User API endpoints (registration, login, own profile)
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.orm import Session

from finhelper.api.deps import get_current_principal, get_db
from finhelper.application.users import (
    CreateUserUseCase, DeleteUserUseCase, GetUserUseCase, LoginUserUseCase, UpdateUserUseCase,
)
from finhelper.auth import get_token_maker
from finhelper.utils.validation import validate_currency, validate_email, validate_username


router = APIRouter(prefix="/api/v1/users", tags=["users"])


# === Request/Response models ===

class CreateUserRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str
    email: str
    password: str
    currency: str  # RUB, USD, EUR
    full_name: str = ""

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        return validate_currency(v)


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str | None = None
    full_name: str | None = None
    password: str | None = None
    currency: str | None = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str | None:
        return validate_email(v) if v is not None else v

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str | None) -> str | None:
        return validate_currency(v) if v is not None else v


class LoginUserRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user; the password hash is never serialized"""
    model_config = ConfigDict(from_attributes=True)

    username: str
    full_name: str
    email: str
    currency: str
    password_changed_at: datetime
    created_at: datetime


class LoginUserResponse(BaseModel):
    access_token: str
    access_token_expires_at: datetime
    user: UserResponse


# === Endpoints ===

@router.post("", response_model=UserResponse)
def create_user(req: CreateUserRequest, db: Session = Depends(get_db)):
    """Register a new user"""
    user = CreateUserUseCase(db).execute(
        username=req.username,
        email=req.email,
        password=req.password,
        currency=req.currency,
        full_name=req.full_name,
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginUserResponse)
def login_user(req: LoginUserRequest, db: Session = Depends(get_db)):
    """Exchange username/password for a bearer token"""
    result = LoginUserUseCase(db, get_token_maker()).execute(req.username, req.password)
    return LoginUserResponse(
        access_token=result.access_token,
        access_token_expires_at=result.payload.expired_at,
        user=UserResponse.model_validate(result.user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    return UserResponse.model_validate(GetUserUseCase(db).execute(principal))


@router.patch("/me", response_model=UserResponse)
def update_me(
    req: UpdateUserRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    user = UpdateUserUseCase(db).execute(
        principal,
        email=req.email,
        full_name=req.full_name,
        password=req.password,
        currency=req.currency,
    )
    return UserResponse.model_validate(user)


@router.delete("/me")
def delete_me(
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    DeleteUserUseCase(db).execute(principal)
    return {"status": "deleted"}
