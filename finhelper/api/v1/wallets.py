"""
Wallet API endpoints
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.orm import Session

from finhelper.api.deps import get_current_principal, get_db
from finhelper.application.wallets import (
    CreateWalletUseCase, DeleteWalletUseCase, GetWalletUseCase, ListWalletsUseCase, UpdateWalletUseCase,
)
from finhelper.utils.validation import validate_currency, validate_name


router = APIRouter(prefix="/api/v1/wallets", tags=["wallets"])


# === Request/Response models ===

class CreateWalletRequest(BaseModel):
    # unknown fields (e.g. "owner") are rejected: the owner is the caller
    model_config = ConfigDict(extra="forbid")

    name: str
    currency: str  # RUB, USD, EUR

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_name(v)

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str) -> str:
        return validate_currency(v)


class UpdateWalletRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    currency: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        return validate_name(v) if v is not None else v

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v: str | None) -> str | None:
        return validate_currency(v) if v is not None else v


class WalletResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner: str
    name: str
    currency: str
    created_at: datetime


# === Endpoints ===

@router.post("", response_model=WalletResponse)
def create_wallet(
    req: CreateWalletRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """Create a wallet owned by the caller"""
    wallet = CreateWalletUseCase(db).execute(principal, name=req.name, currency=req.currency)
    return WalletResponse.model_validate(wallet)


@router.get("", response_model=list[WalletResponse])
def list_wallets(
    page_id: int | None = None,
    page_size: int | None = None,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """The caller's wallets, one page at a time"""
    wallets = ListWalletsUseCase(db).execute(principal, page_id, page_size)
    return [WalletResponse.model_validate(w) for w in wallets]


@router.get("/{wallet_id}", response_model=WalletResponse)
def get_wallet(
    wallet_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    return WalletResponse.model_validate(GetWalletUseCase(db).execute(principal, wallet_id))


@router.patch("/{wallet_id}", response_model=WalletResponse)
def update_wallet(
    wallet_id: int,
    req: UpdateWalletRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    wallet = UpdateWalletUseCase(db).execute(
        principal, wallet_id, name=req.name, currency=req.currency
    )
    return WalletResponse.model_validate(wallet)


@router.delete("/{wallet_id}")
def delete_wallet(
    wallet_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    DeleteWalletUseCase(db).execute(principal, wallet_id)
    return {"status": "deleted"}
