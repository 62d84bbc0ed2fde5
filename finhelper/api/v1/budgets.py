"""
Budget API endpoints
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from finhelper.api.deps import get_current_principal, get_db
from finhelper.application.budgets import (
    CreateBudgetUseCase, DeleteBudgetUseCase, GetBudgetUseCase, ListBudgetsUseCase, UpdateBudgetUseCase,
)


router = APIRouter(prefix="/api/v1", tags=["budgets"])


# === Request/Response models ===

class CreateBudgetRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: int
    category_id: int


class UpdateBudgetRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: int | None = None
    category_id: int | None = None


class BudgetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    wallet_id: int
    amount: int
    category_id: int
    created_at: datetime


# === Endpoints ===

@router.post("/wallets/{wallet_id}/budgets", response_model=BudgetResponse)
def create_budget(
    wallet_id: int,
    req: CreateBudgetRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    budget = CreateBudgetUseCase(db).execute(
        principal, wallet_id, amount=req.amount, category_id=req.category_id
    )
    return BudgetResponse.model_validate(budget)


@router.get("/budgets", response_model=list[BudgetResponse])
def list_budgets(
    page_id: int | None = None,
    page_size: int | None = None,
    wallet_id: int | None = None,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """All budgets of the caller, optionally narrowed to one wallet"""
    budgets = ListBudgetsUseCase(db).execute(principal, page_id, page_size, wallet_id=wallet_id)
    return [BudgetResponse.model_validate(b) for b in budgets]


@router.get("/budgets/{budget_id}", response_model=BudgetResponse)
def get_budget(
    budget_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    return BudgetResponse.model_validate(GetBudgetUseCase(db).execute(principal, budget_id))


@router.patch("/budgets/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: int,
    req: UpdateBudgetRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    budget = UpdateBudgetUseCase(db).execute(
        principal, budget_id, amount=req.amount, category_id=req.category_id
    )
    return BudgetResponse.model_validate(budget)


@router.delete("/budgets/{budget_id}")
def delete_budget(
    budget_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    DeleteBudgetUseCase(db).execute(principal, budget_id)
    return {"status": "deleted"}
