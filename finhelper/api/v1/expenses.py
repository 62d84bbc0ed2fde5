"""
Expense API endpoints

Creation and listing are nested under the wallet; single expenses are
addressed directly by id and authorized through their wallet.
"""
from datetime import date, datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from finhelper.api.deps import get_current_principal, get_db
from finhelper.application.expenses import (
    CreateExpenseUseCase, DeleteExpenseUseCase, GetExpenseUseCase, ListExpensesUseCase,
    UpdateExpenseUseCase,
)


router = APIRouter(prefix="/api/v1", tags=["expenses"])


# === Request/Response models ===

class CreateExpenseRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: int  # minor units; positivity is a table constraint
    expense_description: str | None = None
    category_id: int | None = None
    expense_date: date | None = None  # defaults to today


class UpdateExpenseRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: int | None = None
    expense_description: str | None = None
    category_id: int | None = None
    expense_date: date | None = None


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    wallet_id: int
    amount: int
    expense_description: str | None
    category_id: int | None
    expense_date: date
    created_at: datetime


# === Endpoints ===

@router.post("/wallets/{wallet_id}/expenses", response_model=ExpenseResponse)
def create_expense(
    wallet_id: int,
    req: CreateExpenseRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    expense = CreateExpenseUseCase(db).execute(
        principal,
        wallet_id,
        amount=req.amount,
        expense_date=req.expense_date,
        expense_description=req.expense_description,
        category_id=req.category_id,
    )
    return ExpenseResponse.model_validate(expense)


@router.get("/wallets/{wallet_id}/expenses", response_model=list[ExpenseResponse])
def list_expenses(
    wallet_id: int,
    page_id: int | None = None,
    page_size: int | None = None,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    expenses = ListExpensesUseCase(db).execute(principal, wallet_id, page_id, page_size)
    return [ExpenseResponse.model_validate(e) for e in expenses]


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    return ExpenseResponse.model_validate(GetExpenseUseCase(db).execute(principal, expense_id))


@router.patch("/expenses/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    req: UpdateExpenseRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    expense = UpdateExpenseUseCase(db).execute(
        principal, expense_id, **req.model_dump(exclude_unset=True)
    )
    return ExpenseResponse.model_validate(expense)


@router.delete("/expenses/{expense_id}")
def delete_expense(
    expense_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    DeleteExpenseUseCase(db).execute(principal, expense_id)
    return {"status": "deleted"}
