"""
Category API endpoints
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.orm import Session

from finhelper.api.deps import get_current_principal, get_db
from finhelper.application.categories import (
    CreateCategoryUseCase, DeleteCategoryUseCase, GetCategoryUseCase, ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from finhelper.utils.validation import validate_name


router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


# === Request/Response models ===

class CategoryRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_name(v)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    owner: str | None  # None for global categories
    created_at: datetime


# === Endpoints ===

@router.post("", response_model=CategoryResponse)
def create_category(
    req: CategoryRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    category = CreateCategoryUseCase(db).execute(principal, name=req.name)
    return CategoryResponse.model_validate(category)


@router.get("", response_model=list[CategoryResponse])
def list_categories(
    page_id: int | None = None,
    page_size: int | None = None,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """Own and global categories"""
    categories = ListCategoriesUseCase(db).execute(principal, page_id, page_size)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    return CategoryResponse.model_validate(GetCategoryUseCase(db).execute(principal, category_id))


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    req: CategoryRequest,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    category = UpdateCategoryUseCase(db).execute(principal, category_id, name=req.name)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    principal: str = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    DeleteCategoryUseCase(db).execute(principal, category_id)
    return {"status": "deleted"}
