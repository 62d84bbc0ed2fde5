"""
Category use cases

A category either belongs to one user or is global (owner is NULL).
Global categories can be read and attached by anyone but changed by no one
through the API.
"""
from sqlalchemy.orm import Session

from finhelper.application.access import CATEGORY, Page, ResourceAccess
from finhelper.config import get_settings
from finhelper.infrastructure.db.models import Category
from finhelper.infrastructure.store import Store


class CreateCategoryUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, name: str) -> Category:
        self.access.load_owner(principal)
        return self.access.guard(
            "create category", self.store.create_category, name=name, owner=principal
        )


class GetCategoryUseCase:
    def __init__(self, db: Session):
        self.access = ResourceAccess(Store(db))

    def execute(self, principal: str, category_id: int) -> Category:
        return self.access.fetch(CATEGORY, principal, category_id)


class ListCategoriesUseCase:
    """Own categories plus global ones, paged"""

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, page_id: int | None, page_size: int | None) -> list[Category]:
        settings = get_settings()
        page = Page.build(page_id, page_size, settings.PAGE_SIZE_MIN, settings.PAGE_SIZE_MAX)
        return self.access.list(
            principal, page,
            lambda limit, offset: self.store.list_categories(principal, limit, offset)
        )


class UpdateCategoryUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, category_id: int, name: str) -> Category:
        return self.access.update(
            CATEGORY, principal, category_id,
            lambda cid: self.store.update_category(cid, name=name)
        )


class DeleteCategoryUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, category_id: int) -> None:
        self.access.delete(CATEGORY, principal, category_id, self.store.delete_category)


def ensure_category_readable(access: ResourceAccess, principal: str, category_id: int | None) -> None:
    """A category attached to an expense or budget must be the principal's or global"""
    if category_id is not None:
        access.fetch(CATEGORY, principal, category_id)
