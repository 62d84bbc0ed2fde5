"""
Expense use cases - expenses live inside a wallet, ownership comes from it
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from finhelper.application.access import EXPENSE, WALLET, Page, ResourceAccess
from finhelper.application.categories import ensure_category_readable
from finhelper.config import get_settings
from finhelper.infrastructure.db.models import Expense
from finhelper.infrastructure.store import Store

logger = logging.getLogger(__name__)

_UPDATABLE = ("amount", "expense_description", "category_id", "expense_date")
# None clears these; for the others None means "leave unchanged"
_CLEARABLE = ("expense_description", "category_id")


class CreateExpenseUseCase:
    """
    Use case: record an expense in a wallet

    Process:
    1. Authorize the wallet (NotFound / Unauthorized before any insert)
    2. Check that the category, if given, is visible to the principal
    3. Insert; amount > 0 is enforced by the table constraint
    """

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(
        self,
        principal: str,
        wallet_id: int,
        amount: int,
        expense_date: date | None = None,
        expense_description: str | None = None,
        category_id: int | None = None,
    ) -> Expense:
        def create(wallet):
            ensure_category_readable(self.access, principal, category_id)
            return self.store.create_expense(
                wallet_id=wallet.id,
                amount=amount,
                expense_date=expense_date or date.today(),
                expense_description=expense_description,
                category_id=category_id,
            )

        expense = self.access.create_under(WALLET, principal, wallet_id, create)
        logger.info("Expense created: id=%s wallet_id=%s", expense.id, wallet_id)
        return expense


class GetExpenseUseCase:
    def __init__(self, db: Session):
        self.access = ResourceAccess(Store(db))

    def execute(self, principal: str, expense_id: int) -> Expense:
        return self.access.fetch(EXPENSE, principal, expense_id)


class ListExpensesUseCase:
    """Expenses of one wallet, newest expense_date first"""

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(
        self,
        principal: str,
        wallet_id: int,
        page_id: int | None,
        page_size: int | None,
    ) -> list[Expense]:
        settings = get_settings()
        page = Page.build(page_id, page_size, settings.PAGE_SIZE_MIN, settings.PAGE_SIZE_MAX)
        wallet = self.access.fetch(WALLET, principal, wallet_id)
        return self.access.list(
            principal, page,
            lambda limit, offset: self.store.list_expenses(wallet.id, limit, offset)
        )


class UpdateExpenseUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, expense_id: int, **changes) -> Expense:
        values = {
            k: v for k, v in changes.items()
            if k in _UPDATABLE and (v is not None or k in _CLEARABLE)
        }

        def mutate(eid):
            ensure_category_readable(self.access, principal, values.get("category_id"))
            return self.store.update_expense(eid, **values)

        return self.access.update(EXPENSE, principal, expense_id, mutate)


class DeleteExpenseUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, expense_id: int) -> None:
        self.access.delete(EXPENSE, principal, expense_id, self.store.delete_expense)
