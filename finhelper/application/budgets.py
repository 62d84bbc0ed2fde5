"""
Budget use cases - a budget caps spending of one category within a wallet
"""
import logging

from sqlalchemy.orm import Session

from finhelper.application.access import BUDGET, WALLET, Page, ResourceAccess
from finhelper.application.categories import ensure_category_readable
from finhelper.config import get_settings
from finhelper.infrastructure.db.models import Budget
from finhelper.infrastructure.store import Store

logger = logging.getLogger(__name__)


class CreateBudgetUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, wallet_id: int, amount: int, category_id: int) -> Budget:
        def create(wallet):
            ensure_category_readable(self.access, principal, category_id)
            return self.store.create_budget(
                wallet_id=wallet.id, amount=amount, category_id=category_id
            )

        budget = self.access.create_under(WALLET, principal, wallet_id, create)
        logger.info("Budget created: id=%s wallet_id=%s", budget.id, wallet_id)
        return budget


class GetBudgetUseCase:
    def __init__(self, db: Session):
        self.access = ResourceAccess(Store(db))

    def execute(self, principal: str, budget_id: int) -> Budget:
        return self.access.fetch(BUDGET, principal, budget_id)


class ListBudgetsUseCase:
    """
    Budgets across all of the principal's wallets

    The ownership filter is part of the SQL query, so a page never contains
    another user's rows.
    """

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(
        self,
        principal: str,
        page_id: int | None,
        page_size: int | None,
        wallet_id: int | None = None,
    ) -> list[Budget]:
        settings = get_settings()
        page = Page.build(page_id, page_size, settings.PAGE_SIZE_MIN, settings.PAGE_SIZE_MAX)
        if wallet_id is not None:
            self.access.fetch(WALLET, principal, wallet_id)
        return self.access.list(
            principal, page,
            lambda limit, offset: self.store.list_budgets(principal, limit, offset, wallet_id=wallet_id)
        )


class UpdateBudgetUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(
        self,
        principal: str,
        budget_id: int,
        amount: int | None = None,
        category_id: int | None = None,
    ) -> Budget:
        values = {}
        if amount is not None:
            values["amount"] = amount
        if category_id is not None:
            values["category_id"] = category_id

        def mutate(bid):
            ensure_category_readable(self.access, principal, category_id)
            return self.store.update_budget(bid, **values)

        return self.access.update(BUDGET, principal, budget_id, mutate)


class DeleteBudgetUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, budget_id: int) -> None:
        self.access.delete(BUDGET, principal, budget_id, self.store.delete_budget)
