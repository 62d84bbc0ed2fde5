"""
Wallet use cases
"""
import logging

from sqlalchemy.orm import Session

from finhelper.application.access import WALLET, Page, ResourceAccess
from finhelper.config import get_settings
from finhelper.infrastructure.db.models import Wallet
from finhelper.infrastructure.store import Store

logger = logging.getLogger(__name__)


class CreateWalletUseCase:
    """
    Use case: create a wallet for the authenticated user

    The owner is always the principal; it is never read from client input.
    """

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, name: str, currency: str) -> Wallet:
        # a token may outlive its user row
        self.access.load_owner(principal)
        wallet = self.access.guard(
            "create wallet", self.store.create_wallet,
            owner=principal, name=name, currency=currency
        )
        logger.info("Wallet created: id=%s owner=%s", wallet.id, principal)
        return wallet


class GetWalletUseCase:
    def __init__(self, db: Session):
        self.access = ResourceAccess(Store(db))

    def execute(self, principal: str, wallet_id: int) -> Wallet:
        return self.access.fetch(WALLET, principal, wallet_id)


class ListWalletsUseCase:
    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, page_id: int | None, page_size: int | None) -> list[Wallet]:
        settings = get_settings()
        page = Page.build(page_id, page_size, settings.PAGE_SIZE_MIN, settings.PAGE_SIZE_MAX)
        return self.access.list(
            principal, page,
            lambda limit, offset: self.store.list_wallets(principal, limit, offset)
        )


class UpdateWalletUseCase:
    """Rename a wallet or change its currency; the owner is immutable"""

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, wallet_id: int, **changes) -> Wallet:
        values = {k: v for k, v in changes.items() if k in ("name", "currency") and v is not None}
        return self.access.update(
            WALLET, principal, wallet_id,
            lambda wid: self.store.update_wallet(wid, **values)
        )


class DeleteWalletUseCase:
    """
    Delete a wallet. Wallets that still have expenses or budgets are kept
    by the foreign keys; the failure surfaces as StorageError.
    """

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str, wallet_id: int) -> None:
        self.access.delete(
            WALLET, principal, wallet_id,
            lambda wid: self.store.delete_wallet(wid, principal)
        )
        logger.info("Wallet deleted: id=%s owner=%s", wallet_id, principal)
