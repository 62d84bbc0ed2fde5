"""
Authorization-scoped resource access

Every entity operation goes through ResourceAccess:

    validate id -> load entity -> resolve owner -> compare with principal

Existence is always confirmed before ownership, so a missing row is NotFound
for every caller. Nothing is cached: each call reads the store again.

Usage:
    access = ResourceAccess(store)
    wallet = access.fetch(WALLET, "alice", wallet_id)
    expense = access.create_under(WALLET, "alice", wallet_id, lambda w: store.create_expense(...))
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError

from finhelper.application.errors import InvalidArgument, NotFound, StorageError, Unauthorized
from finhelper.infrastructure.store import Store

logger = logging.getLogger(__name__)

# Largest value a BIGINT key or LIMIT/OFFSET can carry
MAX_INT64 = 2**63 - 1


@dataclass(frozen=True)
class Page:
    """1-based page number plus page size"""
    page_id: int
    page_size: int

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page_id - 1) * self.page_size

    @classmethod
    def build(
        cls,
        page_id: int | None,
        page_size: int | None,
        min_size: int,
        max_size: int,
    ) -> "Page":
        """
        Validate pagination parameters

        Raises:
            InvalidArgument: a parameter is missing, page_id < 1, page_size
                is outside [min_size, max_size] or the offset overflows BIGINT
        """
        if page_id is None or page_size is None:
            raise InvalidArgument("page_id and page_size are required")
        if page_id < 1:
            raise InvalidArgument("page_id must be at least 1")
        if not min_size <= page_size <= max_size:
            raise InvalidArgument(f"page_size must be between {min_size} and {max_size}")
        if (page_id - 1) * page_size > MAX_INT64:
            raise InvalidArgument("page_id is too large")
        return cls(page_id=page_id, page_size=page_size)


@dataclass(frozen=True)
class EntityKind:
    """
    Describes how to load an entity and who owns it

    owner_of receives the ResourceAccess so that parent lookups (expense ->
    wallet) go through the same NotFound/StorageError mapping.
    """
    name: str
    get: Callable[[Store, Any], Any]
    owner_of: Callable[["ResourceAccess", Any], str | None]
    # Unowned rows of this kind are readable by everyone, writable by no one
    shared_when_unowned: bool = False


def _direct_owner(access: "ResourceAccess", entity) -> str | None:
    return entity.owner


def _wallet_owner(access: "ResourceAccess", entity) -> str:
    return access.load(WALLET, entity.wallet_id).owner


USER = EntityKind("user", lambda store, key: store.get_user(key), lambda access, user: user.username)
WALLET = EntityKind("wallet", lambda store, key: store.get_wallet(key), _direct_owner)
CATEGORY = EntityKind(
    "category", lambda store, key: store.get_category(key), _direct_owner, shared_when_unowned=True
)
EXPENSE = EntityKind("expense", lambda store, key: store.get_expense(key), _wallet_owner)
BUDGET = EntityKind("budget", lambda store, key: store.get_budget(key), _wallet_owner)


def _require_principal(principal: str) -> None:
    if not principal:
        raise Unauthorized("not authenticated")


def _valid_id(entity_id) -> bool:
    return (
        isinstance(entity_id, int)
        and not isinstance(entity_id, bool)
        and 0 < entity_id <= MAX_INT64
    )


class ResourceAccess:
    def __init__(self, store: Store):
        self.store = store

    def guard(self, action: str, fn: Callable, *args, **kwargs):
        """Run a store call, turning database failures into StorageError"""
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error("Store failure: could not %s", action, exc_info=exc)
            raise StorageError(f"could not {action}", cause=exc) from exc

    def load(self, kind: EntityKind, key):
        entity = self.guard(f"load {kind.name}", kind.get, self.store, key)
        if entity is None:
            raise NotFound(f"{kind.name} not found")
        return entity

    def load_owner(self, principal: str):
        """The principal's own user row; a missing row means the principal is stale"""
        _require_principal(principal)
        try:
            return self.load(USER, principal)
        except NotFound as exc:
            raise Unauthorized("user no longer exists") from exc

    def fetch(self, kind: EntityKind, principal: str, entity_id: int, write: bool = False):
        """
        Load an entity the principal is entitled to

        Args:
            kind: entity kind (WALLET, EXPENSE, ...)
            principal: authenticated username
            entity_id: primary key, must be positive
            write: the caller is about to mutate the entity

        Raises:
            InvalidArgument: entity_id <= 0 or beyond BIGINT (the store is not touched)
            NotFound: the entity or its parent wallet does not exist
            Unauthorized: the ownership chain ends at another user
            StorageError: the store failed
        """
        _require_principal(principal)
        if not _valid_id(entity_id):
            raise InvalidArgument(f"invalid {kind.name} id")

        entity = self.load(kind, entity_id)
        owner = kind.owner_of(self, entity)

        if owner is None and kind.shared_when_unowned and not write:
            return entity
        if owner != principal:
            logger.warning(
                "Access denied: user=%s %s_id=%s write=%s", principal, kind.name, entity_id, write
            )
            raise Unauthorized(f"{kind.name} does not belong to the authenticated user")
        return entity

    def create_under(self, parent_kind: EntityKind, principal: str, parent_id: int, create: Callable):
        """Authorize the parent, then insert; `create` receives the parent"""
        parent = self.fetch(parent_kind, principal, parent_id, write=True)
        return self.guard(f"create record in {parent_kind.name}", create, parent)

    def update(self, kind: EntityKind, principal: str, entity_id: int, mutate: Callable):
        self.fetch(kind, principal, entity_id, write=True)
        updated = self.guard(f"update {kind.name}", mutate, entity_id)
        if updated is None:
            raise NotFound(f"{kind.name} not found")
        return updated

    def delete(self, kind: EntityKind, principal: str, entity_id: int, remove: Callable) -> None:
        self.fetch(kind, principal, entity_id, write=True)
        self.guard(f"delete {kind.name}", remove, entity_id)

    def list(self, principal: str, page: Page, query: Callable) -> list:
        """
        `query(limit, offset)` must already filter by the principal in SQL;
        rows are returned as the store produced them.
        """
        _require_principal(principal)
        return self.guard("list records", query, page.limit, page.offset)
