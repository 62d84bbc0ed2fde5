"""
Tests for the authorization-scoped access routine (store mocked)
"""
import pytest
from types import SimpleNamespace
from unittest.mock import Mock

from sqlalchemy.exc import OperationalError

from finhelper.application.access import (
    BUDGET, CATEGORY, EXPENSE, MAX_INT64, WALLET, Page, ResourceAccess,
)
from finhelper.application.errors import InvalidArgument, NotFound, StorageError, Unauthorized
from finhelper.infrastructure.store import Store


@pytest.fixture
def store():
    return Mock(spec=Store)


@pytest.fixture
def access(store):
    return ResourceAccess(store)


def _wallet(wallet_id=1, owner="alice"):
    return SimpleNamespace(id=wallet_id, owner=owner, name="Cash", currency="USD")


@pytest.mark.parametrize("entity_id", [0, -1, -999999, 2**63])
@pytest.mark.parametrize("kind", [WALLET, EXPENSE, BUDGET, CATEGORY])
def test_out_of_range_id_is_rejected_without_store_call(access, store, kind, entity_id):
    """id <= 0 or past BIGINT → InvalidArgument, store untouched"""
    with pytest.raises(InvalidArgument):
        access.fetch(kind, "alice", entity_id)

    assert store.method_calls == []


def test_largest_bigint_id_reaches_store(access, store):
    store.get_wallet.return_value = None

    with pytest.raises(NotFound):
        access.fetch(WALLET, "alice", MAX_INT64)

    store.get_wallet.assert_called_once_with(MAX_INT64)


def test_owner_gets_entity_unchanged(access, store):
    wallet = _wallet()
    store.get_wallet.return_value = wallet

    assert access.fetch(WALLET, "alice", 1) is wallet
    store.get_wallet.assert_called_once_with(1)


def test_other_principal_is_unauthorized(access, store):
    store.get_wallet.return_value = _wallet(owner="alice")

    with pytest.raises(Unauthorized):
        access.fetch(WALLET, "bob", 1)


@pytest.mark.parametrize("principal", ["alice", "bob"])
def test_missing_entity_is_not_found_for_everyone(access, store, principal):
    store.get_wallet.return_value = None

    with pytest.raises(NotFound):
        access.fetch(WALLET, principal, 999999)


def test_store_failure_becomes_storage_error_with_cause(access, store):
    cause = OperationalError("SELECT", {}, Exception("connection lost"))
    store.get_wallet.side_effect = cause

    with pytest.raises(StorageError) as exc_info:
        access.fetch(WALLET, "alice", 1)

    assert exc_info.value.cause is cause
    assert "connection lost" not in exc_info.value.message


def test_repeated_fetch_rereads_store_and_returns_same_result(access, store):
    wallet = _wallet()
    store.get_wallet.return_value = wallet

    first = access.fetch(WALLET, "alice", 1)
    second = access.fetch(WALLET, "alice", 1)

    assert first == second
    assert store.get_wallet.call_count == 2


def test_empty_principal_is_unauthorized(access, store):
    with pytest.raises(Unauthorized):
        access.fetch(WALLET, "", 1)
    assert store.method_calls == []


# === ownership chain through the wallet ===

def test_expense_owner_is_resolved_through_wallet(access, store):
    expense = SimpleNamespace(id=7, wallet_id=1, amount=500)
    store.get_expense.return_value = expense
    store.get_wallet.return_value = _wallet(owner="alice")

    assert access.fetch(EXPENSE, "alice", 7) is expense
    with pytest.raises(Unauthorized):
        access.fetch(EXPENSE, "bob", 7)


def test_missing_parent_wallet_propagates_not_found(access, store):
    store.get_budget.return_value = SimpleNamespace(id=3, wallet_id=42)
    store.get_wallet.return_value = None

    with pytest.raises(NotFound):
        access.fetch(BUDGET, "alice", 3)


def test_parent_wallet_storage_failure_is_not_masked(access, store):
    store.get_budget.return_value = SimpleNamespace(id=3, wallet_id=42)
    store.get_wallet.side_effect = OperationalError("SELECT", {}, Exception("boom"))

    with pytest.raises(StorageError):
        access.fetch(BUDGET, "alice", 3)


# === shared (global) categories ===

def test_global_category_readable_but_not_writable(access, store):
    category = SimpleNamespace(id=5, owner=None, name="Food")
    store.get_category.return_value = category

    assert access.fetch(CATEGORY, "bob", 5) is category
    with pytest.raises(Unauthorized):
        access.fetch(CATEGORY, "bob", 5, write=True)


# === create / update / delete variants ===

def test_create_under_foreign_wallet_never_inserts(access, store):
    store.get_wallet.return_value = _wallet(owner="alice")
    create = Mock()

    with pytest.raises(Unauthorized):
        access.create_under(WALLET, "bob", 1, create)

    create.assert_not_called()


def test_create_under_passes_parent(access, store):
    wallet = _wallet(owner="alice")
    store.get_wallet.return_value = wallet
    create = Mock(return_value="row")

    assert access.create_under(WALLET, "alice", 1, create) == "row"
    create.assert_called_once_with(wallet)


def test_delete_failure_is_storage_error(access, store):
    store.get_wallet.return_value = _wallet()
    remove = Mock(side_effect=OperationalError("DELETE", {}, Exception("fk")))

    with pytest.raises(StorageError):
        access.delete(WALLET, "alice", 1, remove)


def test_delete_of_foreign_entity_does_not_mutate(access, store):
    store.get_wallet.return_value = _wallet(owner="alice")
    remove = Mock()

    with pytest.raises(Unauthorized):
        access.delete(WALLET, "bob", 1, remove)

    remove.assert_not_called()


def test_update_returns_mutated_row(access, store):
    store.get_wallet.return_value = _wallet()
    renamed = _wallet()
    renamed.name = "Card"

    assert access.update(WALLET, "alice", 1, lambda wid: renamed).name == "Card"


# === pagination ===

@pytest.mark.parametrize("page_size", [4, 11])
def test_page_size_outside_bounds_rejected(page_size):
    with pytest.raises(InvalidArgument):
        Page.build(1, page_size, 5, 10)


@pytest.mark.parametrize("page_size", [5, 10])
def test_page_size_at_bounds_accepted(page_size):
    assert Page.build(1, page_size, 5, 10).page_size == page_size


@pytest.mark.parametrize("page_id, page_size", [(None, 5), (1, None), (0, 5), (10**19, 5)])
def test_missing_or_invalid_page_rejected(page_id, page_size):
    with pytest.raises(InvalidArgument):
        Page.build(page_id, page_size, 5, 10)


def test_page_offset():
    page = Page.build(3, 5, 5, 10)
    assert (page.limit, page.offset) == (5, 10)


def test_last_page_within_bigint_accepted():
    page_id = MAX_INT64 // 5 + 1
    assert Page.build(page_id, 5, 5, 10).offset <= MAX_INT64


def test_list_passes_limit_and_offset(access):
    query = Mock(return_value=[])

    access.list("alice", Page(page_id=2, page_size=7), query)

    query.assert_called_once_with(7, 7)
