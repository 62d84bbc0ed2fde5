"""
Tests for Budget use cases
"""
import pytest

from finhelper.application.budgets import (
    CreateBudgetUseCase, DeleteBudgetUseCase, GetBudgetUseCase, ListBudgetsUseCase, UpdateBudgetUseCase,
)
from finhelper.application.errors import NotFound, Unauthorized
from finhelper.infrastructure.db.models import Budget


@pytest.fixture
def food(make_category):
    return make_category(None, name="Food")


def test_create_budget(db_session, alice, make_wallet, food):
    wallet = make_wallet("alice")

    budget = CreateBudgetUseCase(db_session).execute("alice", wallet.id, amount=10000, category_id=food.id)

    assert budget.wallet_id == wallet.id
    assert budget.amount == 10000
    assert budget.category_id == food.id


def test_create_budget_in_foreign_wallet(db_session, alice, bob, make_wallet, food):
    wallet = make_wallet("alice")

    with pytest.raises(Unauthorized):
        CreateBudgetUseCase(db_session).execute("bob", wallet.id, amount=10000, category_id=food.id)

    assert db_session.query(Budget).count() == 0


def test_create_budget_with_missing_category(db_session, alice, make_wallet):
    wallet = make_wallet("alice")

    with pytest.raises(NotFound):
        CreateBudgetUseCase(db_session).execute("alice", wallet.id, amount=10000, category_id=777)


def test_list_budgets_never_contains_foreign_rows(db_session, alice, bob, make_wallet, food):
    """A foreign budget in the table does not poison alice's page"""
    alice_wallet = make_wallet("alice")
    bob_wallet = make_wallet("bob")
    create = CreateBudgetUseCase(db_session)
    create.execute("bob", bob_wallet.id, amount=1, category_id=food.id)
    mine = [create.execute("alice", alice_wallet.id, amount=100 + i, category_id=food.id).id for i in range(2)]
    create.execute("bob", bob_wallet.id, amount=2, category_id=food.id)

    budgets = ListBudgetsUseCase(db_session).execute("alice", page_id=1, page_size=5)

    assert [b.id for b in budgets] == mine


def test_list_budgets_filtered_by_wallet(db_session, alice, make_wallet, food):
    first = make_wallet("alice")
    second = make_wallet("alice")
    create = CreateBudgetUseCase(db_session)
    create.execute("alice", first.id, amount=100, category_id=food.id)
    in_second = create.execute("alice", second.id, amount=200, category_id=food.id)

    budgets = ListBudgetsUseCase(db_session).execute("alice", 1, 5, wallet_id=second.id)

    assert [b.id for b in budgets] == [in_second.id]


def test_list_budgets_of_foreign_wallet(db_session, alice, bob, make_wallet):
    wallet = make_wallet("alice")

    with pytest.raises(Unauthorized):
        ListBudgetsUseCase(db_session).execute("bob", 1, 5, wallet_id=wallet.id)


def test_get_update_delete_budget(db_session, alice, bob, make_wallet, food):
    wallet = make_wallet("alice")
    budget = CreateBudgetUseCase(db_session).execute("alice", wallet.id, amount=100, category_id=food.id)

    with pytest.raises(Unauthorized):
        GetBudgetUseCase(db_session).execute("bob", budget.id)

    updated = UpdateBudgetUseCase(db_session).execute("alice", budget.id, amount=900)
    assert updated.amount == 900

    DeleteBudgetUseCase(db_session).execute("alice", budget.id)
    with pytest.raises(NotFound):
        GetBudgetUseCase(db_session).execute("alice", budget.id)
