"""
Tests for Category use cases
"""
import pytest

from finhelper.application.categories import (
    CreateCategoryUseCase, DeleteCategoryUseCase, GetCategoryUseCase, ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from finhelper.application.errors import Unauthorized
from finhelper.infrastructure.db.models import Category


def test_create_category_owned_by_principal(db_session, alice):
    category = CreateCategoryUseCase(db_session).execute("alice", name="Groceries")

    assert category.owner == "alice"
    assert GetCategoryUseCase(db_session).execute("alice", category.id).name == "Groceries"


def test_foreign_category_is_unauthorized(db_session, alice, bob):
    category = CreateCategoryUseCase(db_session).execute("alice", name="Groceries")

    with pytest.raises(Unauthorized):
        GetCategoryUseCase(db_session).execute("bob", category.id)


def test_list_includes_own_and_global(db_session, alice, bob, make_category):
    make_category(None, name="Food")
    make_category("alice", name="Hobby")
    make_category("bob", name="Bob only")

    names = [c.name for c in ListCategoriesUseCase(db_session).execute("alice", 1, 10)]

    assert names == ["Food", "Hobby"]


def test_global_category_cannot_be_changed(db_session, alice, make_category):
    food = make_category(None, name="Food")

    with pytest.raises(Unauthorized):
        UpdateCategoryUseCase(db_session).execute("alice", food.id, name="Mine")
    with pytest.raises(Unauthorized):
        DeleteCategoryUseCase(db_session).execute("alice", food.id)


def test_rename_and_delete_own_category(db_session, alice, make_category):
    hobby = make_category("alice", name="Hobby")

    assert UpdateCategoryUseCase(db_session).execute("alice", hobby.id, name="Sport").name == "Sport"

    DeleteCategoryUseCase(db_session).execute("alice", hobby.id)
    assert db_session.get(Category, hobby.id) is None
