"""
Entity store - CRUD over the relational tables

Every getter returns None when the row does not exist. Every mutation is a
single statement followed by commit; on failure the session is rolled back
and the SQLAlchemy error propagates to the caller.
"""
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from finhelper.infrastructure.db.models import Budget, Category, Expense, User, Wallet


class Store:
    def __init__(self, db: Session):
        self.db = db

    # === helpers ===

    def _insert(self, row):
        self.db.add(row)
        try:
            self.db.flush()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return row

    def _execute(self, statement):
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return result

    def _update_returning(self, model, row_id, values: dict[str, Any]):
        if values:
            self._execute(
                update(model)
                .where(model.id == row_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
        row = self.db.get(model, row_id, populate_existing=True)
        return row

    # === users ===

    def create_user(
        self,
        username: str,
        email: str,
        hashed_password: str,
        currency: str,
        full_name: str = "",
    ) -> User:
        return self._insert(User(
            username=username,
            email=email,
            hashed_password=hashed_password,
            currency=currency,
            full_name=full_name,
        ))

    def get_user(self, username: str) -> User | None:
        return self.db.get(User, username)

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def update_user(self, username: str, **values) -> User | None:
        if "hashed_password" in values:
            values["password_changed_at"] = datetime.now(timezone.utc)
        if values:
            self._execute(
                update(User)
                .where(User.username == username)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
        return self.db.get(User, username, populate_existing=True)

    def delete_user(self, username: str) -> int:
        return self._execute(delete(User).where(User.username == username)).rowcount

    # === wallets ===

    def create_wallet(self, owner: str, name: str, currency: str) -> Wallet:
        return self._insert(Wallet(owner=owner, name=name, currency=currency))

    def get_wallet(self, wallet_id: int) -> Wallet | None:
        return self.db.get(Wallet, wallet_id)

    def list_wallets(self, owner: str, limit: int, offset: int) -> list[Wallet]:
        statement = (
            select(Wallet)
            .where(Wallet.owner == owner)
            .order_by(Wallet.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.scalars(statement))

    def update_wallet(self, wallet_id: int, **values) -> Wallet | None:
        return self._update_returning(Wallet, wallet_id, values)

    def delete_wallet(self, wallet_id: int, owner: str) -> int:
        statement = delete(Wallet).where(Wallet.id == wallet_id, Wallet.owner == owner)
        return self._execute(statement).rowcount

    # === categories ===

    def create_category(self, name: str, owner: str | None) -> Category:
        return self._insert(Category(name=name, owner=owner))

    def get_category(self, category_id: int) -> Category | None:
        return self.db.get(Category, category_id)

    def list_categories(self, owner: str, limit: int, offset: int) -> list[Category]:
        """Categories owned by `owner` plus the global ones"""
        statement = (
            select(Category)
            .where(or_(Category.owner == owner, Category.owner.is_(None)))
            .order_by(Category.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.scalars(statement))

    def update_category(self, category_id: int, **values) -> Category | None:
        return self._update_returning(Category, category_id, values)

    def delete_category(self, category_id: int) -> int:
        return self._execute(delete(Category).where(Category.id == category_id)).rowcount

    # === expenses ===

    def create_expense(
        self,
        wallet_id: int,
        amount: int,
        expense_date: date,
        expense_description: str | None = None,
        category_id: int | None = None,
    ) -> Expense:
        return self._insert(Expense(
            wallet_id=wallet_id,
            amount=amount,
            expense_description=expense_description,
            category_id=category_id,
            expense_date=expense_date,
        ))

    def get_expense(self, expense_id: int) -> Expense | None:
        return self.db.get(Expense, expense_id)

    def list_expenses(self, wallet_id: int, limit: int, offset: int) -> list[Expense]:
        statement = (
            select(Expense)
            .where(Expense.wallet_id == wallet_id)
            .order_by(Expense.expense_date.desc(), Expense.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.scalars(statement))

    def update_expense(self, expense_id: int, **values) -> Expense | None:
        return self._update_returning(Expense, expense_id, values)

    def delete_expense(self, expense_id: int) -> int:
        return self._execute(delete(Expense).where(Expense.id == expense_id)).rowcount

    # === budgets ===

    def create_budget(self, wallet_id: int, amount: int, category_id: int) -> Budget:
        return self._insert(Budget(wallet_id=wallet_id, amount=amount, category_id=category_id))

    def get_budget(self, budget_id: int) -> Budget | None:
        return self.db.get(Budget, budget_id)

    def list_budgets(
        self,
        owner: str,
        limit: int,
        offset: int,
        wallet_id: int | None = None,
    ) -> list[Budget]:
        """Budgets of every wallet owned by `owner` (ownership filtered in SQL)"""
        statement = (
            select(Budget)
            .join(Wallet, Wallet.id == Budget.wallet_id)
            .where(Wallet.owner == owner)
        )
        if wallet_id is not None:
            statement = statement.where(Budget.wallet_id == wallet_id)
        statement = statement.order_by(Budget.id).limit(limit).offset(offset)
        return list(self.db.scalars(statement))

    def update_budget(self, budget_id: int, **values) -> Budget | None:
        return self._update_returning(Budget, budget_id, values)

    def delete_budget(self, budget_id: int) -> int:
        return self._execute(delete(Budget).where(Budget.id == budget_id)).rowcount
