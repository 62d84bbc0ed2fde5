"""
Seed a local database with demo data: global categories, one demo user
with two wallets, a month of expenses and a few budgets.

Run:  python seed_test_data.py [seed]
Re-running with the same seed is a no-op once the demo user exists.
"""
import sys
from datetime import date, timedelta

# ── bootstrap ────────────────────────────────────────────────────
from finhelper.infrastructure.db.session import get_session_factory
from finhelper.infrastructure.db.models import Category, User
from finhelper.infrastructure.store import Store
from finhelper.utils.random_data import RandomData

from finhelper.application.users import CreateUserUseCase
from finhelper.application.wallets import CreateWalletUseCase
from finhelper.application.expenses import CreateExpenseUseCase
from finhelper.application.budgets import CreateBudgetUseCase

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "password123"
GLOBAL_CATEGORIES = ["Food", "Transport", "Housing", "Health", "Entertainment"]

seed = int(sys.argv[1]) if len(sys.argv) > 1 else 20240601
rnd = RandomData(seed=seed)

db = get_session_factory()()
store = Store(db)

if db.get(User, DEMO_USERNAME):
    print(f"User '{DEMO_USERNAME}' already exists, nothing to do")
    db.close()
    sys.exit(0)

# ═══════════════════════════════════════════════════════════════
# Phase 1: global categories (no owner, readable by everyone)
# ═══════════════════════════════════════════════════════════════
existing = {c.name: c for c in db.query(Category).filter(Category.owner.is_(None)).all()}
categories = []
for name in GLOBAL_CATEGORIES:
    category = existing.get(name) or store.create_category(name=name, owner=None)
    categories.append(category)
print(f"Global categories: {len(categories)}")

# ═══════════════════════════════════════════════════════════════
# Phase 2: user and wallets
# ═══════════════════════════════════════════════════════════════
CreateUserUseCase(db).execute(
    username=DEMO_USERNAME,
    email=f"{DEMO_USERNAME}@example.com",
    password=DEMO_PASSWORD,
    currency="RUB",
    full_name="Demo User",
)
wallets = [
    CreateWalletUseCase(db).execute(DEMO_USERNAME, name="Cash", currency="RUB"),
    CreateWalletUseCase(db).execute(DEMO_USERNAME, name="Card", currency=rnd.currency()),
]

# ═══════════════════════════════════════════════════════════════
# Phase 3: expenses for the last 30 days, budgets per category
# ═══════════════════════════════════════════════════════════════
today = date.today()
create_expense = CreateExpenseUseCase(db)
n_expenses = 0
for day in range(30):
    for _ in range(rnd.integer(0, 3)):
        wallet = wallets[rnd.integer(0, len(wallets) - 1)]
        category = categories[rnd.integer(0, len(categories) - 1)]
        create_expense.execute(
            DEMO_USERNAME,
            wallet.id,
            amount=rnd.amount(),
            expense_date=today - timedelta(days=day),
            expense_description=rnd.word(10),
            category_id=category.id,
        )
        n_expenses += 1

create_budget = CreateBudgetUseCase(db)
for category in categories[:3]:
    create_budget.execute(DEMO_USERNAME, wallets[0].id, amount=rnd.amount() * 20, category_id=category.id)

db.close()

print(f"Seeded user '{DEMO_USERNAME}' (password: {DEMO_PASSWORD})")
print(f"  Wallets:  {len(wallets)}")
print(f"  Expenses: {n_expenses}")
print("  Budgets:  3")
