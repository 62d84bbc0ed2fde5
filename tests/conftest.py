"""
Pytest fixtures for testing
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from finhelper.api.deps import get_db
from finhelper.auth import access_token_ttl, get_token_maker, hash_password
from finhelper.infrastructure.db import models  # noqa: F401
from finhelper.infrastructure.db.models import Category, User, Wallet
from finhelper.infrastructure.db.session import Base
from finhelper.main import app
from finhelper.utils.random_data import RandomData


@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads (TestClient runs handlers in a pool)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite enforces foreign keys only when asked to
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="session")
def rnd_seed() -> int:
    return 20240601


@pytest.fixture
def rnd(rnd_seed) -> RandomData:
    """Seeded generator: reruns produce the same fixture data"""
    return RandomData(seed=rnd_seed)


@pytest.fixture
def make_user(db_session, rnd):
    def _make(username: str | None = None, password: str = "secret123") -> User:
        user = User(
            username=username or rnd.username(),
            email=rnd.email(),
            hashed_password=hash_password(password),
            currency=rnd.currency(),
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make


@pytest.fixture
def make_wallet(db_session, rnd):
    def _make(owner: str, name: str | None = None, currency: str = "USD") -> Wallet:
        wallet = Wallet(owner=owner, name=name or rnd.word(8), currency=currency)
        db_session.add(wallet)
        db_session.commit()
        return wallet
    return _make


@pytest.fixture
def make_category(db_session, rnd):
    def _make(owner: str | None, name: str | None = None) -> Category:
        category = Category(owner=owner, name=name or rnd.word(8))
        db_session.add(category)
        db_session.commit()
        return category
    return _make


@pytest.fixture
def alice(make_user) -> User:
    return make_user("alice")


@pytest.fixture
def bob(make_user) -> User:
    return make_user("bob")


@pytest.fixture
def client(db_session):
    """Test client with get_db bound to the test session"""
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a username"""
    def _headers(username: str) -> dict:
        token, _ = get_token_maker().create_token(username, access_token_ttl())
        return {"Authorization": f"Bearer {token}"}
    return _headers
