"""
pytest Fixtures for BookShelf API Tests

Shared fixtures:
- engine / db_session: SQLite in-memory database, one rolled-back
  transaction per test
- client: TestClient with get_db overridden to use db_session
- hasher / token_service: The instances the app itself uses
- sample_user, second_user, sample_book, sample_review: Test data
- auth_headers: Builds "Authorization: Bearer <token>" for a user
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# JWT_SECRET is required at startup; bcrypt runs at its minimum cost so
# the suite stays fast.
import os

os.environ["JWT_SECRET"] = "test-jwt-secret-for-unit-tests-at-least-32-characters"
os.environ["JWT_EXPIRE"] = "7d"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

from collections.abc import Callable, Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookshelf.database import Base, get_db, json_serializer
from bookshelf.main import app
from bookshelf.models import Book, Review, User
from bookshelf.services.security import PasswordHasher, TokenService

TEST_PASSWORD = "SecurePass123"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    SQLite in-memory engine shared by the whole session.

    StaticPool keeps the single connection alive; without it the in-memory
    database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        json_serializer=json_serializer,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Fresh session per test, inside a transaction that is rolled back
    afterwards so tests never see each other's data.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """TestClient whose requests use the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================
@pytest.fixture
def hasher() -> PasswordHasher:
    return app.state.password_hasher


@pytest.fixture
def token_service() -> TokenService:
    return app.state.token_service


@pytest.fixture
def auth_headers(token_service: TokenService) -> Callable[[User], dict]:
    """Return a function that builds an Authorization header for a user."""

    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {token_service.issue(user.id)}"}

    return _headers


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
def _make_user(db: Session, hasher: PasswordHasher, username: str, email: str) -> User:
    user = User.with_password(
        hasher,
        username=username,
        email=email,
        password=TEST_PASSWORD,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def sample_user(db_session: Session, hasher: PasswordHasher) -> User:
    return _make_user(db_session, hasher, "reader", "reader@example.com")


@pytest.fixture
def second_user(db_session: Session, hasher: PasswordHasher) -> User:
    return _make_user(db_session, hasher, "critic", "critic@example.com")


@pytest.fixture
def sample_book(db_session: Session, sample_user: User) -> Book:
    book = Book(
        title="1984",
        author="George Orwell",
        isbn="9780451524935",
        description="A dystopian novel set in a totalitarian society.",
        published_date=date(1949, 6, 8),
        genres=["Dystopian", "Classics"],
        added_by_id=sample_user.id,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def sample_review(db_session: Session, sample_book: Book, second_user: User) -> Review:
    review = Review(
        book_id=sample_book.id,
        author_id=second_user.id,
        rating=4,
        review="Bleak and brilliant.",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review
