"""
Pytest fixtures for course catalog tests.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from catalog.database import build_engine, build_session_maker, create_schema
from catalog.kernel.identity.jwt import IdentityTokenManager
from catalog.kernel.types import CoursePayload
from catalog.services.catalog_service import CatalogService


class StepClock:
    """Deterministic clock: returns 1000, 2000, 3000, ... on each call."""

    def __init__(self, start: int = 1000, step: int = 1000):
        self.value = start - step
        self.step = step

    def __call__(self) -> int:
        self.value += self.step
        return self.value


@pytest.fixture
def database_url(tmp_path) -> str:
    """A fresh SQLite file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog_test.db'}"


@pytest_asyncio.fixture(scope="function")
async def db_engine(database_url) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with the catalog schema."""
    engine = build_engine(database_url)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return build_session_maker(db_engine)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def service(session_maker, clock) -> CatalogService:
    """Catalog service with default policy and a step clock."""
    return CatalogService(session_maker, clock=clock)


@pytest.fixture
def strict_service(session_maker, clock) -> CatalogService:
    """Catalog service that refuses to ban creators without courses."""
    return CatalogService(session_maker, ban_requires_existing_records=True, clock=clock)


@pytest.fixture
def token_manager() -> IdentityTokenManager:
    """Create a token manager for tests."""
    return IdentityTokenManager(
        secret_key="test-secret-key-for-testing-only",
        algorithm="HS256",
        access_token_expire_minutes=30,
    )


def make_payload(**overrides) -> CoursePayload:
    """A complete course payload; override any field by keyword."""
    data = {
        "title": "Intro to Rust",
        "creator_name": "Alice",
        "body": "Ownership, borrowing and lifetimes.",
        "attachment_url": "https://example.com/rust.pdf",
        "keyword": "rust",
        "category": "programming",
        "contact": "alice@example.com",
    }
    data.update(overrides)
    return CoursePayload(**data)


@pytest.fixture
def sample_course_data() -> dict:
    """Sample course creation body for HTTP tests."""
    return make_payload().model_dump()
