"""
Pytest configuration and fixtures for tests.

Every test runs against its own in-memory SQLite database; the environment
is set before any catalog_service module reads its configuration.
"""

import os
import tempfile

os.environ.setdefault("ENV", "test")
os.environ.setdefault("CONSOLE_LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "catalog-service-test-logs"))
os.environ.setdefault("CATALOG_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from catalog_service.domain.models import Category
from catalog_service.domain.tree import find_sub_category
from catalog_service.infrastructure.database.seed import (
    preconfigured_categories,
    seed_catalog,
)
from catalog_service.infrastructure.database.session import build_engine, get_session


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        seed_catalog(session)
        yield session


@pytest.fixture
def technology() -> Category:
    """In-memory copy of the seeded "1.1" category."""
    return next(c for c in preconfigured_categories() if c.id == "1.1")


@pytest.fixture
def client(engine):
    from catalog_service.main import app

    def override_get_session():
        with Session(engine) as session:
            yield session

    with Session(engine) as session:
        seed_catalog(session)

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def product_id_by_name():
    """Look up a generated product id inside a fetched category."""

    def lookup(category: Category, sub_category_id: str, name: str) -> str:
        node = find_sub_category(category, sub_category_id)
        assert node is not None, f"{sub_category_id} not in {category.id}"
        return next(p.id for p in node.products if p.name == name)

    return lookup
