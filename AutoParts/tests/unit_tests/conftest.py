# Unit test configuration - every test gets its own in-memory database

import pytest

from AutoParts.tests.unit_tests.test_database import create_test_engine


@pytest.fixture
def engine():
    """Fresh in-memory SQLite engine with all tables created."""
    test_engine = create_test_engine()
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def fk_engine():
    """In-memory SQLite engine that enforces foreign keys like the application engine."""
    test_engine = create_test_engine(enforce_foreign_keys=True)
    yield test_engine
    test_engine.dispose()
