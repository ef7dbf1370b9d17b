"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import create_test_engine, drop_test_tables


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_session():
    """
    Function-scoped Session on a fresh database.

    Defaults to a temporary SQLite file; set TEST_DATABASE_URL to run the same
    tests against PostgreSQL.
    """
    from sqlalchemy.orm import sessionmaker

    engine = create_test_engine()
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        drop_test_tables(engine)
        engine.dispose()
