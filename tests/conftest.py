import sys
from pathlib import Path

import pytest

# Ensure the api/ source root is importable
_THIS_DIR = Path(__file__).resolve().parent
_API_ROOT = _THIS_DIR.parent / "api"
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))
if str(_THIS_DIR) not in sys.path:
    sys.path.insert(0, str(_THIS_DIR))

from fakes import InMemoryAcronymRepository, InMemoryStore, InMemoryUserRepository  # noqa: E402


@pytest.fixture()
def store():
    return InMemoryStore()


@pytest.fixture()
def app(store):
    from core.db import Database
    from core.dependencies import get_acronym_repository, get_user_repository
    from main import create_app

    # The pool is never opened: TestClient is used without the lifespan context.
    application = create_app(database=Database(dsn="postgresql://unused"))
    application.dependency_overrides[get_acronym_repository] = lambda: InMemoryAcronymRepository(store)
    application.dependency_overrides[get_user_repository] = lambda: InMemoryUserRepository(store)
    return application


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture()
def user(store):
    return store.add_user(name="Tim", username="timc")
