import os
import tempfile

import pytest

# must be set before goal_tracker.config is imported
_db_dir = tempfile.mkdtemp(prefix="goal_tracker_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ.pop("SQLALCHEMY_DATABASE_URL", None)


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient
    from goal_tracker.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(client):
    response = client.post("/users", json={"name": "Ada"})
    assert response.status_code == 201
    return response.json()
