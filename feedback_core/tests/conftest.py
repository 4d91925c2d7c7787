import os
import tempfile

# Settings are read once at import time, so the test environment goes first.
os.environ.setdefault("ENV", "dev")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{tempfile.mkdtemp()}/feedback-test.db"
)
os.environ.setdefault("SECRET_KEY", "feedback-test-secret-key")
os.environ.setdefault("FIRST_SUPERUSER", "admin@example.com")
os.environ.setdefault("FIRST_SUPERUSER_PASSWORD", "admin-password")
os.environ.setdefault("ENABLE_SCHEDULED_TASKS", "false")

from typing import Any, Callable, Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from feedback_core.app.config import settings
from feedback_core.app.main import app
from feedback_core.db.init_db import init_db
from feedback_core.db.session import SessionLocal
from feedback_core.tests.utils.form import sample_questions
from feedback_core.tests.utils.user import authentication_token_from_email
from feedback_core.tests.utils.utils import (
    EMAIL_TEST_OTHER_USER,
    EMAIL_TEST_USER,
    get_superuser_token_headers,
    random_short_lower_string,
)


# =============================================================================
# Core Fixtures - Database, Client, Authentication
# =============================================================================

@pytest.fixture(scope="session")
def db() -> Generator[Session, None, None]:
    """
    Database session on the throwaway SQLite database.
    Scope: session - shared across all tests.
    """
    session = SessionLocal()
    try:
        init_db(session)
        yield session
    finally:
        session.close()


@pytest.fixture(scope="module")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    FastAPI test client for making HTTP requests.
    Scope: module - one client per test module.
    """
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# User Authentication Fixtures
# =============================================================================

@pytest.fixture(scope="module")
def superuser_token_headers(client: TestClient) -> Dict[str, str]:
    """Authentication headers for superuser (admin)."""
    return get_superuser_token_headers(client)


@pytest.fixture(scope="module")
def normal_user_token_headers(client: TestClient, db: Session) -> Dict[str, str]:
    """Authentication headers for normal test user."""
    return authentication_token_from_email(client=client, email=EMAIL_TEST_USER, db=db)


@pytest.fixture(scope="module")
def other_user_token_headers(client: TestClient, db: Session) -> Dict[str, str]:
    """Authentication headers for a second normal user who owns nothing."""
    return authentication_token_from_email(
        client=client, email=EMAIL_TEST_OTHER_USER, db=db
    )


@pytest.fixture(scope="module")
def normal_user_id(client: TestClient, normal_user_token_headers: dict) -> int:
    """Normal user's database ID."""
    return client.get(
        f"{settings.API_V1_STR}/me", headers=normal_user_token_headers
    ).json()["id"]


# =============================================================================
# Form Fixtures
# =============================================================================

@pytest.fixture(scope="module")
def create_form(
    client: TestClient, normal_user_token_headers: dict
) -> Callable[..., Dict[str, Any]]:
    """
    Factory creating a form owned by the normal user through the API.
    Extra keyword arguments are merged into the request body.
    """

    def _create(
        headers: Optional[Dict[str, str]] = None, **overrides: Any
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "title": f"Test Form ({random_short_lower_string()})",
            "description": "Automated test form",
            "questions": sample_questions(),
            "is_public": True,
        }
        body.update(overrides)
        r = client.post(
            f"{settings.API_V1_STR}/forms/",
            headers=headers or normal_user_token_headers,
            json=body,
        )
        assert r.status_code == 201, r.json()
        return r.json()

    return _create
