"""
tests/conftest.py

Shared pytest fixtures available to all test modules.

Fixtures defined here are auto-discovered by pytest — no import needed.
Every client gets its own app instance whose upload root lives under the
test's tmp_path, so tests never write into the working directory.
"""

from contextlib import ExitStack
from pathlib import Path
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.intake.policy import UploadPolicy
from app.main import create_app


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


def make_settings(upload_root: Path, **overrides) -> Settings:
    """Settings isolated from the process environment and any .env file."""
    values = {
        "upload_root": upload_root,
        "allowed_file_types": None,
        "max_file_size": None,
        "debug": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# ── Client fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def make_client(upload_root: Path) -> Callable[..., TestClient]:
    """
    Factory for TestClients with custom settings, e.g.

        client = make_client(max_file_size="1KB")

    The lifespan (directory provisioning, policy) runs on creation.
    """
    with ExitStack() as stack:

        def _make(policy: Optional[UploadPolicy] = None, **overrides) -> TestClient:
            app = create_app(make_settings(upload_root, **overrides), policy=policy)
            return stack.enter_context(TestClient(app, raise_server_exceptions=False))

        yield _make


@pytest.fixture
def client(make_client) -> TestClient:
    """A client running with the default upload policy."""
    return make_client()
