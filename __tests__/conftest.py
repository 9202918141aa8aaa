import pytest

from richview.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; tests that patch the environment need a fresh read."""
    reset_settings()
    yield
    reset_settings()
