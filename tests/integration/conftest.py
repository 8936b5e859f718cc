import pytest

from docsync.config.settings import Settings
from fake_backend import FakeBackend


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def slow_poll_settings(fast_settings: Settings) -> Settings:
    """Fast upload reset but a timer that never fires during a test."""
    return fast_settings.model_copy(update={"refresh_interval_seconds": 60})
