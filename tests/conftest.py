import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo configure_logging() so no test logs into a closed capture."""
    yield
    structlog.reset_defaults()
