"""
Test Configuration and Fixtures

This module provides:
- Environment setup that must happen before application modules are imported
- Automatic unit/integration markers based on the test path
- A throwaway SQLite database per test (aiosqlite, file based so concurrent
  sessions share it)

Architecture:
- Unit tests (test/**/unit/): use AsyncMock repositories, never touch the database
- Integration tests (test/**/integration/): real SQLAlchemy repositories
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and loguru are configured at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Default engine of the DI container; tests override it with a per-test database
    default_db = Path(tempfile.gettempdir()) / 'ticket_admission_test_default.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{default_db}'

    os.environ['TICKET_CREDENTIAL_SECRET'] = 'test-credential-secret'
    os.environ['TICKET_CREDENTIAL_PREVIOUS_SECRETS'] = ''
    os.environ.setdefault('DEBUG', 'false')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402

from src.platform.database.db_setting import Database  # noqa: E402


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        path = str(item.fspath)
        if '/unit/' in path or '\\unit\\' in path:
            item.add_marker(pytest.mark.unit)
        elif '/integration/' in path or '\\integration\\' in path:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Database
# =============================================================================
@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Fresh SQLite file database with the admission schema"""
    db = Database(db_url=f'sqlite+aiosqlite:///{tmp_path / "admission.db"}')
    await db.create_tables()
    yield db
    await db.dispose()
