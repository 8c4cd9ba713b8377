"""
Shared pytest fixtures for roachcli tests.

Provides a fresh runtime context per test, a click runner, a CLI tree bound
to that context, and isolation for environment variables and logging.
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Put `src/` first so `import roachcli` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from roachcli.core.context import Context, reset_context_for_tests  # noqa: E402


# ============================================================================
# Context Fixtures
# ============================================================================

@pytest.fixture
def context() -> Context:
    """A context holding only built-in defaults."""
    return Context()


@pytest.fixture(autouse=True)
def reset_global_context():
    """Drop the process-wide context before and after each test."""
    reset_context_for_tests()
    yield
    reset_context_for_tests()


# ============================================================================
# CLI Fixtures
# ============================================================================

@pytest.fixture
def runner():
    """click test runner for invoking the bound command tree."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli(context):
    """Command tree with every flag bound to the `context` fixture."""
    from roachcli.cli.main import build_cli

    return build_cli(context)


# ============================================================================
# Logging and Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def suppress_logging():
    """Route roachcli log helpers to a mock so tests can assert on them."""
    with patch("roachcli.core.utils.logger.get_logger") as mock_logger:
        mock_log = MagicMock()
        mock_logger.return_value = mock_log
        yield mock_log


@pytest.fixture(autouse=True)
def clean_environment():
    """Remove COCKROACH_* variables for the duration of each test."""
    original_env = os.environ.copy()
    for key in [key for key in os.environ if key.startswith("COCKROACH_")]:
        del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)
