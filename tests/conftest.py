"""
Pytest configuration and shared fixtures for the sysreg test suite.

The formatter is stateless between modules (one FormatContext per module),
so a single instance is shared across the session.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from sysreg.analysis.module_system.module_table import ModuleTable
from sysreg.compiler.driver import SystemFormatter
from sysreg.utils.config import FormatterOptions


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_formatter():
    """Session-scoped formatter; passes are instantiated per module, nothing leaks."""
    return SystemFormatter()


@pytest.fixture(scope="session")
def anonymous_formatter():
    """Formatter producing unnamed registrations (bundling mode)."""
    return SystemFormatter(FormatterOptions(anonymous=True))


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def formatter(session_formatter):
    return session_formatter


@pytest.fixture
def table():
    """Fresh module table: module names and ids are program-wide."""
    return ModuleTable()


def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "cli: marks tests that drive the command line entry point")
