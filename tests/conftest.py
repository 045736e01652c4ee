"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import io
from typing import Callable, List

import pytest

from attrkv.protocol.parser import ProtocolParser
from attrkv.shell import AttributeShell
from attrkv.store.lock import ReadWriteLock
from attrkv.store.store import AttributeStore


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def store() -> AttributeStore:
    """Create a fresh, empty AttributeStore."""
    return AttributeStore()


@pytest.fixture
def populated_store() -> AttributeStore:
    """
    Create a store with two keys sharing attributes x (number) and y (boolean).

        a: x=1.0, y=true
        b: x=2.0, y=false
    """
    s = AttributeStore()
    s.put("a", [("x", "1"), ("y", "true")])
    s.put("b", [("x", "2"), ("y", "false")])
    return s


@pytest.fixture
def rwlock() -> ReadWriteLock:
    """Create a ReadWriteLock."""
    return ReadWriteLock()


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a ProtocolParser instance."""
    return ProtocolParser()


# ============================================================================
# Shell Fixtures
# ============================================================================

@pytest.fixture
def shell(store: AttributeStore) -> AttributeShell:
    """Create a shell over the ``store`` fixture, without the banner."""
    return AttributeShell(store=store, banner=False)


@pytest.fixture
def run_script(shell: AttributeShell) -> Callable[[str], List[str]]:
    """
    Factory fixture that feeds a script through the shell.

    Usage:
        def test_something(run_script):
            assert run_script("put a x 1\\nkeys\\n") == ["Put is done", "a"]
    """
    def run(script: str) -> List[str]:
        out = io.StringIO()
        shell.run(io.StringIO(script), out)
        return out.getvalue().splitlines()
    return run


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
