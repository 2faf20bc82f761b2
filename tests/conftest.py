"""Top-level pytest configuration for sinklog tests."""

from __future__ import annotations

import pytest


def pytest_configure(config: pytest.Config) -> None:  # pragma: no cover - configuration hook
    """Register global markers used across the repository."""

    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "logging: Logger focused tests")
    config.addinivalue_line("markers", "concurrency: Multi-threaded tests")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Ensure sensible default markers based on collection context."""

    for item in items:
        if "tests/unit" in str(item.fspath).replace("\\", "/"):
            item.add_marker(pytest.mark.unit)
