"""Global pytest fixtures for PERSISTKIT."""

from __future__ import annotations

from pathlib import Path

import pytest

from persistkit import config

pytest_plugins = [
    "tests.fixtures.sqlite",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real environment overrides from leaking into configuration tests."""
    for key in config.RECOGNIZED_KEYS:
        monkeypatch.delenv(config.env_var_name(key), raising=False)
    monkeypatch.delenv(config.CONFIG_PATH_ENVVAR, raising=False)


TESTS_ROOT = Path(__file__).parent.resolve()
LAYER_MARKERS = ("unit", "integration", "e2e")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]  # pylint: disable=redefined-outer-name,unused-argument
) -> None:
    """Mark each test with the layer directory it lives in (unit/integration/e2e)."""
    for item in items:
        relative = item.path.resolve().relative_to(TESTS_ROOT)
        layer = relative.parts[0] if len(relative.parts) > 1 else None
        if layer in LAYER_MARKERS and not any(
            marker.name == layer for marker in item.iter_markers()
        ):
            item.add_marker(getattr(pytest.mark, layer))
