"""
Repository-level pytest configuration.

Why this exists:
  - Provide safe defaults for local runs (public demo sites, headless browser)
  - Register the browser fixture plugin (UI command line options included)
    here so it is available however the suite is invoked
  - Keep live-website tests opt-in: they depend on third-party pages that
    change without notice and need network access plus installed browsers
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from autotest_tools.common import init_logger


pytest_plugins = [
    "pytester",
    "testsuites.ui_testing.framework.fixtures",
]


def pytest_configure(config):
    init_logger(log_file=os.environ.get("LOG_FILE"))


def pytest_collection_modifyitems(config, items):
    """Skip live-website tests unless explicitly requested."""
    if config.getoption("--run-e2e") or os.environ.get("UI_RUN_E2E", "").lower() in ("1", "true", "yes"):
        return

    skip_live = pytest.mark.skip(reason="live website test: use --run-e2e or UI_RUN_E2E=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.

    Keeps local runs predictable.
    """
    defaults = {
        "UI_SEARCH_BASE_URL": "https://www.bing.com",
        "UI_DOCS_BASE_URL": "https://playwright.dev",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
