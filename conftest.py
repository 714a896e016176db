"""
Repository-level pytest configuration.

What lives here:
  - Command line options shared by every suite (`--run-e2e`, `--headed`, ...)
  - One-time logger setup
  - The `pytester` plugin used by the unit suite

Live storefront scenarios are opt-in: they need network access to the
storefront and installed Playwright browsers. Enable them with `--run-e2e`
or `UI_RUN_E2E=true`.
"""

from __future__ import annotations

import os
from typing import Generator

import pytest

from testsuites.ui_testing.framework.config_loader import init_logger

pytest_plugins = ["pytester"]


def pytest_addoption(parser):
    group = parser.getgroup("storefront", "Storefront UI suite")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run live browser scenarios against the storefront",
    )
    group.addoption(
        "--storefront-url",
        action="store",
        default=None,
        help="Storefront base URL (overrides ui.base_url / UI_BASE_URL)",
    )
    group.addoption(
        "--browser-type",
        action="store",
        default=None,
        choices=["chromium", "firefox", "webkit"],
        help="Browser engine for live scenarios",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Show the browser window",
    )


def pytest_configure(config):
    # Command line wins over YAML; ConfigLoader reads these overrides.
    url = config.getoption("--storefront-url")
    if url:
        os.environ["UI_BASE_URL"] = url
    if config.getoption("--browser-type"):
        os.environ["BROWSER_TYPE"] = config.getoption("--browser-type")
    if config.getoption("--headed"):
        os.environ["BROWSER_HEADLESS"] = "false"
    if config.getoption("--run-e2e"):
        os.environ["UI_RUN_E2E"] = "true"


@pytest.fixture(scope="session", autouse=True)
def _session_logger() -> Generator[None, None, None]:
    """Configure loguru once for the whole run."""
    init_logger()
    yield
