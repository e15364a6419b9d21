"""
Repository-level pytest configuration.

Why this exists:
  - Register the `--run-ui` switch; UI scenarios need a real browser and a
    reachable target site, so they only run when asked for

Important:
  The default `base.url` in `config/application.yaml` is a placeholder.
  Override it with `BASE_URL` or `run_tests.py --base-url`.
"""

from __future__ import annotations

import os

import pytest


RUN_UI_ENV = "RUN_UI_TESTS"


def pytest_addoption(parser):
    parser.addoption(
        "--run-ui",
        action="store_true",
        default=False,
        help="Run browser-driven UI scenarios (also enabled by RUN_UI_TESTS=1)",
    )


def ui_enabled(config) -> bool:
    return bool(config.getoption("--run-ui")) or os.getenv(RUN_UI_ENV, "") in ("1", "true", "yes")


def pytest_collection_modifyitems(config, items):
    """Skip UI scenarios unless they were requested."""
    if ui_enabled(config):
        return

    skip_ui = pytest.mark.skip(reason="UI scenarios need --run-ui (or RUN_UI_TESTS=1)")
    for item in items:
        if "ui_testing" in str(item.fspath):
            item.add_marker(skip_ui)

