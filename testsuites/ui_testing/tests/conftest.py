"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI scenarios, providing fixtures for
configuration, browser provisioning, per-test sessions and page objects.

Key Features:
- Configuration loaded once; missing configuration aborts the run
- Browser provisioned once per run
- One isolated browser session per test, always torn down
- Screenshot capture on failure

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger

from autotest_tools.common import init_logger
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.config import ConfigurationError, HarnessConfig, load_config
from testsuites.ui_testing.framework.driver_provisioner import (
    LaunchTarget,
    ProvisioningError,
    provision_browser,
)
from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.pages.alerts_page import AlertsPage
from testsuites.ui_testing.pages.table_page import TablePage


# ================================================================================
# Configuration & Provisioning Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def harness_config() -> HarnessConfig:
    """
    Session-scoped configuration.

    A missing or invalid configuration is a precondition failure for every
    scenario, so the whole run stops here.
    """
    try:
        config = load_config()
    except ConfigurationError as e:
        pytest.exit(f"Configuration error: {e}", returncode=2)

    init_logger(level=config.log_level, log_file=config.log_file)
    logger.info(f"Target: {config.base_url} (browser.version={config.browser_version or '<latest>'})")
    return config


@pytest.fixture(scope="session")
def launch_target(harness_config: HarnessConfig) -> LaunchTarget:
    """Resolve and install the browser once for the whole run."""
    try:
        return provision_browser(
            harness_config.browser_version,
            auto_install=harness_config.auto_install,
        )
    except ProvisioningError as e:
        pytest.exit(f"Browser provisioning failed: {e}", returncode=2)


# ================================================================================
# Browser Session Fixtures
# ================================================================================

@pytest.fixture(scope="function")
def browser_session(
    harness_config: HarnessConfig,
    launch_target: LaunchTarget,
) -> Generator[BrowserManager, None, None]:
    """
    Function-scoped browser session.

    Resets the profile directory, launches the browser on it and closes it after
    the test whatever the outcome.
    """
    with BrowserManager(harness_config, launch_target) as session:
        yield session


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def alerts_page(browser_session: BrowserManager) -> AlertsPage:
    """Provides AlertsPage bound to the test's session."""
    return AlertsPage.from_session(browser_session)


@pytest.fixture
def table_page(browser_session: BrowserManager) -> TablePage:
    """Provides TablePage bound to the test's session."""
    return TablePage.from_session(browser_session)


@pytest.fixture
def table_test_data():
    """
    Provides data for the table scenario.
    """
    return {
        "countries_to_delete": ("UK", "Germany"),
        "records_to_add": 10,
    }


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Automatically takes a screenshot when a UI scenario fails and attaches
    it to the Allure report, before the session is torn down.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        session = getattr(item, "funcargs", {}).get("browser_session")
        if session is not None and session.page is not None:
            try:
                ElementActions(session.page).take_screenshot(
                    "failure_screenshot",
                    full_page=True,
                    timeout=session.config.navigation_timeout_ms,
                )
                allure.attach(
                    session.page.url,
                    name="Current URL",
                    attachment_type=allure.attachment_type.TEXT,
                )
            except Exception as e:
                # Log but don't fail if screenshot capture fails
                logger.warning(f"Failed to capture screenshot on failure: {e}")
