"""
================================================================================
Base Page Object
================================================================================

Foundation class for the page objects.

Provides:
    - Navigation to the page URL derived from configuration
    - Script-injected clicks and element actions
    - Dialog waits bound to the session's budgets

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.sync_api import Page

from .browser_manager import BrowserManager
from .config import HarnessConfig
from .dialogs import AlertHandle, DialogWatcher, accept_alert_if_present, await_alert
from .element_actions import ElementActions


class BasePage:
    """
    Base class for all page objects.

    Subclasses define ``URL_SUFFIX``, appended verbatim to ``base.url``.

    Usage:
        class AlertsPage(BasePage):
            URL_SUFFIX = "alerts"
    """

    # Override in subclasses
    URL_SUFFIX: str = ""

    def __init__(
        self,
        page: Page,
        config: HarnessConfig,
        dialogs: Optional[DialogWatcher] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            config: Harness configuration (base URL and wait budgets)
            dialogs: Dialog watcher of the session; created if not given
        """
        self.page = page
        self.config = config
        self.dialogs = dialogs or DialogWatcher(page)
        self.actions = ElementActions(page, default_timeout=config.element_timeout_ms)

    @classmethod
    def from_session(cls, session: BrowserManager) -> "BasePage":
        """Build the page object on a launched session."""
        return cls(session.page, session.config, session.dialogs)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return self.config.base_url + self.URL_SUFFIX

    def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.url}"):
            self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    def click_via_script(self, selector: str) -> None:
        self.actions.click_via_script(selector)

    def is_present(self, selector: str) -> bool:
        """True if at least one element matches right now."""
        return self.actions.count(selector) > 0

    def await_alert(self) -> AlertHandle:
        """Wait for a dialog with the configured alert budget."""
        return await_alert(self.dialogs, self.config.alert_wait)

    def accept_alert_if_present(self) -> Optional[str]:
        """Accept a dialog if one shows up within the instant budget."""
        return accept_alert_if_present(self.dialogs, self.config.instant_wait)


__all__ = [
    "BasePage",
]
