"""
================================================================================
Alerts Page Object
================================================================================

Password flow driven through native dialogs:
  1. "Get password" raises an alert carrying the password
  2. "Enter password" raises a prompt that takes it back
  3. On success a "Great!" label and a "Return to menu" button appear;
     returning to the menu may raise a confirmation

All buttons are clicked through injected script: the dialogs they raise block
the page, and native clicks on them are unreliable.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.config import ALERTS_PAGE_SUFFIX
from testsuites.ui_testing.framework.dialogs import extract_token
from testsuites.ui_testing.framework.page_base import BasePage


class AlertsPage(BasePage):
    """Alerts page object."""

    URL_SUFFIX = ALERTS_PAGE_SUFFIX

    GET_PASSWORD_BUTTON = "xpath=//button[text()='Get password']"
    ENTER_PASSWORD_BUTTON = "xpath=//button[text()='Enter password']"
    SUCCESS_LABEL = "xpath=//label[text()='Great!']"
    RETURN_TO_MENU_BUTTON = "xpath=//button[text()='Return to menu']"

    @allure.step("Open alerts page")
    def open(self) -> "AlertsPage":
        self.navigate()
        return self

    @allure.step("Get password from alert")
    def get_password_text(self) -> str:
        """Trigger the password alert, accept it and return its raw text."""
        self.click_via_script(self.GET_PASSWORD_BUTTON)
        alert = self.await_alert()
        text = alert.text
        alert.accept()
        return text

    def get_password(self, corrupt: bool = False) -> str:
        """
        Read the password from the alert.

        Args:
            corrupt: Append a character to the alert text before extraction,
                     producing a wrong password for negative scenarios
        """
        text = self.get_password_text()
        if corrupt:
            text += "1"
        password = extract_token(text)
        logger.info(f"Password extracted ({len(password)} chars)")
        return password

    @allure.step("Enter password into prompt")
    def enter_password(self, password: str) -> None:
        self.click_via_script(self.ENTER_PASSWORD_BUTTON)
        prompt = self.await_alert()
        prompt.send_keys(password)
        prompt.accept()

    def is_success_shown(self) -> bool:
        return self.is_present(self.SUCCESS_LABEL)

    def is_return_to_menu_shown(self) -> bool:
        return self.is_present(self.RETURN_TO_MENU_BUTTON)

    @allure.step("Return to menu")
    def return_to_menu(self) -> Optional[str]:
        """
        Click "Return to menu" and accept the confirmation if it appears.

        Returns:
            Confirmation text, or None if no confirmation was shown
        """
        self.click_via_script(self.RETURN_TO_MENU_BUTTON)
        return self.accept_alert_if_present()
