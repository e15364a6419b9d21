"""
================================================================================
Native Dialog Handling
================================================================================

Alert / confirm / prompt handling for script-triggered dialogs.

Playwright delivers native dialogs as page events. The DialogWatcher keeps the
dialog that is currently showing so that callers can poll for it: "no dialog yet"
is a plain None, not an exception.

Features:
    - Per-session dialog watcher
    - Alert handles that know when they are spent
    - Bounded polling wait for a dialog to appear
    - Optional-dialog handling for "may or may not appear" checks
    - Token extraction from dialog text

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Optional, Pattern

from loguru import logger
from playwright.sync_api import Dialog, Page

from autotest_tools.report_tools.allure_utils import attach_text
from .wait_helpers import WaitBudget, WaitTimeoutError, get_wait_budget, poll_until


# Matches "password: abc123" / "Пароль abc123" and captures the token
PASSWORD_PATTERN: Pattern[str] = re.compile(r"(?:password|пароль)[: ]*(\w+)", re.IGNORECASE)


class AlertTimeoutError(WaitTimeoutError):
    """Raised when no native dialog appears within the wait budget."""
    pass


class AlertClosedError(Exception):
    """Raised when a spent alert handle is used again."""
    pass


class AlertHandle:
    """
    Handle to a native dialog that is currently showing.

    Valid until accepted or dismissed. Text for prompts is collected with
    ``send_keys()`` and submitted on ``accept()``.
    """

    def __init__(self, dialog: Dialog, watcher: "DialogWatcher"):
        self._dialog = dialog
        self._watcher = watcher
        self._prompt_text: Optional[str] = None
        self._closed = False

    @property
    def text(self) -> str:
        self._ensure_open()
        return self._dialog.message

    @property
    def kind(self) -> str:
        """Dialog type: alert, confirm, prompt or beforeunload."""
        return self._dialog.type

    @property
    def is_open(self) -> bool:
        return not self._closed

    def send_keys(self, text: str) -> None:
        self._ensure_open()
        self._prompt_text = text

    def accept(self) -> None:
        self._ensure_open()
        logger.debug(f"Accepting {self.kind} dialog")
        try:
            if self._prompt_text is not None:
                self._dialog.accept(self._prompt_text)
            else:
                self._dialog.accept()
        finally:
            self._close()

    def dismiss(self) -> None:
        self._ensure_open()
        logger.debug(f"Dismissing {self.kind} dialog")
        try:
            self._dialog.dismiss()
        finally:
            self._close()

    def _close(self) -> None:
        self._closed = True
        self._watcher.release(self._dialog)

    def _ensure_open(self) -> None:
        if self._closed:
            raise AlertClosedError(f"{self.kind} dialog was already handled")


class DialogWatcher:
    """
    Tracks the native dialog currently showing on a page.

    Must be attached before the action that raises the dialog. With a listener
    registered Playwright no longer auto-dismisses dialogs, so every observed
    dialog has to be accepted or dismissed through its handle.

    Usage:
        watcher = DialogWatcher(page)
        click_via_script(...)
        alert = await_alert(watcher)
        alert.accept()
    """

    def __init__(self, page: Page):
        self.page = page
        self._pending: Optional[Dialog] = None
        self._handle: Optional[AlertHandle] = None
        page.on("dialog", self._on_dialog)

    def _on_dialog(self, dialog: Dialog) -> None:
        logger.debug(f"Dialog opened ({dialog.type}): {dialog.message!r}")
        self._pending = dialog
        self._handle = None

    def current(self) -> Optional[AlertHandle]:
        """Return a handle to the showing dialog, or None if there is none."""
        if self._pending is None:
            return None
        if self._handle is None:
            self._handle = AlertHandle(self._pending, self)
        return self._handle

    def release(self, dialog: Dialog) -> None:
        """Forget ``dialog`` once it has been handled."""
        if self._pending is dialog:
            self._pending = None
            self._handle = None

    def detach(self) -> None:
        self.page.remove_listener("dialog", self._on_dialog)
        self._pending = None
        self._handle = None


def _page_sleep(page: Page):
    """Sleep through Playwright so dialog events keep being dispatched."""
    def sleep(seconds: float) -> None:
        page.wait_for_timeout(seconds * 1000)
    return sleep


def await_alert(
    watcher: DialogWatcher,
    budget: Optional[WaitBudget] = None,
) -> AlertHandle:
    """
    Wait for a native dialog to appear.

    Args:
        watcher: Dialog watcher of the session
        budget: Wait budget; defaults to the "alert" budget

    Returns:
        Handle to the dialog, as soon as one is observed

    Raises:
        AlertTimeoutError: If no dialog appears within the budget
    """
    budget = budget or get_wait_budget("alert")
    alert = poll_until(
        watcher.current,
        budget,
        description="native dialog",
        sleep=_page_sleep(watcher.page),
        error_cls=AlertTimeoutError,
    )
    text = alert.text
    logger.info(f"Dialog present ({alert.kind}): {text!r}")
    attach_text(text, name=f"{alert.kind} dialog text")
    return alert


def accept_alert_if_present(
    watcher: DialogWatcher,
    budget: Optional[WaitBudget] = None,
) -> Optional[str]:
    """
    Accept a dialog if one shows up within a short budget.

    A timeout is the expected outcome here, not a failure.

    Returns:
        The accepted dialog's text, or None if no dialog appeared
    """
    budget = budget or get_wait_budget("instant")
    try:
        alert = await_alert(watcher, budget)
    except AlertTimeoutError as e:
        logger.debug(f"No dialog within {e.elapsed:.2f}s, continuing")
        return None

    text = alert.text
    alert.accept()
    return text


def extract_token(text: str, pattern: Pattern[str] = PASSWORD_PATTERN) -> str:
    """
    Extract the token following a label in dialog text.

    Args:
        text: Dialog text
        pattern: Compiled pattern whose first group captures the token

    Returns:
        The captured token, or ``text`` unchanged if the pattern does not match
    """
    match = pattern.search(text)
    return match.group(1) if match else text


__all__ = [
    "AlertClosedError",
    "AlertHandle",
    "AlertTimeoutError",
    "DialogWatcher",
    "PASSWORD_PATTERN",
    "accept_alert_if_present",
    "await_alert",
    "extract_token",
]
