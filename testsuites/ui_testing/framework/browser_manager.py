"""
================================================================================
Browser Manager
================================================================================

Browser session lifecycle management for UI automation.

Features:
    - Clean, isolated user-profile directory per test
    - Persistent Chromium context bound to that profile
    - Dialog watcher attached at launch
    - Teardown that always runs and never raises

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger
from playwright.sync_api import BrowserContext, Page, Playwright, sync_playwright

from .config import HarnessConfig
from .dialogs import DialogWatcher
from .driver_provisioner import LaunchTarget


class ProfileDirectoryError(Exception):
    """Raised when the profile directory cannot be (re)created."""
    pass


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    PROFILE_PREPARED = "profile_prepared"
    LAUNCHED = "launched"
    TORN_DOWN = "torn_down"


def prepare_profile_dir(path: Union[str, Path]) -> Path:
    """
    Reset ``path`` to an empty directory.

    Existing contents are deleted bottom-up. Entries that cannot be deleted
    (e.g. a lock file left by a crashed browser) are logged and skipped.

    Args:
        path: Profile directory

    Returns:
        The directory path

    Raises:
        ProfileDirectoryError: If the directory itself cannot be created
    """
    profile_dir = Path(path)

    if profile_dir.is_dir() and not profile_dir.is_symlink():
        for root, dirs, files in os.walk(profile_dir, topdown=False):
            for name in files:
                _delete_entry(Path(root) / name)
            for name in dirs:
                _delete_entry(Path(root) / name)
    elif profile_dir.exists() or profile_dir.is_symlink():
        _delete_entry(profile_dir)

    try:
        profile_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProfileDirectoryError(f"Failed to create profile directory {profile_dir}: {e}") from e

    logger.debug(f"Profile directory ready: {profile_dir}")
    return profile_dir


def _delete_entry(entry: Path) -> None:
    try:
        if entry.is_dir() and not entry.is_symlink():
            entry.rmdir()
        else:
            entry.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to delete file: {entry} - {e}")


def build_launch_args(config: HarnessConfig) -> List[str]:
    """Chromium arguments for a test session."""
    return [
        "--disable-dev-shm-usage",
        "--disable-gpu",
        f"--window-size={config.window_width},{config.window_height}",
        "--start-maximized",
    ]


class BrowserManager:
    """
    Owns one browser session for one test.

    Lifecycle:
        UNINITIALIZED -> PROFILE_PREPARED -> LAUNCHED -> TORN_DOWN

    ``close()`` is the unconditional finalizer: it runs at most once, logs
    errors instead of raising them, and is reached from every exit path when
    the manager is used as a context manager.

    Usage:
        with BrowserManager(config, target) as manager:
            manager.page.goto(config.alerts_page_url)
            alert = await_alert(manager.dialogs)
    """

    def __init__(
        self,
        config: HarnessConfig,
        target: Optional[LaunchTarget] = None,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ):
        """
        Initialize browser manager.

        Args:
            config: Harness configuration
            target: Provisioned browser selection (bundled Chromium if None)
            playwright_factory: Returns an object with ``start()`` -> Playwright
        """
        self.config = config
        self.target = target or LaunchTarget()
        self._playwright_factory = playwright_factory

        self._playwright: Optional[Playwright] = None
        self._context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self.dialogs: Optional[DialogWatcher] = None
        self.state = SessionState.UNINITIALIZED

    def __enter__(self) -> "BrowserManager":
        """Context manager entry - prepare profile and launch browser."""
        try:
            self.prepare_profile()
            self.launch()
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close browser."""
        self.close()

    @property
    def profile_dir(self) -> Path:
        return self.config.profile_dir

    @property
    def context(self) -> Optional[BrowserContext]:
        return self._context

    def prepare_profile(self) -> Path:
        """Reset the profile directory before launch."""
        path = prepare_profile_dir(self.profile_dir)
        self.state = SessionState.PROFILE_PREPARED
        return path

    def launch_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``launch_persistent_context``."""
        return {
            "headless": self.config.headless,
            "args": build_launch_args(self.config),
            "viewport": {
                "width": self.config.window_width,
                "height": self.config.window_height,
            },
            **self.target.launch_options(),
        }

    def launch(self) -> Page:
        """
        Start Playwright and launch a persistent context on the profile directory.

        Returns:
            The session's page
        """
        if self.state == SessionState.LAUNCHED:
            raise RuntimeError("Browser session already launched")
        if self.state == SessionState.TORN_DOWN:
            raise RuntimeError("Browser session already torn down")
        if self.state == SessionState.UNINITIALIZED:
            self.prepare_profile()

        self._playwright = self._playwright_factory().start()
        browser_type = getattr(self._playwright, self.target.browser_name)

        self._context = browser_type.launch_persistent_context(
            str(self.profile_dir),
            **self.launch_options(),
        )
        self._context.set_default_timeout(self.config.element_timeout_ms)
        self._context.set_default_navigation_timeout(self.config.navigation_timeout_ms)

        pages = self._context.pages
        self.page = pages[0] if pages else self._context.new_page()
        self.dialogs = DialogWatcher(self.page)
        self.state = SessionState.LAUNCHED

        logger.debug(
            f"Browser started: {self.target.describe()} "
            f"(headless={self.config.headless}, profile={self.profile_dir})"
        )
        return self.page

    def close(self) -> None:
        """Close the context and stop Playwright. Never raises."""
        if self.state == SessionState.TORN_DOWN:
            return

        if self._context is not None:
            try:
                self._context.close()
            except Exception as e:
                logger.warning(f"Error during browser close: {e}")

        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error during Playwright stop: {e}")

        self._context = None
        self._playwright = None
        self.page = None
        self.dialogs = None
        self.state = SessionState.TORN_DOWN
        logger.debug("Browser closed")


__all__ = [
    "BrowserManager",
    "ProfileDirectoryError",
    "SessionState",
    "build_launch_args",
    "prepare_profile_dir",
]
