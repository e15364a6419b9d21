"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based interaction reliability layer for UI scenarios.

Components:
    - config: Immutable harness configuration loaded from YAML + environment
    - driver_provisioner: Browser version pin resolution and installation
    - browser_manager: Per-test browser session and profile lifecycle
    - element_actions: Script-injected click and element interactions
    - dialogs: Native dialog watcher, bounded alert wait, token extraction
    - wait_helpers: Wait budgets and the bounded polling loop

Author: Automation Team
License: MIT
================================================================================
"""

from .config import ConfigurationError, HarnessConfig, load_config
from .driver_provisioner import LaunchTarget, ProvisioningError, provision_browser
from .browser_manager import BrowserManager, ProfileDirectoryError, prepare_profile_dir
from .element_actions import ElementActions, ElementNotFoundError
from .dialogs import (
    AlertClosedError,
    AlertHandle,
    AlertTimeoutError,
    DialogWatcher,
    accept_alert_if_present,
    await_alert,
    extract_token,
)
from .page_base import BasePage
from .wait_helpers import WaitBudget, WaitTimeoutError

__all__ = [
    "AlertClosedError",
    "AlertHandle",
    "AlertTimeoutError",
    "BasePage",
    "BrowserManager",
    "ConfigurationError",
    "DialogWatcher",
    "ElementActions",
    "ElementNotFoundError",
    "HarnessConfig",
    "LaunchTarget",
    "ProfileDirectoryError",
    "ProvisioningError",
    "WaitBudget",
    "WaitTimeoutError",
    "accept_alert_if_present",
    "await_alert",
    "extract_token",
    "load_config",
    "prepare_profile_dir",
    "provision_browser",
]
