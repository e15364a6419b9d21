"""
================================================================================
Autotest Tools
================================================================================

Shared utilities for the UI automation harness.

Modules:
    - common: Logging setup shared by the runner and the test session
    - report_tools: Allure attachment helpers

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools.allure_utils import attach_text

    init_logger(level="DEBUG")
    attach_text("Your password: abc123", name="alert dialog text")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
