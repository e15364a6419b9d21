"""
================================================================================
Page Objects
================================================================================

Page objects for the two pages exercised by the UI scenarios.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .alerts_page import AlertsPage
from .table_page import TablePage

__all__ = [
    "AlertsPage",
    "TablePage",
]
