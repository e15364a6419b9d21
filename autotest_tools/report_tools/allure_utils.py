"""
================================================================================
Allure Report Utilities
================================================================================

This module provides attachment helpers used by the UI harness to enrich
Allure test reports.

Features:
- Text attachments (dialog text, URLs)
- Screenshot attachments

================================================================================
"""

import allure


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(png: bytes, name: str = "Screenshot"):
    """
    Attach a PNG screenshot to Allure report.

    Args:
        png: Screenshot bytes
        name: Attachment name
    """
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


__all__ = [
    "attach_png",
    "attach_text",
]
