"""
================================================================================
Autotest Tools
================================================================================

Support utilities for the UI suite and its runner.

Modules:
    - common: Logging setup and filesystem helpers
    - report_tools: Allure attachment helpers and report generation

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
