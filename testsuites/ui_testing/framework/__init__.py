"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - browser_manager: Per-test browser/context/page lifecycle and screenshots
    - resource_stack: Reverse-order release of acquired handles
    - page_base: Base page object and the page capability interface
    - fixtures: pytest plugin with the browser session fixtures

Author: Automation Team
License: MIT
================================================================================
"""

from autotest_tools.common.config_loader import ConfigLoader

from .browser_manager import BrowserManager, BrowserSession, BrowserSettings, BrowserSetupError
from .page_base import BasePage, PageDriver
from .resource_stack import ResourceStack, TeardownError

__all__ = [
    "BasePage",
    "BrowserManager",
    "BrowserSession",
    "BrowserSettings",
    "BrowserSetupError",
    "ConfigLoader",
    "PageDriver",
    "ResourceStack",
    "TeardownError",
]
