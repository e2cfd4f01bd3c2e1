"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the search flow.

Each page class encapsulates:
    - Element locators
    - Page-specific actions

Author: Automation Team
License: MIT
================================================================================
"""

from .home_page import HomePage
from .results_page import ResultsPage

__all__ = [
    "HomePage",
    "ResultsPage",
]
