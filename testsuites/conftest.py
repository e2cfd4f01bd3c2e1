"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the project-wide markers and tags collected items by suite.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against live websites (opt-in)"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests that run against fakes"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "search: Tests related to the search engine flow"
    )
    config.addinivalue_line(
        "markers", "docs: Tests related to the playwright.dev documentation site"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add suite markers based on the test location."""
    for item in items:
        if "ui_testing" in str(item.path):
            item.add_marker(pytest.mark.ui)

        if item.path.parent.name == "unit":
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Search Flow UI Automation Suite",
        "=" * 60,
        "",
    ]
