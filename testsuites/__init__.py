"""
Test suites package.

Kept importable so that `run_tests.py`, the unit tests and IDEs can reach
the UI framework and page objects as `testsuites.ui_testing.*`.

Live-website tests are opt-in; see the `e2e` marker in the root conftest.
"""
