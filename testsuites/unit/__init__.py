"""Framework tests that run against in-memory Playwright fakes."""
