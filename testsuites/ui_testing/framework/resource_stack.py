"""
================================================================================
Resource Stack
================================================================================

Scoped ownership of Playwright handles for a single test.

Resources are pushed in acquisition order (driver, browser, context, page)
and released in reverse. Every release is attempted even when an earlier
one fails; the first failure is re-raised once unwinding is complete.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from loguru import logger


ReleaseCallback = Callable[[], Awaitable[Any]]


class TeardownError(Exception):
    """Raised after unwinding when at least one resource failed to release."""

    def __init__(self, resource_name: str, original: BaseException, failures: int = 1):
        self.resource_name = resource_name
        self.original = original
        self.failures = failures
        super().__init__(
            f"Failed to release '{resource_name}': {original!r}"
            + (f" ({failures - 1} more release error(s) logged)" if failures > 1 else "")
        )


@dataclass
class _Entry:
    name: str
    release: ReleaseCallback


class ResourceStack:
    """
    LIFO stack of async release callbacks.

    Usage:
        stack = ResourceStack()
        browser = await launcher.launch()
        stack.push("browser", browser.close)
        ...
        await stack.unwind()   # closes in reverse order
    """

    def __init__(self) -> None:
        self._entries: List[_Entry] = []
        self._released: List[str] = []

    def push(self, name: str, release: ReleaseCallback) -> None:
        """Register a release callback for a newly acquired resource."""
        self._entries.append(_Entry(name=name, release=release))
        logger.debug(f"Acquired resource: {name}")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self._entries)

    @property
    def names(self) -> List[str]:
        """Names of resources still held, in acquisition order."""
        return [entry.name for entry in self._entries]

    @property
    def released(self) -> List[str]:
        """Names of resources released so far, in release order."""
        return list(self._released)

    async def unwind(self) -> None:
        """
        Release all resources in reverse acquisition order.

        Raises:
            TeardownError: wrapping the first failure, after every release
                has been attempted.
        """
        first_failure: Optional[Tuple[str, Exception]] = None
        failures = 0

        while self._entries:
            entry = self._entries.pop()
            try:
                await entry.release()
                self._released.append(entry.name)
                logger.debug(f"Released resource: {entry.name}")
            except Exception as e:
                failures += 1
                logger.error(f"Error releasing {entry.name}: {e!r}")
                if first_failure is None:
                    first_failure = (entry.name, e)

        if first_failure is not None:
            name, error = first_failure
            raise TeardownError(name, error, failures) from error


__all__ = [
    "ResourceStack",
    "TeardownError",
]
