"""Library exceptions for the eventharness package."""

from __future__ import annotations


class HarnessError(Exception):
    """Base exception for eventharness library."""

    pass


class EventBusError(HarnessError):
    """Raised when there's an error in the event bus."""

    pass


class ExternalDeliveryError(HarnessError):
    """Raised when an external producer or command bus rejects an item."""

    def __init__(self, item_type: str, message: str) -> None:
        self.item_type = item_type
        super().__init__(f"External delivery failed for {item_type}: {message}")


class AssertionUnmetError(HarnessError, AssertionError):
    """
    Raised when an eventual assertion exhausts its retry budget.

    Subclasses AssertionError so test runners report it as a failed
    assertion rather than an error.

    Attributes:
        event_type: Name of the event class that was being looked for
        found: Number of events of that type satisfying the predicate
            at the last evaluation
        expected: Number of matches required (always 1)
        attempts: Number of evaluations performed before giving up
    """

    def __init__(
        self,
        event_type: str,
        found: int,
        expected: int = 1,
        attempts: int = 1,
    ) -> None:
        self.event_type = event_type
        self.found = found
        self.expected = expected
        self.attempts = attempts
        super().__init__(
            f"Expected exactly {expected} {event_type} event(s) matching the predicate, "
            f"but found {found} after {attempts} attempt(s)"
        )


__all__ = [
    "HarnessError",
    "EventBusError",
    "ExternalDeliveryError",
    "AssertionUnmetError",
]
