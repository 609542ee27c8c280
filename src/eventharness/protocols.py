"""
Handler protocols for the eventharness library.

Protocols:
- EventHandler: Async handler for events
- SyncEventHandler: Sync handler for events
- FlexibleEventHandler: Handler that may be sync or async

Example:
    >>> class AuditHandler:
    ...     async def handle(self, event: DomainEvent) -> None:
    ...         await self.audit_log.write(event)
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from eventharness.events.base import DomainEvent

# Type alias for simple function-based handlers
EventHandlerFunc = Callable[[DomainEvent], Awaitable[None] | None]


@runtime_checkable
class EventHandler(Protocol):
    """Protocol for async event handlers."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle an event asynchronously.

        Raises:
            Exception: If handling fails
        """
        ...


@runtime_checkable
class SyncEventHandler(Protocol):
    """
    Protocol for synchronous event handlers.

    Suited to in-memory recorders and test doubles that never await.
    """

    def handle(self, event: DomainEvent) -> None: ...


@runtime_checkable
class FlexibleEventHandler(Protocol):
    """Protocol for handlers that may be sync or async."""

    def handle(self, event: DomainEvent) -> Awaitable[None] | None:
        """Handle event, returning Awaitable if async."""
        ...


__all__ = [
    "EventHandler",
    "SyncEventHandler",
    "FlexibleEventHandler",
    "EventHandlerFunc",
]
