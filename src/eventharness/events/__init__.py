"""
Event and command primitives.

Example:
    >>> from eventharness.events import DomainEvent, ExternalEvent
    >>>
    >>> class OrderPlaced(DomainEvent):
    ...     order_number: str
    ...
    >>> class OrderShippedNotification(ExternalEvent):
    ...     order_number: str
"""

from eventharness.events.base import DomainEvent, ExternalCommand, ExternalEvent

__all__ = ["DomainEvent", "ExternalEvent", "ExternalCommand"]
