"""Event bus interface definitions.

This module contains the EventBus abstract base class for the internal
event bus, and the abstract collaborators through which the application
talks to the outside world: an external event producer, an external
command bus, and an external event consumer.
"""

from abc import ABC, abstractmethod

from eventharness.events.base import DomainEvent, ExternalCommand, ExternalEvent
from eventharness.protocols import EventHandlerFunc, FlexibleEventHandler


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to events.

    Implementations must be thread-safe for subscription management and
    support both synchronous and asynchronous handlers.

    Example:
        >>> event_bus = InMemoryEventBus()
        >>> event_bus.subscribe(OrderPlaced, order_handler)
        >>> await event_bus.publish([OrderPlaced(...)])
    """

    @abstractmethod
    async def publish(
        self,
        events: list[DomainEvent],
        background: bool = False,
    ) -> None:
        """
        Publish events to all registered subscribers.

        Events are processed in order, and all handlers for each event
        are invoked before moving to the next event.

        Args:
            events: List of events to publish
            background: If True, publish without blocking the caller.
                       Handlers then observe the events eventually rather
                       than before publish() returns.
        """
        pass

    @abstractmethod
    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> None:
        """
        Subscribe a handler to a specific event type.

        Args:
            event_type: The event class to subscribe to
            handler: Object with handle() method or callable
        """
        pass

    @abstractmethod
    def unsubscribe(
        self,
        event_type: type[DomainEvent],
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> bool:
        """
        Unsubscribe a handler from a specific event type.

        Returns:
            True if the handler was found and removed, False otherwise
        """
        pass

    @abstractmethod
    def subscribe_to_all_events(
        self,
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> None:
        """
        Subscribe a handler to all event types (wildcard subscription).

        Args:
            handler: Handler that will receive all events
        """
        pass

    @abstractmethod
    def unsubscribe_from_all_events(
        self,
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> bool:
        """
        Unsubscribe a handler from the wildcard subscription.

        Returns:
            True if the handler was found and removed, False otherwise
        """
        pass


class ExternalEventProducer(ABC):
    """Sends events to other services (a broker topic, a webhook, ...)."""

    @abstractmethod
    async def publish(self, event: ExternalEvent) -> None:
        """
        Produce one event to the outside world.

        Raises:
            ExternalDeliveryError: If the event could not be delivered
        """
        pass


class ExternalCommandBus(ABC):
    """Sends commands to other services."""

    @abstractmethod
    async def send(self, command: ExternalCommand) -> None:
        """
        Send one command.

        Raises:
            ExternalDeliveryError: If the command could not be delivered
        """
        pass


class ExternalEventConsumer(ABC):
    """Consumes events produced by other services and feeds the internal bus."""

    @abstractmethod
    async def start(self) -> None:
        pass

    @abstractmethod
    async def stop(self) -> None:
        pass


__all__ = [
    "EventBus",
    "EventHandlerFunc",
    "ExternalEventProducer",
    "ExternalCommandBus",
    "ExternalEventConsumer",
]
