"""In-memory event bus implementation.

This module provides an in-process event bus that distributes events to
registered subscribers. It is the internal bus the test host wires into
the application under test.
"""

import asyncio
import logging
import threading
from collections import defaultdict

from eventharness.bus.interface import EventBus
from eventharness.events.base import DomainEvent
from eventharness.exceptions import EventBusError
from eventharness.handlers.adapter import HandlerAdapter
from eventharness.observability import Tracer, create_tracer
from eventharness.observability.attributes import (
    ATTR_EVENT_ID,
    ATTR_EVENT_TYPE,
    ATTR_HANDLER_COUNT,
    ATTR_HANDLER_NAME,
    ATTR_HANDLER_SUCCESS,
)
from eventharness.protocols import EventHandlerFunc, FlexibleEventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus for event distribution.

    Features:
    - Thread-safe subscription management
    - Support for sync and async handlers
    - Wildcard subscriptions (receive all events)
    - Error isolation (handler failures don't stop other handlers)
    - Background publishing with tracked tasks and graceful shutdown
    - Optional OpenTelemetry tracing

    Example:
        >>> bus = InMemoryEventBus()
        >>> bus.subscribe(OrderPlaced, my_handler)
        >>> await bus.publish([OrderPlaced(...)])

    Thread Safety:
        - Subscription methods (subscribe, unsubscribe) are thread-safe
        - Publishing should only be called from async context
    """

    def __init__(
        self,
        *,
        tracer: Tracer | None = None,
        enable_tracing: bool = True,
    ) -> None:
        """
        Initialize the event bus with empty subscriber registry.

        Args:
            tracer: Optional custom Tracer instance. If not provided, one is
                   created based on enable_tracing setting.
            enable_tracing: If True and OpenTelemetry is available, emit traces.
                          Ignored if tracer is explicitly provided.
        """
        self._subscribers: dict[type[DomainEvent], list[HandlerAdapter]] = defaultdict(list)
        self._all_event_handlers: list[HandlerAdapter] = []
        self._lock = threading.RLock()
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._stats = {
            "events_published": 0,
            "handlers_invoked": 0,
            "handler_errors": 0,
            "background_tasks_created": 0,
            "background_tasks_completed": 0,
        }

        self._tracer = tracer or create_tracer(__name__, enable_tracing)
        self._enable_tracing = self._tracer.enabled

    async def publish(
        self,
        events: list[DomainEvent],
        background: bool = False,
    ) -> None:
        """
        Publish events to all registered subscribers.

        Events are processed sequentially to maintain ordering guarantees.
        Handler failures are logged but don't prevent other handlers from running.

        Args:
            events: Events to publish
            background: If True, dispatch events in a background task

        Raises:
            EventBusError: If an item is not a DomainEvent
        """
        if not events:
            return

        for event in events:
            if not isinstance(event, DomainEvent):
                raise EventBusError(
                    f"Can only publish DomainEvent instances, got {type(event).__name__}"
                )

        if background:
            task = asyncio.create_task(self._publish_all(list(events)))
            task.add_done_callback(self._on_background_task_done)
            self._background_tasks.add(task)
            self._stats["background_tasks_created"] += 1
            logger.debug(
                f"Scheduled background publishing of {len(events)} event(s)",
                extra={"event_count": len(events)},
            )
        else:
            await self._publish_all(events)

    def _on_background_task_done(self, task: asyncio.Task[None]) -> None:
        self._background_tasks.discard(task)
        self._stats["background_tasks_completed"] += 1

        if not task.cancelled():
            exc = task.exception()
            if exc:
                logger.error(
                    f"Background publishing task failed: {exc}",
                    exc_info=exc,
                )

    async def _publish_all(self, events: list[DomainEvent]) -> None:
        for event in events:
            await self._dispatch_event(event)
            self._stats["events_published"] += 1

    async def _dispatch_event(self, event: DomainEvent) -> None:
        event_type = type(event)

        with self._lock:
            specific_handlers = list(self._subscribers.get(event_type, []))
            wildcard_handlers = list(self._all_event_handlers)

        handlers = specific_handlers + wildcard_handlers

        if not handlers:
            logger.debug(
                f"No handlers registered for event type: {event_type.__name__}",
                extra={"event_type": event_type.__name__},
            )
            return

        logger.debug(
            f"Dispatching {event_type.__name__} to {len(handlers)} handler(s)",
            extra={
                "event_type": event_type.__name__,
                "event_id": str(event.event_id),
                "handler_count": len(handlers),
            },
        )

        with self._tracer.span(
            "eventharness.event_bus.dispatch",
            {
                ATTR_EVENT_TYPE: event_type.__name__,
                ATTR_EVENT_ID: str(event.event_id),
                ATTR_HANDLER_COUNT: len(handlers),
            },
        ):
            await asyncio.gather(
                *(self._safe_handle(adapter, event) for adapter in handlers),
                return_exceptions=True,
            )

    async def _safe_handle(self, adapter: HandlerAdapter, event: DomainEvent) -> None:
        """Execute a handler, logging and counting its exceptions."""
        with self._tracer.span(
            "eventharness.event_bus.handle",
            {
                ATTR_EVENT_TYPE: type(event).__name__,
                ATTR_EVENT_ID: str(event.event_id),
                ATTR_HANDLER_NAME: adapter.name,
            },
        ) as span:
            try:
                await adapter.handle(event)
                if span:
                    span.set_attribute(ATTR_HANDLER_SUCCESS, True)
                self._stats["handlers_invoked"] += 1
            except Exception as e:
                if span:
                    span.set_attribute(ATTR_HANDLER_SUCCESS, False)
                    span.record_exception(e)
                self._stats["handler_errors"] += 1
                logger.error(
                    f"Handler {adapter.name} failed processing {type(event).__name__}: {e}",
                    exc_info=True,
                    extra={
                        "handler": adapter.name,
                        "event_type": type(event).__name__,
                        "event_id": str(event.event_id),
                        "error": str(e),
                    },
                )

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> None:
        """Subscribe a handler to a specific event type. Thread-safe."""
        adapter = HandlerAdapter(handler)

        with self._lock:
            self._subscribers[event_type].append(adapter)

        logger.info(
            f"Registered handler {adapter.name} for {event_type.__name__}",
            extra={"handler": adapter.name, "event_type": event_type.__name__},
        )

    def unsubscribe(
        self,
        event_type: type[DomainEvent],
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> bool:
        """
        Unsubscribe a handler from a specific event type. Thread-safe.

        Returns:
            True if the handler was found and removed, False otherwise
        """
        target_adapter = HandlerAdapter(handler)

        with self._lock:
            adapters = self._subscribers.get(event_type, [])
            if target_adapter in adapters:
                adapters.remove(target_adapter)
                logger.info(
                    f"Unsubscribed handler {target_adapter.name} from {event_type.__name__}",
                    extra={"handler": target_adapter.name, "event_type": event_type.__name__},
                )
                return True

        logger.debug(
            f"Handler {target_adapter.name} not found for {event_type.__name__}",
            extra={"handler": target_adapter.name, "event_type": event_type.__name__},
        )
        return False

    def subscribe_to_all_events(
        self,
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> None:
        """Subscribe a handler to all event types. Thread-safe."""
        adapter = HandlerAdapter(handler)

        with self._lock:
            self._all_event_handlers.append(adapter)

        logger.info(
            f"Registered wildcard handler {adapter.name}",
            extra={"handler": adapter.name},
        )

    def unsubscribe_from_all_events(
        self,
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> bool:
        """Unsubscribe a handler from the wildcard subscription. Thread-safe."""
        target_adapter = HandlerAdapter(handler)

        with self._lock:
            if target_adapter in self._all_event_handlers:
                self._all_event_handlers.remove(target_adapter)
                logger.info(
                    f"Unsubscribed wildcard handler {target_adapter.name}",
                    extra={"handler": target_adapter.name},
                )
                return True

        return False

    def clear_subscribers(self) -> None:
        """Clear all subscribers. Thread-safe."""
        with self._lock:
            self._subscribers.clear()
            self._all_event_handlers.clear()

        logger.info("All event subscribers cleared")

    def get_subscriber_count(self, event_type: type[DomainEvent] | None = None) -> int:
        """
        Get the number of registered subscribers.

        Args:
            event_type: If provided, count subscribers for this event type only.
                       Wildcard subscribers are never included.
        """
        with self._lock:
            if event_type is None:
                return sum(len(handlers) for handlers in self._subscribers.values())
            return len(self._subscribers.get(event_type, []))

    def get_wildcard_subscriber_count(self) -> int:
        with self._lock:
            return len(self._all_event_handlers)

    def get_stats(self) -> dict[str, int]:
        """
        Get statistics about event bus operation.

        Returns:
            Dictionary with counts:
            - events_published: Total events published
            - handlers_invoked: Total successful handler invocations
            - handler_errors: Total handler errors
            - background_tasks_created: Background tasks started
            - background_tasks_completed: Background tasks finished
        """
        return dict(self._stats)

    def get_background_task_count(self) -> int:
        return len(self._background_tasks)

    async def shutdown(self, timeout: float = 30.0) -> None:
        """
        Wait for background publishing tasks, cancelling any still running
        after ``timeout`` seconds.
        """
        logger.info(
            f"Shutting down event bus, waiting for {len(self._background_tasks)} background task(s)"
        )

        pending = list(self._background_tasks)
        if not pending:
            return

        _, remaining = await asyncio.wait(
            pending,
            timeout=timeout,
            return_when=asyncio.ALL_COMPLETED,
        )
        if remaining:
            logger.warning(
                f"Event bus shutdown: {len(remaining)} task(s) did not complete within timeout",
                extra={"remaining_tasks": len(remaining)},
            )
            for task in remaining:
                task.cancel()

        logger.info("Event bus shutdown complete")


__all__ = ["InMemoryEventBus"]
