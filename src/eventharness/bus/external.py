"""Event bus decorator that forwards external events to a producer.

Applications publish everything on one bus. Events that other services
care about derive from ExternalEvent; ExternalProducerEventBus dispatches
every event internally first and then hands the external ones to an
ExternalEventProducer.
"""

import logging

from eventharness.bus.interface import EventBus, ExternalEventProducer
from eventharness.events.base import DomainEvent, ExternalEvent
from eventharness.observability import Tracer, create_tracer
from eventharness.observability.attributes import ATTR_EVENT_COUNT, ATTR_EXTERNAL_FORWARDED
from eventharness.protocols import EventHandlerFunc, FlexibleEventHandler

logger = logging.getLogger(__name__)


class ExternalProducerEventBus(EventBus):
    """
    Wraps an inner bus and forwards ExternalEvent instances to a producer.

    Subscriptions are delegated to the inner bus unchanged.

    Example:
        >>> bus = ExternalProducerEventBus(InMemoryEventBus(), kafka_producer)
        >>> await bus.publish([OrderPlaced(...), OrderShippedNotification(...)])
        >>> # both reach internal handlers, only the notification reaches Kafka

    Note:
        Forwarding happens after internal dispatch completes. With
        ``background=True`` internal dispatch is deferred but forwarding
        is not, so the producer may see an event before internal handlers do.
    """

    def __init__(
        self,
        inner: EventBus,
        producer: ExternalEventProducer,
        *,
        tracer: Tracer | None = None,
        enable_tracing: bool = True,
    ) -> None:
        self._inner = inner
        self._producer = producer
        self._tracer = tracer or create_tracer(__name__, enable_tracing)

    @property
    def inner(self) -> EventBus:
        return self._inner

    @property
    def producer(self) -> ExternalEventProducer:
        return self._producer

    async def publish(
        self,
        events: list[DomainEvent],
        background: bool = False,
    ) -> None:
        """
        Publish events internally, then produce the external ones.

        Raises:
            ExternalDeliveryError: If the producer rejects an event. Events
                after the rejected one are not produced.
        """
        if not events:
            return

        await self._inner.publish(events, background=background)

        external = [event for event in events if isinstance(event, ExternalEvent)]
        if not external:
            return

        with self._tracer.span(
            "eventharness.event_bus.forward_external",
            {ATTR_EVENT_COUNT: len(events), ATTR_EXTERNAL_FORWARDED: len(external)},
        ):
            for event in external:
                await self._producer.publish(event)
                logger.debug(
                    f"Forwarded {type(event).__name__} to external producer",
                    extra={"event_type": type(event).__name__, "event_id": str(event.event_id)},
                )

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> None:
        self._inner.subscribe(event_type, handler)

    def unsubscribe(
        self,
        event_type: type[DomainEvent],
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> bool:
        return self._inner.unsubscribe(event_type, handler)

    def subscribe_to_all_events(
        self,
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> None:
        self._inner.subscribe_to_all_events(handler)

    def unsubscribe_from_all_events(
        self,
        handler: FlexibleEventHandler | EventHandlerFunc,
    ) -> bool:
        return self._inner.unsubscribe_from_all_events(handler)


__all__ = ["ExternalProducerEventBus"]
