"""Event bus implementations for the eventharness library.

Available components:
- EventBus: Interface for the internal, in-process event bus
- InMemoryEventBus: In-process event distribution
- ExternalProducerEventBus: Decorator forwarding ExternalEvent instances
  to an ExternalEventProducer
- ExternalEventProducer / ExternalCommandBus / ExternalEventConsumer:
  Interfaces for talking to other services

Example:
    >>> from eventharness.bus import InMemoryEventBus, ExternalProducerEventBus
    >>>
    >>> bus = ExternalProducerEventBus(InMemoryEventBus(), producer)
    >>> bus.subscribe(OrderPlaced, reserve_stock)
    >>> await bus.publish([OrderPlaced(order_number="ORD-001")])
"""

from eventharness.bus.external import ExternalProducerEventBus
from eventharness.bus.interface import (
    EventBus,
    EventHandlerFunc,
    ExternalCommandBus,
    ExternalEventConsumer,
    ExternalEventProducer,
)
from eventharness.bus.memory import InMemoryEventBus

__all__ = [
    "EventBus",
    "EventHandlerFunc",
    "InMemoryEventBus",
    "ExternalProducerEventBus",
    "ExternalEventProducer",
    "ExternalCommandBus",
    "ExternalEventConsumer",
]
