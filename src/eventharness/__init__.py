"""
eventharness - Test harness for event-driven Python applications.

This library provides:
- Domain event, external event and external command base classes
- An in-memory event bus with sync/async handlers and background publishing
- An event bus decorator forwarding external events to a producer
- A test host wiring an application to in-memory messaging fakes
- Retrying exactly-one assertions over the recorded event log
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("eventharness")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from eventharness.bus import (
    EventBus,
    EventHandlerFunc,
    ExternalCommandBus,
    ExternalEventConsumer,
    ExternalEventProducer,
    ExternalProducerEventBus,
    InMemoryEventBus,
)
from eventharness.events import DomainEvent, ExternalCommand, ExternalEvent
from eventharness.exceptions import (
    AssertionUnmetError,
    EventBusError,
    ExternalDeliveryError,
    HarnessError,
)
from eventharness.handlers import HandlerAdapter
from eventharness.protocols import EventHandler, FlexibleEventHandler, SyncEventHandler

__all__ = [
    "__version__",
    # Events
    "DomainEvent",
    "ExternalEvent",
    "ExternalCommand",
    # Buses
    "EventBus",
    "EventHandlerFunc",
    "InMemoryEventBus",
    "ExternalProducerEventBus",
    "ExternalEventProducer",
    "ExternalCommandBus",
    "ExternalEventConsumer",
    # Handlers
    "HandlerAdapter",
    "EventHandler",
    "SyncEventHandler",
    "FlexibleEventHandler",
    # Exceptions
    "HarnessError",
    "EventBusError",
    "ExternalDeliveryError",
    "AssertionUnmetError",
]
