"""
Test utilities for applications built on an event bus.

Components:
    TestHost: Builds the application under test with in-memory messaging
    EventLog / EventListener: Record every event published on the internal bus
    Dummy*: Recording stand-ins for the external producer, command bus and consumer
    RetryPolicy / evaluate_eventually / assert_eventually: Retrying
        exactly-one assertions over a live event log

Example:
    >>> from eventharness.testing import TestHost
    >>>
    >>> async def test_order_is_placed():
    ...     async with TestHost(build_app) as host:
    ...         await host.app.place_order("ORD-001")
    ...         await host.should_publish_internal_event_of_type(
    ...             OrderPlaced, lambda e: e.order_number == "ORD-001"
    ...         )

Note:
    This module is intended for test code only.
"""

from eventharness.testing.config import HarnessConfig, generate_schema_name
from eventharness.testing.eventually import (
    EventualResult,
    MatchOutcome,
    RetryPolicy,
    assert_eventually,
    evaluate_eventually,
    match_exactly_one,
)
from eventharness.testing.fakes import (
    DummyExternalCommandBus,
    DummyExternalEventConsumer,
    DummyExternalEventProducer,
)
from eventharness.testing.harness import HostServices, TestHost
from eventharness.testing.log import EventListener, EventLog

__all__ = [
    # Host
    "TestHost",
    "HostServices",
    "HarnessConfig",
    "generate_schema_name",
    # Recording
    "EventLog",
    "EventListener",
    "DummyExternalEventProducer",
    "DummyExternalCommandBus",
    "DummyExternalEventConsumer",
    # Eventual assertions
    "RetryPolicy",
    "MatchOutcome",
    "EventualResult",
    "match_exactly_one",
    "evaluate_eventually",
    "assert_eventually",
]
