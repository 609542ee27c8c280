"""
Test host that runs an application against in-memory messaging.

TestHost builds the application under test through a factory that
receives the host's collaborators explicitly. The internal event bus is a
real InMemoryEventBus whose every event is recorded into an EventLog; the
external event producer, command bus and consumer are dummies that record
instead of talking to real infrastructure.

Example:
    >>> def build_app(services: HostServices) -> OrderService:
    ...     return OrderService(
    ...         event_bus=services.event_bus,
    ...         command_bus=services.external_command_bus,
    ...         schema=services.schema_name,
    ...     )
    >>>
    >>> async def test_placing_an_order_publishes_order_placed():
    ...     async with TestHost(build_app) as host:
    ...         await host.app.place_order("ORD-001")
    ...         await host.should_publish_internal_event_of_type(
    ...             OrderPlaced, lambda e: e.order_number == "ORD-001"
    ...         )
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Generic, Self, TypeVar

from eventharness.bus.external import ExternalProducerEventBus
from eventharness.bus.interface import (
    EventBus,
    ExternalCommandBus,
    ExternalEventConsumer,
    ExternalEventProducer,
)
from eventharness.bus.memory import InMemoryEventBus
from eventharness.events.base import DomainEvent, ExternalCommand, ExternalEvent
from eventharness.exceptions import HarnessError
from eventharness.testing.config import HarnessConfig
from eventharness.testing.eventually import (
    EventualResult,
    Predicate,
    RetryPolicy,
    SleepFunc,
    assert_eventually,
)
from eventharness.testing.fakes import (
    DummyExternalCommandBus,
    DummyExternalEventConsumer,
    DummyExternalEventProducer,
)
from eventharness.testing.log import EventListener, EventLog

logger = logging.getLogger(__name__)

TApp = TypeVar("TApp")
TEvent = TypeVar("TEvent", bound=DomainEvent)
TExternalEvent = TypeVar("TExternalEvent", bound=ExternalEvent)
TCommand = TypeVar("TCommand", bound=ExternalCommand)


@dataclass(frozen=True)
class HostServices:
    """
    Collaborators handed to the application factory.

    Attributes:
        event_bus: The bus the application publishes to; forwards external
            events to external_event_producer
        external_event_producer: Recording stand-in for the real producer
        external_command_bus: Recording stand-in for the real command bus
        external_event_consumer: No-op stand-in for the real consumer
        schema_name: Database schema the application should use
    """

    event_bus: EventBus
    external_event_producer: ExternalEventProducer
    external_command_bus: ExternalCommandBus
    external_event_consumer: ExternalEventConsumer
    schema_name: str


class TestHost(Generic[TApp]):
    """
    Hosts an application under test with in-memory messaging.

    One host per test: each host owns its own event log, buses, dummies
    and schema name.

    Args:
        app_factory: Builds the application from HostServices. Optional when
            a test only exercises the host's buses directly.
        config: Host configuration (fresh schema name, default retry policy)
    """

    __test__ = False

    def __init__(
        self,
        app_factory: Callable[[HostServices], TApp] | None = None,
        *,
        config: HarnessConfig | None = None,
    ) -> None:
        self._config = config or HarnessConfig()
        self._app_factory = app_factory
        self._app: TApp | None = None
        self._app_built = False
        self._running = False

        self._event_log = EventLog()
        self._internal_bus = InMemoryEventBus(enable_tracing=self._config.enable_tracing)
        self._listener = EventListener(self._event_log)
        self._internal_bus.subscribe_to_all_events(self._listener)

        self._external_producer = DummyExternalEventProducer()
        self._external_command_bus = DummyExternalCommandBus()
        self._external_consumer = DummyExternalEventConsumer()
        self._event_bus = ExternalProducerEventBus(
            self._internal_bus,
            self._external_producer,
            enable_tracing=self._config.enable_tracing,
        )

        self._services = HostServices(
            event_bus=self._event_bus,
            external_event_producer=self._external_producer,
            external_command_bus=self._external_command_bus,
            external_event_consumer=self._external_consumer,
            schema_name=self._config.schema_name,
        )

        logger.debug(
            f"Created test host with schema {self._config.schema_name}",
            extra={"schema_name": self._config.schema_name},
        )

    # -- components --------------------------------------------------------

    @property
    def config(self) -> HarnessConfig:
        return self._config

    @property
    def schema_name(self) -> str:
        return self._config.schema_name

    @property
    def services(self) -> HostServices:
        return self._services

    @property
    def event_bus(self) -> ExternalProducerEventBus:
        """The bus handed to the application (internal dispatch + external forwarding)."""
        return self._event_bus

    @property
    def internal_bus(self) -> InMemoryEventBus:
        return self._internal_bus

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def external_event_producer(self) -> DummyExternalEventProducer:
        return self._external_producer

    @property
    def external_command_bus(self) -> DummyExternalCommandBus:
        return self._external_command_bus

    @property
    def external_event_consumer(self) -> DummyExternalEventConsumer:
        return self._external_consumer

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def app(self) -> TApp:
        """
        The application under test, built on first access.

        Raises:
            HarnessError: If the host was created without an app_factory
        """
        if not self._app_built:
            if self._app_factory is None:
                raise HarnessError("TestHost was created without an app_factory")
            self._app = self._app_factory(self._services)
            self._app_built = True
            logger.info(
                f"Built application {type(self._app).__name__}",
                extra={"app": type(self._app).__name__, "schema_name": self.schema_name},
            )
        return self._app  # type: ignore[return-value]

    # -- lifecycle ---------------------------------------------------------

    async def start(self) -> None:
        """Build the application (if a factory was given) and start the consumer."""
        if self._running:
            return
        if self._app_factory is not None:
            _ = self.app
        await self._external_consumer.start()
        self._running = True
        logger.info("Test host started", extra={"schema_name": self.schema_name})

    async def stop(self) -> None:
        """
        Stop the consumer, wait for background publishing and discard
        everything recorded.
        """
        if not self._running:
            return
        await self._external_consumer.stop()
        await self._internal_bus.shutdown(timeout=self._config.shutdown_timeout)
        self.clear_published_events()
        self._running = False
        logger.info("Test host stopped", extra={"schema_name": self.schema_name})

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.stop()

    def clear_published_events(self) -> None:
        """Forget every recorded internal event, external event and command."""
        self._event_log.clear()
        self._external_producer.clear()
        self._external_command_bus.clear()

    # -- internal events ---------------------------------------------------

    async def publish_internal_event(self, event: DomainEvent, background: bool = False) -> None:
        """Publish an event as the application would, through the host's bus."""
        await self._event_bus.publish([event], background=background)

    def published_internal_events_of_type(self, event_type: type[TEvent]) -> list[TEvent]:
        """Events of ``event_type`` recorded so far, in publication order."""
        return self._event_log.query(event_type)

    async def should_publish_internal_event_of_type(
        self,
        event_type: type[TEvent],
        predicate: Predicate[TEvent],
        max_retries: int | None = None,
        retry_interval_ms: int | None = None,
        *,
        sleep: SleepFunc | None = None,
    ) -> EventualResult[TEvent]:
        """
        Wait until exactly one recorded ``event_type`` event satisfies ``predicate``.

        Args:
            event_type: Event class to look for
            predicate: Pure check applied to each event of that class
            max_retries: Overrides config.retry_policy.max_retries
            retry_interval_ms: Overrides config.retry_policy.interval_ms
            sleep: Awaitable delay function, ``asyncio.sleep`` by default

        Raises:
            AssertionUnmetError: When the budget runs out; carries the
                counts of the last attempt
        """
        default = self._config.retry_policy
        policy = RetryPolicy(
            max_retries=default.max_retries if max_retries is None else max_retries,
            interval_ms=default.interval_ms if retry_interval_ms is None else retry_interval_ms,
        )
        return await assert_eventually(
            self._event_log, event_type, predicate, policy, sleep=sleep
        )

    # -- external messaging ------------------------------------------------

    def published_external_events_of_type(
        self, event_type: type[TExternalEvent]
    ) -> list[TExternalEvent]:
        """
        Return the external events of ``event_type`` that were produced.

        Raises:
            AssertionError: If none were produced
        """
        events = self._external_producer.events_of_type(event_type)
        if not events:
            found_types = [type(e).__name__ for e in self._external_producer.published_events]
            raise AssertionError(
                f"Expected {event_type.__name__} to be produced externally, but none were. "
                f"Produced event types: {found_types or 'none'}"
            )
        return events

    def sent_external_commands_of_type(self, command_type: type[TCommand]) -> list[TCommand]:
        return self._external_command_bus.commands_of_type(command_type)

    def __repr__(self) -> str:
        return (
            f"TestHost(schema={self.schema_name}, "
            f"internal={len(self._event_log)}, "
            f"external={len(self._external_producer.published_events)})"
        )


__all__ = ["TestHost", "HostServices"]
