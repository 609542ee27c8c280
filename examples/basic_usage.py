"""
Basic Usage Example

This example demonstrates testing an event-driven service with TestHost:
- Defining internal events, external events and commands
- Building the application from the host's services
- Publishing in the background and asserting eventually
- Inspecting what left the process

Run with: python examples/basic_usage.py
"""

import asyncio

from eventharness import DomainEvent, ExternalCommand, ExternalEvent
from eventharness.testing import HarnessConfig, HostServices, RetryPolicy, TestHost

# =============================================================================
# Step 1: Define Events and Commands
# =============================================================================
# Internal events stay in the process; external events are also handed to
# the external producer; commands go to other services.


class OrderPlaced(DomainEvent):
    order_number: str


class OrderConfirmed(ExternalEvent):
    """Tells other services the order went through."""

    order_number: str


class ReserveStock(ExternalCommand):
    sku: str
    quantity: int = 1


# =============================================================================
# Step 2: Write the Application
# =============================================================================
# The application only sees the collaborators it is given, so the same code
# runs against real brokers in production and dummies under test.


class OrderService:
    def __init__(self, services: HostServices) -> None:
        self._bus = services.event_bus
        self._commands = services.external_command_bus
        self._bus.subscribe(OrderPlaced, self._confirm)

    async def place_order(self, order_number: str) -> None:
        await self._commands.send(ReserveStock(sku=order_number))
        await self._bus.publish([OrderPlaced(order_number=order_number)], background=True)

    async def _confirm(self, event: OrderPlaced) -> None:
        await self._bus.publish([OrderConfirmed(order_number=event.order_number)])


# =============================================================================
# Step 3: Test It
# =============================================================================


async def main():
    print("=" * 60)
    print("Event Harness Basic Usage Example")
    print("=" * 60)

    config = HarnessConfig(retry_policy=RetryPolicy(max_retries=20, interval_ms=10))

    async with TestHost(OrderService, config=config) as host:
        print(f"\n1. Host started with schema {host.schema_name}")

        await host.app.place_order("ORD-001")
        print("\n2. Order placed (published in the background)")

        result = await host.should_publish_internal_event_of_type(
            OrderPlaced, lambda e: e.order_number == "ORD-001"
        )
        print(f"   OrderPlaced observed after {result.attempts} attempt(s)")

        await host.should_publish_internal_event_of_type(
            OrderConfirmed, lambda e: e.order_number == "ORD-001"
        )
        confirmed = host.published_external_events_of_type(OrderConfirmed)
        print(f"\n3. External events produced: {[e.event_type for e in confirmed]}")

        commands = host.sent_external_commands_of_type(ReserveStock)
        print(f"   Commands sent: {[c.sku for c in commands]}")

        print("\n4. A missing event fails the assertion:")
        try:
            await host.should_publish_internal_event_of_type(
                OrderPlaced, lambda e: e.order_number == "ORD-404", max_retries=2
            )
        except AssertionError as e:
            print(f"   {e}")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
