"""
Shared test event and command types.

- Order events: OrderPlaced, OrderShipped
- External events: OrderShippedNotification, PaymentRequested
- Commands: ReserveStock, ChargeCustomer
"""

from uuid import UUID, uuid4

from eventharness.events.base import DomainEvent, ExternalCommand, ExternalEvent


class OrderPlaced(DomainEvent):
    """An order was placed."""

    aggregate_type: str | None = "Order"
    order_number: str
    total_cents: int = 0


class OrderShipped(DomainEvent):
    aggregate_type: str | None = "Order"
    order_number: str
    tracking_number: str = "TRACK-1"


class OrderShippedNotification(ExternalEvent):
    """Tells other services an order left the warehouse."""

    order_number: str


class PaymentRequested(ExternalEvent):
    order_number: str
    amount_cents: int


class ReserveStock(ExternalCommand):
    sku: str
    quantity: int = 1


class ChargeCustomer(ExternalCommand):
    customer_id: UUID
    amount_cents: int


def placed(order_number: str = "ORD-001", **kwargs: object) -> OrderPlaced:
    """Create an OrderPlaced event with a fresh aggregate ID."""
    return OrderPlaced(aggregate_id=uuid4(), order_number=order_number, **kwargs)
