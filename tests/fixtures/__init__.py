"""
Shared test fixtures for the eventharness library.

Usage:
    from tests.fixtures import OrderPlaced, OrderShippedNotification, placed
"""

from tests.fixtures.events import (
    ChargeCustomer,
    OrderPlaced,
    OrderShipped,
    OrderShippedNotification,
    PaymentRequested,
    ReserveStock,
    placed,
)
from tests.fixtures.sleep import RecordingSleep

__all__ = [
    "OrderPlaced",
    "OrderShipped",
    "OrderShippedNotification",
    "PaymentRequested",
    "ReserveStock",
    "ChargeCustomer",
    "placed",
    "RecordingSleep",
]
