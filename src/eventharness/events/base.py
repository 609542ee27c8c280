"""
Base classes for events and commands.

Events are immutable records of things that have happened in the
application under test. Commands are immutable requests sent to other
services through the external command bus.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, ClassVar, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


def _derive_type_name(cls: type[BaseModel], field_name: str, data: Any) -> Any:
    """Fill ``field_name`` with the class name when the input leaves it empty."""
    if isinstance(data, dict) and not data.get(field_name):
        field_info = cls.model_fields.get(field_name)
        field_default = field_info.default if field_info else ""
        if not field_default or data.get(field_name) == "":
            data = dict(data)
            data[field_name] = cls.__name__
    return data


class DomainEvent(BaseModel):
    """
    Base class for all events published on the internal event bus.

    The event_type field is automatically set to the class name if not
    explicitly provided. Aggregate information is optional: the harness
    records any event, whether or not it belongs to an aggregate.

    Attributes:
        event_id: Unique identifier for this event instance
        event_type: Type name of the event (auto-derived from class name)
        occurred_at: When the event occurred (UTC timestamp)
        aggregate_id: ID of the aggregate this event belongs to, if any
        aggregate_type: Type of aggregate, if any
        correlation_id: ID linking related events
        causation_id: ID of the event that caused this event
        metadata: Additional event metadata dictionary

    Example:
        >>> class OrderPlaced(DomainEvent):
        ...     order_number: str
        ...
        >>> event = OrderPlaced(order_number="ORD-001")
        >>> assert event.event_type == "OrderPlaced"
    """

    model_config = ConfigDict(frozen=True)

    suppress_event_type_warning: ClassVar[bool] = False

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier",
    )
    event_type: str = Field(
        default="",
        description="Type of event (auto-derived from class name if not set)",
    )
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When event occurred (UTC)",
    )

    aggregate_id: UUID | None = Field(
        default=None,
        description="ID of the aggregate this event belongs to",
    )
    aggregate_type: str | None = Field(
        default=None,
        description="Type of aggregate (e.g., 'Order')",
    )

    correlation_id: UUID = Field(
        default_factory=uuid4,
        description="ID linking related events",
    )
    causation_id: UUID | None = Field(
        default=None,
        description="ID of the event that caused this event",
    )

    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event metadata",
    )

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Warn when an explicit event_type differs from the class name."""
        super().__init_subclass__(**kwargs)

        explicit_type = cls.__dict__.get("event_type")
        if isinstance(explicit_type, str) and explicit_type and explicit_type != cls.__name__:
            if not getattr(cls, "suppress_event_type_warning", False):
                logger.warning(
                    "Event class %s has event_type='%s' which differs from class name. "
                    "Set suppress_event_type_warning=True to silence this warning.",
                    cls.__name__,
                    explicit_type,
                )

    @model_validator(mode="before")
    @classmethod
    def _ensure_event_type(cls, data: Any) -> Any:
        return _derive_type_name(cls, "event_type", data)

    def __str__(self) -> str:
        return f"{self.event_type}(event_id={self.event_id})"

    def with_causation(self, causing_event: DomainEvent) -> Self:
        """
        Create a copy of this event caused by another event.

        Args:
            causing_event: The event that caused this event

        Returns:
            New event instance with causation_id and correlation_id set
        """
        return self.model_copy(
            update={
                "causation_id": causing_event.event_id,
                "correlation_id": causing_event.correlation_id,
            }
        )

    def with_metadata(self, **kwargs: Any) -> Self:
        """Create a copy of this event with additional metadata."""
        return self.model_copy(update={"metadata": {**self.metadata, **kwargs}})

    def to_dict(self) -> dict[str, Any]:
        """Convert event to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Create event from dictionary.

        Raises:
            ValidationError: If data doesn't match event schema
        """
        return cls.model_validate(data)


class ExternalEvent(DomainEvent):
    """
    Event that must also leave the process.

    Publishing an ExternalEvent through ExternalProducerEventBus dispatches
    it to internal handlers and then hands it to the external event producer.
    """

    pass


class ExternalCommand(BaseModel):
    """
    Base class for commands sent to other services.

    Attributes:
        command_id: Unique identifier for this command
        command_type: Type name of the command (auto-derived from class name)
        issued_at: When the command was issued (UTC timestamp)
        metadata: Additional command metadata dictionary
    """

    model_config = ConfigDict(frozen=True)

    command_id: UUID = Field(default_factory=uuid4)
    command_type: str = Field(default="")
    issued_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _ensure_command_type(cls, data: Any) -> Any:
        return _derive_type_name(cls, "command_type", data)


__all__ = ["DomainEvent", "ExternalEvent", "ExternalCommand"]
