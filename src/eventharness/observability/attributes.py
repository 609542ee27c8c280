"""
Span attribute names used across eventharness.

Example:
    >>> with tracer.span(
    ...     "eventharness.event_bus.dispatch",
    ...     {ATTR_EVENT_TYPE: type(event).__name__, ATTR_HANDLER_COUNT: 2},
    ... ):
    ...     ...
"""

# Event attributes
ATTR_EVENT_ID = "eventharness.event.id"
ATTR_EVENT_TYPE = "eventharness.event.type"
ATTR_EVENT_COUNT = "eventharness.event.count"

# Handler attributes
ATTR_HANDLER_NAME = "eventharness.handler.name"
ATTR_HANDLER_COUNT = "eventharness.handler.count"
ATTR_HANDLER_SUCCESS = "eventharness.handler.success"

# External messaging
ATTR_EXTERNAL_FORWARDED = "eventharness.external.forwarded"

__all__ = [
    "ATTR_EVENT_ID",
    "ATTR_EVENT_TYPE",
    "ATTR_EVENT_COUNT",
    "ATTR_HANDLER_NAME",
    "ATTR_HANDLER_COUNT",
    "ATTR_HANDLER_SUCCESS",
    "ATTR_EXTERNAL_FORWARDED",
]
