"""
Handler adapter for normalizing event handlers.

The bus accepts handlers in several shapes: objects with a sync or async
``handle()`` method, and plain sync or async callables. HandlerAdapter
turns each of them into a single awaitable ``handle(event)``.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from eventharness.events.base import DomainEvent

logger = logging.getLogger(__name__)

AsyncHandlerFunc = Callable[[DomainEvent], Awaitable[None]]


def get_handler_name(handler: Any) -> str:
    """
    Get a descriptive name for a handler for logging and debugging.

    Class instances are named after their class, functions after
    themselves; anything else falls back to ``repr``.
    """
    if inspect.isfunction(handler) or inspect.ismethod(handler):
        return str(handler.__name__)
    if hasattr(handler, "__class__") and handler.__class__.__name__ != "function":
        return str(handler.__class__.__name__)
    return repr(handler)


def _wrap_sync(func: Callable[[DomainEvent], Any]) -> AsyncHandlerFunc:
    async def wrapper(event: DomainEvent) -> None:
        result = func(event)
        # a sync callable may still hand back a coroutine
        if inspect.isawaitable(result):
            await result

    return wrapper


class HandlerAdapter:
    """
    Adapter that normalizes event handlers to a consistent async interface.

    Equality and hashing follow the identity of the wrapped handler, so a
    fresh adapter around the same handler can be used to unsubscribe it.

    Example:
        >>> adapter = HandlerAdapter(lambda event: print(event))
        >>> await adapter.handle(event)

    Attributes:
        original: The original unwrapped handler
        name: Descriptive name for logging
    """

    def __init__(self, handler: Any) -> None:
        """
        Args:
            handler: Object with handle() method or callable

        Raises:
            TypeError: If handler doesn't have handle() method and isn't callable
        """
        self._original = handler
        self._name = get_handler_name(handler)
        self._async_handler = self._normalize(handler)

    @staticmethod
    def _normalize(handler: Any) -> AsyncHandlerFunc:
        if hasattr(handler, "handle"):
            target = handler.handle
        elif callable(handler):
            target = handler
        else:
            raise TypeError(
                f"Handler must have a handle() method or be callable, got {type(handler)}"
            )

        if inspect.iscoroutinefunction(target):
            return target  # type: ignore[no-any-return]
        return _wrap_sync(target)

    @property
    def original(self) -> Any:
        """Get the original unwrapped handler."""
        return self._original

    @property
    def name(self) -> str:
        """Get the handler's descriptive name."""
        return self._name

    async def handle(self, event: DomainEvent) -> None:
        await self._async_handler(event)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HandlerAdapter):
            return self._original is other._original
        return self._original is other

    def __hash__(self) -> int:
        return id(self._original)

    def __repr__(self) -> str:
        return f"HandlerAdapter({self._name})"


__all__ = ["HandlerAdapter", "AsyncHandlerFunc", "get_handler_name"]
