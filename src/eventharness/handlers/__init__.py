"""Handler normalisation utilities."""

from eventharness.handlers.adapter import AsyncHandlerFunc, HandlerAdapter, get_handler_name

__all__ = ["HandlerAdapter", "AsyncHandlerFunc", "get_handler_name"]
