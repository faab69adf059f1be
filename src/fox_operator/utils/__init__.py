"""Utility functions for the Fox Operator."""

from .api import call_api, get_api_client, is_not_found
from .errors import sanitize_error_message, sanitize_exception
from .events import emit_event

__all__ = [
    "call_api",
    "get_api_client",
    "is_not_found",
    "sanitize_error_message",
    "sanitize_exception",
    "emit_event",
]
