"""Errors raised while reconciling FoxService resources."""

from __future__ import annotations


class FoxOperatorError(Exception):
    """Base class for all reconciliation errors."""


class InputError(FoxOperatorError):
    """The FoxService resource is missing required fields or is malformed."""

    def __init__(self, message: str):
        super().__init__(f"Invalid FoxService resource: {message}")


class ControlPlaneError(FoxOperatorError):
    """A call against the Kubernetes API failed.

    Conflicts, missing objects, authorization failures and transport errors
    are all reported through this single type. ``status`` is the HTTP status
    when the API server answered, ``None`` for transport failures.
    """

    def __init__(self, operation: str, source: Exception):
        self.operation = operation
        self.status: int | None = getattr(source, "status", None)
        self.reason = str(getattr(source, "reason", None) or source)
        super().__init__(f"Kubernetes reported error during {operation}: {self.status} {self.reason}")
