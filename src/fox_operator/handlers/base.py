"""Base handler class with common functionality for CRD handlers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import kopf

from .. import metrics
from ..constants import COND_READY, CONTROLLER_NAME
from ..logging import log_resource_event
from ..utils.errors import sanitize_exception
from ..utils.events import emit_reconcile_failed


class BaseHandler:
    """Base class for CRD handlers with common functionality."""

    def __init__(self, kind: str):
        """Initialize base handler.

        Args:
            kind: The Kubernetes resource kind (e.g., "FoxService")
        """
        self.kind = kind
        self.logger = logging.getLogger(__name__)

    def _get_resource_context(self, meta: dict[str, Any]) -> dict[str, Any]:
        """Extract common resource context from metadata.

        Args:
            meta: Kubernetes resource metadata

        Returns:
            Dictionary with resource context fields
        """
        return {
            "name": meta.get("name", "unknown"),
            "namespace": meta.get("namespace", ""),
            "uid": meta.get("uid", "unknown"),
        }

    def _log(
        self,
        level: int,
        meta: dict[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        ctx = self._get_resource_context(meta)
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=ctx["name"],
            namespace=ctx["namespace"],
            uid=ctx["uid"],
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            event: Event type (default: "info")
            reason: Reason for the event (default: "Info")
            **kwargs: Additional fields to include in the log
        """
        self._log(logging.INFO, meta, message, event, reason, **kwargs)

    def log_warning(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "warning",
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, meta, message, event, reason, **kwargs)

    def log_error(
        self,
        meta: dict[str, Any],
        message: str,
        error: Exception | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = kwargs.copy()
        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__
        self._log(logging.ERROR, meta, message, event, reason, **log_data)

    def update_resource_status(
        self,
        patch: kopf.Patch,
        meta: dict[str, Any],
        status: dict[str, Any],
        ready: bool,
        message: str,
    ) -> None:
        """Write the Ready condition and observed generation to the status.

        Args:
            patch: Kopf patch object
            meta: Kubernetes resource metadata
            status: Current resource status
            ready: Whether the resource is ready
            message: Message for the Ready condition
        """
        generation = meta.get("generation", 0)
        conditions = ready_conditions(status.get("conditions") or [], ready, message, generation)

        metrics.resource_status_total.labels(
            kind=self.kind, status="ready" if ready else "not_ready"
        ).inc()

        patch.status.update({
            "observedGeneration": generation,
            "conditions": conditions,
        })

    def handle_reconciliation_error(
        self,
        body: Any,
        meta: dict[str, Any],
        error: Exception,
        delay: float,
    ) -> None:
        """Report a failed reconciliation and hand the retry to kopf.

        Args:
            body: Resource body, used as the event target
            meta: Kubernetes resource metadata
            error: Exception that occurred
            delay: Seconds kopf should wait before retrying

        Raises:
            kopf.TemporaryError: Always, to have kopf retry after ``delay``
        """
        message = f"Reconciliation failed: {sanitize_exception(error)}"
        emit_reconcile_failed(body, message)
        raise kopf.TemporaryError(message, delay=delay) from error


def ready_conditions(
    conditions: list[dict[str, Any]],
    ready: bool,
    message: str,
    observed_generation: int,
) -> list[dict[str, Any]]:
    """Return ``conditions`` with the Ready condition replaced.

    ``lastTransitionTime`` only moves when the status flips. Other condition
    types are kept as they are.
    """
    status = "True" if ready else "False"
    now = datetime.now(timezone.utc).isoformat()
    previous = next((c for c in conditions if c.get("type") == COND_READY), None)
    if previous is not None and previous.get("status") == status:
        transitioned = previous.get("lastTransitionTime") or now
    else:
        transitioned = now

    condition = {
        "type": COND_READY,
        "status": status,
        "reason": "Provisioned" if ready else "ReconcileFailed",
        "message": message,
        "lastTransitionTime": transitioned,
        "observedGeneration": observed_generation,
    }
    return [dict(c) for c in conditions if c.get("type") != COND_READY] + [condition]
