"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_SUBRESOURCE_RECREATED,
    EVENT_REASON_SUBRESOURCES_CREATED,
    EVENT_REASON_SUBRESOURCES_DELETED,
)


def emit_event(
    body: Any,
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body the event refers to
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: Any, action: str) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, f"Reconciliation started ({action})")


def emit_reconcile_failed(body: Any, message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_subresources_created(body: Any, name: str) -> None:
    emit_event(body, EVENT_REASON_SUBRESOURCES_CREATED, f"Subresources for {name} created")


def emit_subresources_deleted(body: Any, name: str) -> None:
    emit_event(body, EVENT_REASON_SUBRESOURCES_DELETED, f"Subresources for {name} deleted")


def emit_subresource_recreated(body: Any, kind: str, name: str) -> None:
    emit_event(
        body,
        EVENT_REASON_SUBRESOURCE_RECREATED,
        f"{kind} {name} was missing and has been created again",
        type_="Warning",
    )
