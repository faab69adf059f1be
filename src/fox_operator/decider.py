"""Decide what a reconciliation has to do with a FoxService."""

from __future__ import annotations

import enum

from .models import FoxService


class Action(enum.Enum):
    """Action to be taken upon a FoxService during reconciliation."""

    # Attach the finalizer, then create the subresources
    CREATE = "create"
    # Remove the subresources, then clear the finalizer
    DELETE = "delete"
    # Resource is provisioned; only a periodic recheck is needed
    NOOP = "noop"


def determine_action(resource: FoxService) -> Action:
    """Classify a resource by its lifecycle metadata.

    The deletion marker always wins over finalizer state. Any finalizer at
    all is taken to mean the subresources may already exist.

    Args:
        resource: Snapshot of the FoxService being reconciled

    Returns:
        The action the reconciler should take
    """
    if resource.lifecycle.is_deleting:
        return Action.DELETE
    if not resource.lifecycle.finalizers:
        return Action.CREATE
    return Action.NOOP
