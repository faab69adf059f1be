"""Handler for FoxService CRD.

Creation and updates arrive through kopf change handlers. Deletion does not:
kopf only reports a deletion to change handlers while its own finalizer is on
the object, and a FoxService carries only ``foxservices.cbopt.com``. Deleting
objects are therefore picked up from the raw watch stream by
:func:`handle_fox_service_deletion`, which retries every failed attempt after
the reconciler's fixed delay until the finalizer is cleared.

kopf change handlers cannot be rescheduled after a success, so the
``requeue_after`` a Create or NoOp returns is logged and not acted upon. A
provisioned FoxService is rechecked on its next update and whenever the
operator restarts (``on.resume``). A kopf timer would recheck it periodically
but would put kopf's own finalizer on every object.
"""

from __future__ import annotations

import asyncio
from typing import Any

import kopf
from kubernetes import client

from ..constants import API_GROUP_VERSION, FINALIZER, KIND_FOX_SERVICE
from ..decider import Action, determine_action
from ..exceptions import ControlPlaneError
from ..models import FoxService
from ..reconciler import Reconciler
from ..utils.api import get_api_client, is_not_found
from ..utils.errors import sanitize_exception
from ..utils.events import (
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_subresource_recreated,
    emit_subresources_created,
    emit_subresources_deleted,
)
from .base import BaseHandler


class FoxServiceHandler(BaseHandler):
    """Handler for FoxService resources.

    Change events funnel into :meth:`handle`, deletions into :meth:`release`.
    Both leave the decision of what to do to the reconciler.
    """

    def __init__(self, reconciler: Reconciler | None = None):
        """Initialize FoxService handler.

        Args:
            reconciler: Reconciler to use; created from the default kube config when omitted
        """
        super().__init__(KIND_FOX_SERVICE)
        self._reconciler = reconciler

    @property
    def reconciler(self) -> Reconciler:
        if self._reconciler is None:
            self._reconciler = Reconciler(get_api_client())
        return self._reconciler

    def configure(self, api_client: client.ApiClient) -> None:
        """Bind the handler to a shared API client."""
        self._reconciler = Reconciler(api_client)

    def handle(
        self,
        body: Any,
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile one FoxService snapshot.

        Raises:
            kopf.TemporaryError: If reconciliation failed, with the fixed retry delay
        """
        resource = None
        try:
            resource = FoxService.from_body(body)
            emit_reconcile_started(body, determine_action(resource).value)
            result = self.reconciler.reconcile(resource)
        except Exception as e:
            retry = self.reconciler.on_error(e, resource)
            if resource is None or not resource.lifecycle.is_deleting:
                self.update_resource_status(
                    patch, meta, status, ready=False, message=sanitize_exception(e)
                )
            self.handle_reconciliation_error(body, meta, e, delay=retry.requeue_after)
            return

        for kind in result.recreated:
            emit_subresource_recreated(body, kind, resource.name)

        if result.action == Action.DELETE.value:
            self._released(body, meta, resource)
            return

        if result.action == Action.CREATE.value:
            emit_subresources_created(body, resource.name)

        self.update_resource_status(patch, meta, status, ready=True, message="Subresources provisioned")
        self.log_info(
            meta,
            "Reconciliation succeeded",
            event="reconciled",
            reason="Reconciled",
            action=result.action,
            requeue_after=result.requeue_after,
        )

    def release(self, body: Any) -> float | None:
        """Run one deletion attempt for a FoxService.

        No status is written: the object is about to disappear.

        Args:
            body: Resource body of a FoxService marked for deletion

        Returns:
            Seconds to wait before the next attempt, or None once nothing is left to do
        """
        meta = body.get("metadata") or {}
        resource = None
        try:
            resource = FoxService.from_body(body)
            emit_reconcile_started(body, determine_action(resource).value)
            self.reconciler.reconcile(resource)
        except Exception as e:
            retry = self.reconciler.on_error(e, resource)
            emit_reconcile_failed(body, f"Reconciliation failed: {sanitize_exception(e)}")
            if _is_gone(e):
                self.log_warning(meta, "FoxService vanished before its finalizer was removed")
                return None
            return retry.requeue_after

        self._released(body, meta, resource)
        return None

    def _released(self, body: Any, meta: dict[str, Any], resource: FoxService) -> None:
        emit_subresources_deleted(body, resource.name)
        self.log_info(meta, "FoxService released for deletion", event="deletion", reason="Deletion")


def _is_gone(error: Exception) -> bool:
    # Only the finalizer patch targets the FoxService itself
    return (
        isinstance(error, ControlPlaneError)
        and error.operation == f"patch {KIND_FOX_SERVICE}"
        and is_not_found(error)
    )


# Global handler instance
_handler = FoxServiceHandler()


def configure(api_client: client.ApiClient) -> None:
    """Bind the global FoxService handler to a shared API client."""
    _handler.configure(api_client)


@kopf.on.resume(API_GROUP_VERSION, KIND_FOX_SERVICE)
@kopf.on.create(API_GROUP_VERSION, KIND_FOX_SERVICE)
@kopf.on.update(API_GROUP_VERSION, KIND_FOX_SERVICE)
def handle_fox_service(
    body: kopf.Body,
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle FoxService resource reconciliation."""
    _handler.handle(body, meta, status, patch)


def deletion_pending(meta: dict[str, Any], **_: Any) -> bool:
    """Whether a FoxService is being deleted and still holds our finalizer."""
    return meta.get("deletionTimestamp") is not None and FINALIZER in (meta.get("finalizers") or [])


@kopf.on.event(API_GROUP_VERSION, KIND_FOX_SERVICE, when=deletion_pending)
async def handle_fox_service_deletion(
    event: dict[str, Any],
    body: kopf.Body,
    **kwargs: Any,
) -> None:
    """Release a deleted FoxService, retrying until its finalizer is cleared."""
    if event.get("type") == "DELETED":
        return
    while True:
        delay = await asyncio.to_thread(_handler.release, body)
        if delay is None:
            return
        await asyncio.sleep(delay)
