"""Reconciliation of FoxService resources.

One call to :meth:`Reconciler.reconcile` drives a single resource one step
towards its desired state. Steps run strictly in order and every failed
Kubernetes call aborts the attempt; the runtime retries it later.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable

from kubernetes import client

from . import finalizer, metrics
from .builders import build_deployment, build_service, has_exposure
from .constants import CONTROLLER_NAME, KIND_DEPLOYMENT, KIND_FOX_SERVICE, KIND_SERVICE
from .decider import Action, determine_action
from .exceptions import ControlPlaneError, InputError
from .logging import log_resource_event
from .models import FoxService, ReconcileResult
from .tracing import trace_span
from .utils.api import call_api, is_not_found
from .utils.errors import sanitize_exception

REQUEUE_SECONDS = float(os.getenv("FOX_REQUEUE_SECONDS", "10"))
ERROR_REQUEUE_SECONDS = float(os.getenv("FOX_ERROR_REQUEUE_SECONDS", "5"))
VERIFY_SUBRESOURCES = os.getenv("FOX_VERIFY_SUBRESOURCES", "true").lower() == "true"


class Reconciler:
    """Reconciles FoxService resources against the Kubernetes API.

    The reconciler holds no per-resource state. The ``ApiClient`` it wraps
    is shared by every invocation.
    """

    def __init__(
        self,
        api_client: client.ApiClient,
        requeue_after: float = REQUEUE_SECONDS,
        error_requeue_after: float = ERROR_REQUEUE_SECONDS,
        verify_subresources: bool = VERIFY_SUBRESOURCES,
    ):
        """Initialize the reconciler.

        Args:
            api_client: Kubernetes API client shared across reconciliations
            requeue_after: Seconds until a provisioned resource is looked at again
            error_requeue_after: Seconds until a failed reconciliation is retried
            verify_subresources: Recreate missing subresources on rechecks
        """
        self.api_client = api_client
        self.custom_api = client.CustomObjectsApi(api_client)
        self.apps_api = client.AppsV1Api(api_client)
        self.core_api = client.CoreV1Api(api_client)
        self.requeue_after = requeue_after
        self.error_requeue_after = error_requeue_after
        self.verify_subresources = verify_subresources
        self.logger = logging.getLogger(__name__)

    def _log(
        self,
        resource: FoxService,
        message: str,
        event: str,
        reason: str,
        level: int = logging.INFO,
        **kwargs: Any,
    ) -> None:
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=KIND_FOX_SERVICE,
            resource_name=resource.name,
            namespace=resource.namespace or "",
            uid=resource.uid or "unknown",
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def reconcile(self, resource: FoxService) -> ReconcileResult:
        """Drive one FoxService one step towards its desired state.

        Args:
            resource: Snapshot of the FoxService to reconcile

        Returns:
            When the resource should be reconciled again

        Raises:
            InputError: If the resource has no namespace
            ControlPlaneError: If any Kubernetes API call fails
        """
        if not resource.namespace:
            raise InputError(
                "expected FoxService resource to be namespaced, can't deploy to an unknown namespace"
            )
        namespace = resource.namespace

        action = determine_action(resource)
        metrics.action_total.labels(action=action.value).inc()

        start_time = time.time()
        with trace_span(
            f"reconcile_{action.value}",
            kind=KIND_FOX_SERVICE,
            attributes={"foxservice.name": resource.name, "foxservice.namespace": namespace},
        ):
            try:
                if action is Action.CREATE:
                    result = self._create(resource, namespace)
                elif action is Action.DELETE:
                    result = self._delete(resource, namespace)
                else:
                    result = self._recheck(resource, namespace)
                metrics.reconcile_total.labels(kind=KIND_FOX_SERVICE, result="success").inc()
                return result
            except Exception:
                metrics.reconcile_total.labels(kind=KIND_FOX_SERVICE, result="error").inc()
                raise
            finally:
                duration = time.time() - start_time
                metrics.reconcile_duration_seconds.labels(kind=KIND_FOX_SERVICE).observe(duration)

    def on_error(self, error: Exception, resource: FoxService | None = None) -> ReconcileResult:
        """Handle a failed reconciliation.

        Every error is retried after the same fixed delay, without backoff
        and without a retry limit.

        Args:
            error: The error raised by :meth:`reconcile`
            resource: The FoxService that failed, if it could be parsed

        Returns:
            Fixed-delay retry directive
        """
        error_type = type(error).__name__
        metrics.error_total.labels(kind=KIND_FOX_SERVICE, error_type=error_type).inc()
        message = f"Reconciliation failed: {sanitize_exception(error)}"
        if resource is not None:
            self._log(
                resource,
                message,
                event="error",
                reason="ReconciliationFailed",
                level=logging.ERROR,
                error_type=error_type,
                requeue_after=self.error_requeue_after,
            )
        else:
            self.logger.error(message)
        return ReconcileResult(requeue_after=self.error_requeue_after)

    def _create(self, resource: FoxService, namespace: str) -> ReconcileResult:
        # The finalizer goes on first: a crash after this point leaves a
        # finalizer without subresources, never subresources without a finalizer.
        with trace_span("add_finalizer", kind=KIND_FOX_SERVICE):
            finalizer.add(self.custom_api, resource, namespace)

        with trace_span("create_deployment", kind=KIND_DEPLOYMENT):
            self.create_deployment(resource, namespace)

        if has_exposure(resource):
            with trace_span("create_service", kind=KIND_SERVICE):
                self.create_service(resource, namespace)

        self._log(
            resource,
            "Subresources created",
            event="create",
            reason="Created",
            replicas=resource.spec.replicas,
            containers=len(resource.spec.containers),
            exposed=has_exposure(resource),
        )
        return ReconcileResult(requeue_after=self.requeue_after, action=Action.CREATE.value)

    def _delete(self, resource: FoxService, namespace: str) -> ReconcileResult:
        # The finalizer is only cleared once every subresource delete succeeded.
        # The Service goes first; a Service that is already gone counts as deleted.
        if has_exposure(resource):
            with trace_span("delete_service", kind=KIND_SERVICE):
                try:
                    self.delete_service(resource.name, namespace)
                except ControlPlaneError as e:
                    if not is_not_found(e):
                        raise

        with trace_span("delete_deployment", kind=KIND_DEPLOYMENT):
            self.delete_deployment(resource.name, namespace)

        with trace_span("remove_finalizer", kind=KIND_FOX_SERVICE):
            finalizer.delete(self.custom_api, resource, namespace)

        self._log(resource, "Subresources deleted, finalizer removed", event="delete", reason="Deleted")
        return ReconcileResult(requeue_after=None, action=Action.DELETE.value)

    def _recheck(self, resource: FoxService, namespace: str) -> ReconcileResult:
        # A finalizer does not prove the subresources were created: the create
        # call may have failed, or the operator died, after the finalizer was added.
        recreated = []
        if self.verify_subresources:
            if self._ensure_exists(
                resource,
                KIND_DEPLOYMENT,
                read=lambda: self.read_deployment(resource.name, namespace),
                create=lambda: self.create_deployment(resource, namespace),
            ):
                recreated.append(KIND_DEPLOYMENT)
            if has_exposure(resource) and self._ensure_exists(
                resource,
                KIND_SERVICE,
                read=lambda: self.read_service(resource.name, namespace),
                create=lambda: self.create_service(resource, namespace),
            ):
                recreated.append(KIND_SERVICE)
        return ReconcileResult(
            requeue_after=self.requeue_after,
            action=Action.NOOP.value,
            recreated=tuple(recreated),
        )

    def _ensure_exists(
        self,
        resource: FoxService,
        kind: str,
        read: Callable[[], Any],
        create: Callable[[], Any],
    ) -> bool:
        """Create a subresource again if it is gone.

        Returns:
            True if the subresource had to be created
        """
        try:
            read()
            return False
        except ControlPlaneError as e:
            if not is_not_found(e):
                raise

        self._log(
            resource,
            f"{kind} is missing, creating it",
            event="recreate",
            reason="SubresourceMissing",
            level=logging.WARNING,
        )
        create()
        metrics.subresource_recreated_total.labels(resource=kind).inc()
        return True

    def create_deployment(self, resource: FoxService, namespace: str) -> client.V1Deployment:
        """Create the Deployment of a FoxService; fails if it already exists."""
        deployment = build_deployment(resource, namespace)
        return call_api(
            KIND_DEPLOYMENT,
            "create",
            self.apps_api.create_namespaced_deployment,
            namespace=namespace,
            body=deployment,
        )

    def read_deployment(self, name: str, namespace: str) -> client.V1Deployment:
        return call_api(
            KIND_DEPLOYMENT,
            "read",
            self.apps_api.read_namespaced_deployment,
            name=name,
            namespace=namespace,
        )

    def delete_deployment(self, name: str, namespace: str) -> None:
        """Delete the Deployment of a FoxService; fails if it does not exist."""
        call_api(
            KIND_DEPLOYMENT,
            "delete",
            self.apps_api.delete_namespaced_deployment,
            name=name,
            namespace=namespace,
        )

    def create_service(self, resource: FoxService, namespace: str) -> client.V1Service:
        """Create the Service of a FoxService; fails if it already exists."""
        service = build_service(resource, namespace)
        return call_api(
            KIND_SERVICE,
            "create",
            self.core_api.create_namespaced_service,
            namespace=namespace,
            body=service,
        )

    def read_service(self, name: str, namespace: str) -> client.V1Service:
        return call_api(
            KIND_SERVICE,
            "read",
            self.core_api.read_namespaced_service,
            name=name,
            namespace=namespace,
        )

    def delete_service(self, name: str, namespace: str) -> None:
        """Delete the Service of a FoxService; fails if it does not exist."""
        call_api(
            KIND_SERVICE,
            "delete",
            self.core_api.delete_namespaced_service,
            name=name,
            namespace=namespace,
        )
