"""Attach and clear the FoxService finalizer.

Both operations send a JSON merge patch of ``metadata.finalizers``. Tokens
owned by other controllers are carried over from the snapshot, so only this
operator's token is ever added or removed.
"""

from __future__ import annotations

from typing import Any

from kubernetes import client

from .constants import API_GROUP, API_VERSION, FINALIZER, KIND_FOX_SERVICE, PLURAL_FOX_SERVICE
from .models import FoxService
from .utils.api import call_api


def _patch_finalizers(
    api: client.CustomObjectsApi,
    resource: FoxService,
    namespace: str,
    finalizers: list[str] | None,
) -> dict[str, Any]:
    body = {"metadata": {"finalizers": finalizers}}
    return call_api(
        KIND_FOX_SERVICE,
        "patch",
        api.patch_namespaced_custom_object,
        group=API_GROUP,
        version=API_VERSION,
        namespace=namespace,
        plural=PLURAL_FOX_SERVICE,
        name=resource.name,
        body=body,
    )


def add(api: client.CustomObjectsApi, resource: FoxService, namespace: str) -> dict[str, Any]:
    """Add the finalizer to a FoxService.

    If the finalizer is already present the patch is still issued and has
    no effect.

    Args:
        api: Kubernetes CustomObjectsApi instance
        resource: FoxService to modify; existence is not verified
        namespace: Namespace the FoxService resides in

    Returns:
        The patched FoxService object

    Raises:
        ControlPlaneError: If the patch call fails
    """
    finalizers = [f for f in resource.lifecycle.finalizers if f != FINALIZER]
    finalizers.append(FINALIZER)
    return _patch_finalizers(api, resource, namespace, finalizers)


def delete(api: client.CustomObjectsApi, resource: FoxService, namespace: str) -> dict[str, Any]:
    """Remove the finalizer from a FoxService.

    The finalizer field is cleared entirely (set to null) once no other
    tokens remain. Succeeds when there is nothing to remove.

    Args:
        api: Kubernetes CustomObjectsApi instance
        resource: FoxService to modify; existence is not verified
        namespace: Namespace the FoxService resides in

    Returns:
        The patched FoxService object

    Raises:
        ControlPlaneError: If the patch call fails
    """
    finalizers = [f for f in resource.lifecycle.finalizers if f != FINALIZER]
    return _patch_finalizers(api, resource, namespace, finalizers or None)
