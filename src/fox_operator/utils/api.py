"""Helpers for issuing Kubernetes API calls."""

from __future__ import annotations

import time
from typing import Any, Callable, TypeVar

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from .. import metrics
from ..exceptions import ControlPlaneError

_T = TypeVar("_T")


def call_api(
    resource: str,
    operation: str,
    fn: Callable[..., _T],
    *args: Any,
    **kwargs: Any,
) -> _T:
    """Invoke a Kubernetes API method, recording metrics.

    Args:
        resource: Kind of object the call acts on (e.g. "Deployment")
        operation: Operation name (e.g. "create", "patch", "delete", "read")
        fn: Bound API client method
        *args: Positional arguments for ``fn``
        **kwargs: Keyword arguments for ``fn``

    Returns:
        Whatever ``fn`` returns

    Raises:
        ControlPlaneError: If the API server rejected the call or could not be reached
    """
    start_time = time.time()
    try:
        result = fn(*args, **kwargs)
        metrics.subresource_operations_total.labels(
            resource=resource, operation=operation, result="success"
        ).inc()
        return result
    except (ApiException, HTTPError) as e:
        metrics.subresource_operations_total.labels(
            resource=resource, operation=operation, result="error"
        ).inc()
        raise ControlPlaneError(f"{operation} {resource}", e) from e
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(
            resource=resource, operation=operation
        ).observe(duration)


def is_not_found(error: ControlPlaneError) -> bool:
    """Whether a control-plane error means the object does not exist."""
    return error.status == 404


def get_api_client() -> client.ApiClient:
    """Get a Kubernetes API client shared by all reconciliations.

    Returns:
        ApiClient configured from the in-cluster service account, or the local kubeconfig
    """
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()

    return client.ApiClient()
