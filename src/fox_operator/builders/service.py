"""Builder for the Service exposing a FoxService over HTTP."""

from __future__ import annotations

from kubernetes import client

from ..models import FoxService
from .labels import common_labels, selector_labels


def has_exposure(resource: FoxService) -> bool:
    """Whether the FoxService declares any HTTP ingress port."""
    return bool(resource.spec.http_ingress)


def build_service(resource: FoxService, namespace: str) -> client.V1Service:
    """Create the Service for a FoxService.

    Every ingress port is exposed unchanged, i.e. ``targetPort == port``.
    Without ``httpIngress`` the Service carries no ports.

    Args:
        resource: FoxService being reconciled
        namespace: Namespace to place the Service in

    Returns:
        Service object ready to be posted
    """
    name = resource.name
    ingress = resource.spec.http_ingress or []
    ports = [client.V1ServicePort(port=entry.port, target_port=entry.port) for entry in ingress]

    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            labels=common_labels(name),
        ),
        spec=client.V1ServiceSpec(
            ports=ports,
            selector=selector_labels(name),
        ),
    )
