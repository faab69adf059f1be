"""Builder for the Deployment backing a FoxService."""

from __future__ import annotations

from kubernetes import client

from ..constants import IMAGE_PULL_POLICY
from ..models import ContainerSpec, FoxService
from .labels import common_labels, selector_labels


def build_container(container: ContainerSpec) -> client.V1Container:
    """Translate one container of the FoxService spec into a V1Container.

    Env entries and port mappings are flattened in the order of the input
    mappings, one entry each.

    Args:
        container: Container from the FoxService spec

    Returns:
        Container for the pod template
    """
    env = None
    if container.env is not None:
        env = [client.V1EnvVar(name=key, value=value) for key, value in container.env.items()]

    ports = None
    if container.ports is not None:
        ports = [
            client.V1ContainerPort(container_port=container_port, host_port=host_port)
            for host_port, container_port in container.ports.items()
        ]

    return client.V1Container(
        name=container.name,
        image=container.image,
        image_pull_policy=IMAGE_PULL_POLICY,
        args=list(container.args) if container.args is not None else None,
        env=env,
        ports=ports,
    )


def build_deployment(resource: FoxService, namespace: str) -> client.V1Deployment:
    """Create the Deployment for a FoxService.

    Replicas are copied verbatim, without any validation.

    Args:
        resource: FoxService being reconciled
        namespace: Namespace to place the Deployment in

    Returns:
        Deployment object ready to be posted
    """
    name = resource.name
    containers = [build_container(c) for c in resource.spec.containers]

    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            labels=common_labels(name),
        ),
        spec=client.V1DeploymentSpec(
            replicas=resource.spec.replicas,
            selector=client.V1LabelSelector(match_labels=selector_labels(name)),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels=common_labels(name)),
                spec=client.V1PodSpec(containers=containers),
            ),
        ),
    )
