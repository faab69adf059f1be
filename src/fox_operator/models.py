"""Data model for the FoxService custom resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .exceptions import InputError


@dataclass(frozen=True)
class ResourceIdentity:
    """Name and namespace of a FoxService resource."""

    name: str
    namespace: str | None = None


@dataclass(frozen=True)
class IngressPort:
    """A port to expose over HTTP."""

    port: int


@dataclass(frozen=True)
class ContainerSpec:
    """A single container of a FoxService."""

    name: str
    image: str
    args: list[str] | None = None
    env: dict[str, str] | None = None
    # hostPort -> containerPort
    ports: dict[int, int] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContainerSpec:
        """Parse a container entry of the resource spec.

        Args:
            data: Raw container mapping from the resource spec

        Returns:
            Parsed container spec

        Raises:
            InputError: If name or image is missing, or a port is not an integer
        """
        name = data.get("name")
        image = data.get("image")
        if not name or not image:
            raise InputError("every container requires a name and an image")

        args = data.get("args")
        env = data.get("env")
        ports = data.get("ports")

        parsed_ports = None
        if ports is not None:
            try:
                # JSON object keys are always strings
                parsed_ports = {int(host): int(container) for host, container in ports.items()}
            except (AttributeError, TypeError, ValueError) as e:
                raise InputError(f"container {name} has a non-integer port: {e}") from e

        return cls(
            name=name,
            image=image,
            args=list(args) if args is not None else None,
            env={str(k): str(v) for k, v in env.items()} if env is not None else None,
            ports=parsed_ports,
        )


@dataclass(frozen=True)
class FoxServiceSpec:
    """Desired state declared by a FoxService."""

    replicas: int
    containers: list[ContainerSpec] = field(default_factory=list)
    http_ingress: list[IngressPort] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FoxServiceSpec:
        """Parse the spec section of a FoxService body."""
        containers = [ContainerSpec.from_dict(c) for c in data.get("containers") or []]

        http_ingress = data.get("httpIngress")
        ingress = None
        try:
            if http_ingress is not None:
                ingress = [IngressPort(port=int(entry["port"])) for entry in http_ingress]
            replicas = int(data.get("replicas", 0))
        except (KeyError, TypeError, ValueError) as e:
            raise InputError(f"malformed spec: {e}") from e

        return cls(
            replicas=replicas,
            containers=containers,
            http_ingress=ingress,
        )


@dataclass(frozen=True)
class Lifecycle:
    """Lifecycle metadata of a resource: finalizers and the deletion marker."""

    finalizers: tuple[str, ...] = ()
    deletion_timestamp: str | None = None

    @property
    def is_deleting(self) -> bool:
        return self.deletion_timestamp is not None


@dataclass(frozen=True)
class FoxService:
    """Snapshot of a FoxService resource as delivered to the reconciler."""

    identity: ResourceIdentity
    spec: FoxServiceSpec
    lifecycle: Lifecycle = field(default_factory=Lifecycle)
    uid: str | None = None
    generation: int | None = None

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def namespace(self) -> str | None:
        return self.identity.namespace

    @property
    def meta(self) -> dict[str, Any]:
        """Minimal metadata dict for logging and events."""
        return {
            "name": self.name,
            "namespace": self.namespace,
            "uid": self.uid,
            "generation": self.generation,
        }

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> FoxService:
        """Build a FoxService from a raw Kubernetes object body.

        Args:
            body: The object as served by the Kubernetes API (or kopf's body view)

        Returns:
            Parsed FoxService snapshot

        Raises:
            InputError: If the body has no name or a malformed spec
        """
        metadata = body.get("metadata") or {}
        name = metadata.get("name")
        if not name:
            raise InputError("metadata.name is required")

        return cls(
            identity=ResourceIdentity(name=name, namespace=metadata.get("namespace")),
            spec=FoxServiceSpec.from_dict(body.get("spec") or {}),
            lifecycle=Lifecycle(
                finalizers=tuple(metadata.get("finalizers") or ()),
                deletion_timestamp=metadata.get("deletionTimestamp"),
            ),
            uid=metadata.get("uid"),
            generation=metadata.get("generation"),
        )


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one reconciliation: when to look at the resource again.

    ``requeue_after`` is in seconds; ``None`` means no further check is needed.
    ``recreated`` lists the kinds of subresources found missing and created again.
    """

    requeue_after: float | None = None
    action: str | None = None
    recreated: tuple[str, ...] = ()
