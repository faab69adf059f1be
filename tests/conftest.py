"""Shared fixtures for Fox Operator tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from fox_operator.models import FoxService


def make_body(
    name: str = "echo",
    namespace: str | None = "default",
    replicas: int = 3,
    containers: list[dict[str, Any]] | None = None,
    http_ingress: list[dict[str, Any]] | None = None,
    finalizers: list[str] | None = None,
    deletion_timestamp: str | None = None,
) -> dict[str, Any]:
    """Build a raw FoxService object body as served by the API server."""
    metadata: dict[str, Any] = {"name": name, "uid": f"{name}-uid", "generation": 1}
    if namespace is not None:
        metadata["namespace"] = namespace
    if finalizers is not None:
        metadata["finalizers"] = finalizers
    if deletion_timestamp is not None:
        metadata["deletionTimestamp"] = deletion_timestamp

    spec: dict[str, Any] = {
        "replicas": replicas,
        "containers": containers if containers is not None else [{"name": "web", "image": "echo:latest"}],
    }
    if http_ingress is not None:
        spec["httpIngress"] = http_ingress

    return {
        "apiVersion": "cbopt.com/v1",
        "kind": "FoxService",
        "metadata": metadata,
        "spec": spec,
    }


@pytest.fixture
def fox_body() -> Callable[..., dict[str, Any]]:
    """Factory for raw FoxService bodies."""
    return make_body


@pytest.fixture
def fox_service() -> Callable[..., FoxService]:
    """Factory for parsed FoxService snapshots."""

    def _make(**kwargs: Any) -> FoxService:
        return FoxService.from_body(make_body(**kwargs))

    return _make
