"""CustomResourceDefinition for the FoxService kind.

Write the definition as YAML with ``python -m fox_operator.crd [PATH]``.
"""

from __future__ import annotations

import sys
from typing import Any

import yaml

from .constants import (
    API_GROUP,
    API_VERSION,
    KIND_FOX_SERVICE,
    PLURAL_FOX_SERVICE,
    SHORT_NAMES_FOX_SERVICE,
    SINGULAR_FOX_SERVICE,
)

CRD_NAME = f"{PLURAL_FOX_SERVICE}.{API_GROUP}"
DEFAULT_OUTPUT = f"{CRD_NAME}.yaml"


def container_schema() -> dict[str, Any]:
    """Schema of one entry of ``spec.containers``."""
    return {
        "type": "object",
        "required": ["name", "image"],
        "properties": {
            "name": {"type": "string"},
            "image": {"type": "string"},
            "args": {"type": "array", "items": {"type": "string"}},
            "env": {"type": "object", "additionalProperties": {"type": "string"}},
            "ports": {
                "type": "object",
                "description": "Mapping of host port to container port.",
                "additionalProperties": {"type": "integer", "format": "int32"},
            },
        },
    }


def spec_schema() -> dict[str, Any]:
    """Schema of the FoxService spec."""
    return {
        "type": "object",
        "required": ["replicas", "containers"],
        "properties": {
            "replicas": {"type": "integer", "format": "int32", "minimum": 0},
            "containers": {"type": "array", "items": container_schema()},
            "httpIngress": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["port"],
                    "properties": {"port": {"type": "integer", "format": "int32"}},
                },
            },
        },
    }


def build_crd() -> dict[str, Any]:
    """Build the CustomResourceDefinition for FoxService.

    Returns:
        CRD manifest as a plain dict
    """
    return {
        "apiVersion": "apiextensions.k8s.io/v1",
        "kind": "CustomResourceDefinition",
        "metadata": {"name": CRD_NAME},
        "spec": {
            "group": API_GROUP,
            "names": {
                "kind": KIND_FOX_SERVICE,
                "plural": PLURAL_FOX_SERVICE,
                "singular": SINGULAR_FOX_SERVICE,
                "shortNames": list(SHORT_NAMES_FOX_SERVICE),
            },
            "scope": "Namespaced",
            "versions": [
                {
                    "name": API_VERSION,
                    "served": True,
                    "storage": True,
                    "subresources": {"status": {}},
                    "additionalPrinterColumns": [
                        {"name": "Replicas", "type": "integer", "jsonPath": ".spec.replicas"},
                        {
                            "name": "Ready",
                            "type": "string",
                            "jsonPath": '.status.conditions[?(@.type=="Ready")].status',
                        },
                        {"name": "Age", "type": "date", "jsonPath": ".metadata.creationTimestamp"},
                    ],
                    "schema": {
                        "openAPIV3Schema": {
                            "type": "object",
                            "properties": {
                                "spec": spec_schema(),
                                "status": {
                                    "type": "object",
                                    "x-kubernetes-preserve-unknown-fields": True,
                                },
                            },
                        }
                    },
                }
            ],
        },
    }


def write_crd(path: str = DEFAULT_OUTPUT) -> None:
    """Write the CRD manifest to ``path`` as YAML."""
    with open(path, "w") as f:
        yaml.safe_dump(build_crd(), f, sort_keys=False)


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    write_crd(args[0] if args else DEFAULT_OUTPUT)


if __name__ == "__main__":
    main()
