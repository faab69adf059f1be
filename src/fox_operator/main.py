"""Main entry point for the Fox Operator.

Run with ``kopf run -m fox_operator.main``.
"""

from __future__ import annotations

import os
from typing import Any

import kopf

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .handlers import fox_service
from .tracing import initialize_tracing
from .utils.api import get_api_client


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    # Set up structured JSON logging
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = int(os.getenv("FOX_MAX_WORKERS", "4"))

    # One API client, shared by every reconciliation
    fox_service.configure(get_api_client())

    # Start metrics HTTP server with health check endpoints
    metrics_port = int(os.getenv("METRICS_PORT", "8080"))
    health.start_server(metrics_port)
    health.set_ready()


@kopf.on.cleanup()
def shutdown(**_: Any) -> None:
    """Stop reporting readiness while the operator exits."""
    health.set_ready(False)
