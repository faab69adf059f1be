"""Builders translating FoxService specs into native Kubernetes objects."""

from .deployment import build_deployment
from .service import build_service, has_exposure

__all__ = ["build_deployment", "build_service", "has_exposure"]
