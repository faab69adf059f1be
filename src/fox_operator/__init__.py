"""Kubernetes operator reconciling FoxService resources into Deployments and Services."""

__version__ = "0.1.0"
