"""Prometheus metrics for the Fox Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "fox_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "fox_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

action_total = Counter(
    "fox_operator_action_total",
    "Actions decided for FoxService resources",
    ["action"],
)

# Kubernetes API metrics
subresource_operations_total = Counter(
    "fox_operator_subresource_operations_total",
    "Total number of Kubernetes API operations",
    ["resource", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "fox_operator_api_call_duration_seconds",
    "Duration of Kubernetes API calls in seconds",
    ["resource", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

subresource_recreated_total = Counter(
    "fox_operator_subresource_recreated_total",
    "Subresources found missing during a recheck and created again",
    ["resource"],
)

# Error metrics
error_total = Counter(
    "fox_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

resource_status_total = Counter(
    "fox_operator_resource_status_total",
    "Resource status updates",
    ["kind", "status"],
)
