"""Constants for the Fox Operator."""

# API Group
API_GROUP = "cbopt.com"
API_VERSION = "v1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_FOX_SERVICE = "FoxService"
PLURAL_FOX_SERVICE = "foxservices"
SINGULAR_FOX_SERVICE = "foxservice"
SHORT_NAMES_FOX_SERVICE = ["fs"]
KIND_DEPLOYMENT = "Deployment"
KIND_SERVICE = "Service"

# Labels
LABEL_APP_NAME = "app.kubernetes.io/name"
LABEL_MANAGED_BY = "app.kubernetes.io/managed-by"
MANAGED_BY_VALUE = "fox-operator"

# Finalizers
FINALIZER = f"{PLURAL_FOX_SERVICE}.{API_GROUP}"

# Controller name used in structured logs
CONTROLLER_NAME = "fox-operator"

# Container settings
IMAGE_PULL_POLICY = "Always"

# Condition Types
COND_READY = "Ready"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_SUBRESOURCES_CREATED = "SubresourcesCreated"
EVENT_REASON_SUBRESOURCES_DELETED = "SubresourcesDeleted"
EVENT_REASON_SUBRESOURCE_RECREATED = "SubresourceRecreated"
