# apps/dashboard_api/schemas/enums.py
from enum import Enum


# System
class SystemHealth(str, Enum):
    HEALTHY = "Healthy"
    DEGRADED = "Degraded"  # Catalog failed, grid is empty
    STARTING = "Starting"  # Catalog still loading


class Environment(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    STAGING = "staging"


# Dashboard state machines
class CatalogPhase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"  # Terminal for the process, no retry


class DetailPhase(str, Enum):
    NONE = "none"  # Nothing selected
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"  # Neutral "analysis unavailable" panel
