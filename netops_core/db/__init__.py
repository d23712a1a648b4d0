"""
Database module for NetOps Core

Provides:
- SQLAlchemy models for users, sites, containers and devices
- The Database persistence handle
- Update and filter/pagination builders
- Persistence error classification
"""

from .models import (
    Base,
    Role,
    User,
    Site,
    Container,
    Device,
    SITE_STATUSES,
    CONTAINER_TYPES,
    CONTAINER_STATUSES,
    DEVICE_TYPES,
    DEVICE_STATUSES,
)

from .session import (
    Database,
    ExecuteResult,
)

from .builders import (
    build_update,
    FilterBuilder,
    Page,
    PageRequest,
)

from .errors import (
    classify_db_error,
    sqlstate,
)

__all__ = [
    # Models
    "Base",
    "Role",
    "User",
    "Site",
    "Container",
    "Device",
    "SITE_STATUSES",
    "CONTAINER_TYPES",
    "CONTAINER_STATUSES",
    "DEVICE_TYPES",
    "DEVICE_STATUSES",
    # Session
    "Database",
    "ExecuteResult",
    # Builders
    "build_update",
    "FilterBuilder",
    "Page",
    "PageRequest",
    # Errors
    "classify_db_error",
    "sqlstate",
]
