"""
Pydantic request schemas for the NetOps API
"""

from .auth import (
    LoginRequest,
    RegisterRequest,
)

from .containers import (
    ContainerCreate,
    ContainerUpdate,
)

from .devices import (
    DeviceCreate,
    DeviceUpdate,
)

from .sites import (
    SiteCreate,
    SiteUpdate,
)

from .users import (
    UserUpdate,
)

__all__ = [
    # Auth
    "LoginRequest",
    "RegisterRequest",
    # Containers
    "ContainerCreate",
    "ContainerUpdate",
    # Devices
    "DeviceCreate",
    "DeviceUpdate",
    # Sites
    "SiteCreate",
    "SiteUpdate",
    # Users
    "UserUpdate",
]
