"""
Entity stores.

One data-access object per entity, all sharing the update and pagination builders.
"""

from .base import BaseStore
from .containers import ContainerStore
from .devices import DeviceStore
from .sites import SiteStore
from .users import UserStore

__all__ = [
    'BaseStore',
    'ContainerStore',
    'DeviceStore',
    'SiteStore',
    'UserStore',
]
