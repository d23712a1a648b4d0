"""
Common Schemas

Base model and shared field types for request bodies. Bodies use camelCase keys
on the wire; validated payloads are dumped with snake_case names for the stores.
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SiteStatus = Literal['active', 'inactive']
ContainerType = Literal['rack', 'cabinet', 'closet', 'room', 'other']
ContainerStatus = Literal['active', 'inactive']
DeviceType = Literal['switch', 'router', 'firewall', 'server', 'access-point', 'other']
DeviceStatus = Literal['active', 'inactive', 'maintenance']


class CamelModel(BaseModel):
    """Request body base: camelCase aliases, trimmed strings"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )

    def create_fields(self) -> Dict[str, Any]:
        """Every field, defaults included."""
        return self.model_dump()

    def update_fields(self) -> Dict[str, Any]:
        """Only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)
