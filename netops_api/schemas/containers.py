"""
Container Schemas

Pydantic models for container requests.
"""

from typing import Optional

from pydantic import Field, field_validator

from netops_core.validation import reject_null, validate_identifier

from .common import CamelModel, ContainerStatus, ContainerType


class ContainerCreate(CamelModel):
    """Schema for creating a container"""
    name: str = Field(..., min_length=1, max_length=100)
    type: ContainerType
    site_id: str = Field(..., description="Owning site")
    location: Optional[str] = Field(None, max_length=200)
    capacity: Optional[int] = Field(None, ge=0, description="Rack units or slots; defaults to 0")
    status: ContainerStatus = 'active'

    @field_validator('site_id')
    @classmethod
    def check_site_id(cls, v: str) -> str:
        return validate_identifier(v, 'Site ID')


class ContainerUpdate(CamelModel):
    """Schema for updating a container"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[ContainerType] = None
    site_id: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    capacity: Optional[int] = Field(None, ge=0)
    status: Optional[ContainerStatus] = None

    @field_validator('name', 'type', 'site_id', 'capacity', 'status')
    @classmethod
    def not_null(cls, v, info):
        return reject_null(v, info.field_name.replace('_', ' ').capitalize())

    @field_validator('site_id')
    @classmethod
    def check_site_id(cls, v: str) -> str:
        return validate_identifier(v, 'Site ID')
