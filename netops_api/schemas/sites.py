"""
Site Schemas

Pydantic models for site requests.
"""

from typing import Optional

from pydantic import Field, field_validator

from netops_core.validation import reject_null

from .common import CamelModel, SiteStatus


class SiteCreate(CamelModel):
    """Schema for creating a site"""
    name: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = Field(None, max_length=500)
    status: SiteStatus = 'active'


class SiteUpdate(CamelModel):
    """Schema for updating a site"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = Field(None, max_length=500)
    status: Optional[SiteStatus] = None

    @field_validator('name', 'location', 'status')
    @classmethod
    def not_null(cls, v, info):
        return reject_null(v, info.field_name.capitalize())
