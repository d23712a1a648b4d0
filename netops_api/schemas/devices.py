"""
Device Schemas

Pydantic models for device requests.
"""

from typing import Optional

from pydantic import Field, field_validator

from netops_core.validation import (
    normalize_mac,
    reject_null,
    validate_identifier,
    validate_ipv4,
)

from .common import CamelModel, DeviceStatus, DeviceType


class DeviceBase(CamelModel):
    """Optional device attributes shared by create and update"""
    manufacturer: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    ip_address: Optional[str] = Field(None, description="Dotted-quad IPv4")
    mac_address: Optional[str] = Field(None, description="XX:XX:XX:XX:XX:XX or XX-XX-XX-XX-XX-XX")
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator('ip_address')
    @classmethod
    def check_ip_address(cls, v: Optional[str]) -> Optional[str]:
        return validate_ipv4(v)

    @field_validator('mac_address')
    @classmethod
    def check_mac_address(cls, v: Optional[str]) -> Optional[str]:
        return normalize_mac(v)

    @field_validator('container_id', check_fields=False)
    @classmethod
    def check_container_id(cls, v: Optional[str]) -> Optional[str]:
        return validate_identifier(v, 'Container ID')


class DeviceCreate(DeviceBase):
    """Schema for creating a device"""
    name: str = Field(..., min_length=1, max_length=100)
    type: DeviceType
    container_id: str = Field(..., description="Owning container")
    status: DeviceStatus = 'active'


class DeviceUpdate(DeviceBase):
    """Schema for updating a device"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[DeviceType] = None
    container_id: Optional[str] = None
    status: Optional[DeviceStatus] = None

    @field_validator('name', 'type', 'container_id', 'status')
    @classmethod
    def not_null(cls, v, info):
        return reject_null(v, info.field_name.replace('_', ' ').capitalize())
