"""
SQLAlchemy Models for NetOps

Defines the inventory schema: users, sites, containers and devices.
Sites own containers and containers own devices. Foreign keys are declared
ON DELETE RESTRICT, so a parent with children cannot be deleted.
"""

import uuid
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

from netops_core.utils.datetime import utc_now

Base = declarative_base()


class Role(str, Enum):
    """User role enumeration"""
    ADMIN = "admin"
    USER = "user"


SITE_STATUSES = ('active', 'inactive')
CONTAINER_TYPES = ('rack', 'cabinet', 'closet', 'room', 'other')
CONTAINER_STATUSES = ('active', 'inactive')
DEVICE_TYPES = ('switch', 'router', 'firewall', 'server', 'access-point', 'other')
DEVICE_STATUSES = ('active', 'inactive', 'maintenance')


def _new_id() -> str:
    return str(uuid.uuid4())


def _in_check(column: str, values) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class User(Base):
    """User accounts"""
    __tablename__ = 'users'
    __table_args__ = (
        CheckConstraint(_in_check('role', [r.value for r in Role]), name='ck_users_role'),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    username = Column(String(30), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class Site(Base):
    """Physical locations"""
    __tablename__ = 'sites'
    __table_args__ = (
        CheckConstraint(_in_check('status', SITE_STATUSES), name='ck_sites_status'),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    location = Column(String(200), nullable=False)
    address = Column(String(300), nullable=True)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default='active')
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class Container(Base):
    """Racks, cabinets, closets and rooms at a site"""
    __tablename__ = 'containers'
    __table_args__ = (
        CheckConstraint(_in_check('type', CONTAINER_TYPES), name='ck_containers_type'),
        CheckConstraint(_in_check('status', CONTAINER_STATUSES), name='ck_containers_status'),
        CheckConstraint('capacity >= 0', name='ck_containers_capacity'),
        Index('idx_containers_site_status', 'site_id', 'status'),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
    site_id = Column(
        String(36),
        ForeignKey('sites.id', ondelete='RESTRICT'),
        nullable=False,
    )
    location = Column(String(200), nullable=True)
    capacity = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default='active')
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class Device(Base):
    """Networked equipment mounted in a container"""
    __tablename__ = 'devices'
    __table_args__ = (
        CheckConstraint(_in_check('type', DEVICE_TYPES), name='ck_devices_type'),
        CheckConstraint(_in_check('status', DEVICE_STATUSES), name='ck_devices_status'),
        Index('idx_devices_container_status', 'container_id', 'status'),
        Index('idx_devices_type_status', 'type', 'status'),
        Index('idx_devices_ip_address', 'ip_address'),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
    manufacturer = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    serial_number = Column(String(100), nullable=True)
    ip_address = Column(String(15), nullable=True)
    mac_address = Column(String(17), nullable=True)
    container_id = Column(
        String(36),
        ForeignKey('containers.id', ondelete='RESTRICT'),
        nullable=False,
    )
    status = Column(String(20), nullable=False, default='active')
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
