"""
Field validation rules shared by the request schemas.

Each helper either returns the normalized value or raises ValueError with the
message reported to the client for that field.
"""

import ipaddress
import re
import uuid
from typing import Any, Optional

USERNAME_PATTERN = r'^[a-zA-Z0-9_]+$'
MAC_PATTERN = re.compile(r'^([0-9A-F]{2}[:-]){5}([0-9A-F]{2})$', re.IGNORECASE)


def validate_username(value: str) -> str:
    if not re.match(USERNAME_PATTERN, value):
        raise ValueError('Username can only contain letters, numbers, and underscores')
    return value


def normalize_email(value: str) -> str:
    return value.strip().lower()


def validate_ipv4(value: Optional[str]) -> Optional[str]:
    """Dotted-quad IPv4 with every octet in 0-255."""
    if value is None:
        return None
    try:
        return str(ipaddress.IPv4Address(value))
    except ValueError:
        raise ValueError('Please provide a valid IP address') from None


def normalize_mac(value: Optional[str]) -> Optional[str]:
    """Six hex pairs separated by ':' or '-', returned upper-case."""
    if value is None:
        return None
    if not MAC_PATTERN.match(value):
        raise ValueError('Please provide a valid MAC address (format: XX:XX:XX:XX:XX:XX)')
    return value.upper()


def validate_identifier(value: Optional[str], label: str = 'ID') -> Optional[str]:
    """UUID identifier, returned in canonical lower-case form."""
    if value is None:
        return None
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError):
        raise ValueError(f'Invalid {label} format') from None


def reject_null(value: Any, label: str) -> Any:
    """Used by update schemas: a field may be omitted but not set to null."""
    if value is None:
        raise ValueError(f'{label} cannot be null')
    return value


# bcrypt only accepts the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


def validate_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode('utf-8')) > PASSWORD_MAX_BYTES:
        raise ValueError(f'Password cannot exceed {PASSWORD_MAX_BYTES} bytes')
    return value
