"""
Row to record conversion.

Rows come back from the database with snake_case column names; API records use
camelCase keys and ISO-8601 UTC timestamps. Nested parent summaries are read from
labelled join columns (``site_id``/``site_name``/... style prefixes).
"""

from typing import Any, Dict, Optional

from netops_core.utils.datetime import format_iso

USER_COLUMNS = ('id', 'username', 'email', 'role', 'created_at', 'updated_at')
SITE_COLUMNS = (
    'id', 'name', 'location', 'address', 'description', 'status',
    'created_at', 'updated_at',
)
CONTAINER_COLUMNS = (
    'id', 'name', 'type', 'site_id', 'location', 'capacity', 'status',
    'created_at', 'updated_at',
)
DEVICE_COLUMNS = (
    'id', 'name', 'type', 'manufacturer', 'model', 'serial_number', 'ip_address',
    'mac_address', 'container_id', 'status', 'notes', 'created_at', 'updated_at',
)


def user_to_dict(row: Dict[str, Any]) -> Dict[str, Any]:
    record = {
        'id': row['id'],
        'username': row['username'],
        'email': row['email'],
        'role': row['role'],
        'createdAt': format_iso(row['created_at']),
        'updatedAt': format_iso(row['updated_at']),
    }
    # Only present when explicitly selected for authentication
    if 'password' in row:
        record['password'] = row['password']
    return record


def site_to_dict(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'id': row['id'],
        'name': row['name'],
        'location': row['location'],
        'address': row['address'],
        'description': row['description'],
        'status': row['status'],
        'createdAt': format_iso(row['created_at']),
        'updatedAt': format_iso(row['updated_at']),
    }


def container_to_dict(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'id': row['id'],
        'name': row['name'],
        'type': row['type'],
        'siteId': row['site_id'],
        'location': row['location'],
        'capacity': row['capacity'],
        'status': row['status'],
        'createdAt': format_iso(row['created_at']),
        'updatedAt': format_iso(row['updated_at']),
    }


def device_to_dict(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'id': row['id'],
        'name': row['name'],
        'type': row['type'],
        'manufacturer': row['manufacturer'],
        'model': row['model'],
        'serialNumber': row['serial_number'],
        'ipAddress': row['ip_address'],
        'macAddress': row['mac_address'],
        'containerId': row['container_id'],
        'status': row['status'],
        'notes': row['notes'],
        'createdAt': format_iso(row['created_at']),
        'updatedAt': format_iso(row['updated_at']),
    }


def site_summary(row: Dict[str, Any], prefix: str = 'site_') -> Optional[Dict[str, Any]]:
    if row.get(f'{prefix}id') is None:
        return None
    return {
        'id': row[f'{prefix}id'],
        'name': row[f'{prefix}name'],
        'location': row[f'{prefix}location'],
    }


def container_summary(row: Dict[str, Any], prefix: str = 'container_') -> Optional[Dict[str, Any]]:
    if row.get(f'{prefix}id') is None:
        return None
    return {
        'id': row[f'{prefix}id'],
        'name': row[f'{prefix}name'],
        'type': row[f'{prefix}type'],
        'location': row[f'{prefix}location'],
    }
