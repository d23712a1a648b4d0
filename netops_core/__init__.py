"""
NetOps Core - Shared library for the NetOps inventory API

This package provides the functionality behind the HTTP service:
- Database models, session management and query builders
- Entity stores for users, sites, containers and devices
- Authentication utilities (JWT, password hashing, auth gate)
- Request validation rules and the error taxonomy
- Configuration management
"""

__version__ = "1.0.0"
