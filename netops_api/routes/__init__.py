"""
API Routes
"""

from . import auth, containers, devices, health, sites, users

__all__ = ["auth", "containers", "devices", "health", "sites", "users"]
