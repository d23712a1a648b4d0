"""
NetOps API

FastAPI service exposing the inventory (sites, containers, devices) and user
accounts over REST.
"""

from netops_core import __version__

__all__ = ["__version__"]
