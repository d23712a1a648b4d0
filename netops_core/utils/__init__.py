"""
Utility modules for NetOps Core
"""

from .responses import (
    success_response,
    error_response,
    calculate_pagination,
)

from .datetime import (
    utc_now,
    to_utc,
    format_iso,
)

__all__ = [
    # Responses
    "success_response",
    "error_response",
    "calculate_pagination",
    # DateTime
    "utc_now",
    "to_utc",
    "format_iso",
]
