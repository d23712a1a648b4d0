"""
Standardized API Response Utilities for NetOps

Provides consistent response formatting across all routes.
"""

from typing import Any, Dict, Optional


def success_response(
    data: Any = None,
    pagination: Optional[Dict[str, int]] = None
) -> Dict[str, Any]:
    """
    Create a standardized success response.

    Args:
        data: The response data
        pagination: Optional pagination block ({page, limit, total, pages})

    Returns:
        Dict with success response structure
    """
    response = {
        "success": True,
        "data": data,
    }
    if pagination is not None:
        response["pagination"] = pagination
    return response


def error_response(
    error: str,
    details: Any = None
) -> Dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        error: Error message
        details: Optional additional error data

    Returns:
        Dict with error response structure
    """
    response = {
        "success": False,
        "error": error,
    }
    if details is not None:
        response["details"] = details
    return response


def calculate_pagination(page: int, limit: int, total: int) -> Dict[str, int]:
    """
    Build the pagination block for a list response.

    Args:
        page: Current page number (1-indexed)
        limit: Number of items per page
        total: Total number of items across all pages

    Returns:
        Dict with page, limit, total and pages
    """
    pages = (total + limit - 1) // limit if limit > 0 else 0

    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": pages,
    }
