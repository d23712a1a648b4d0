"""
Custom Exception Classes for NetOps

Provides the error taxonomy used across the API. Every exception knows the HTTP
status it maps to and how to render itself in the error envelope.
"""

from typing import Any, Dict, List, Optional


class NetOpsError(Exception):
    """
    Base exception for all NetOps errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code to return
        error_code: Machine-readable error code for programmatic handling
        details: Additional error details
    """
    status_code = 500
    error_code = 'INTERNAL_ERROR'

    def __init__(
        self,
        message: str = 'An internal error occurred',
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Any = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result = {
            'success': False,
            'error': self.message,
            'error_code': self.error_code
        }
        if self.details:
            result['details'] = self.details
        return result


class ValidationError(NetOpsError):
    """Request validation failed (400)."""
    status_code = 400
    error_code = 'VALIDATION_ERROR'

    def __init__(
        self,
        message: str = 'Validation failed',
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(message, details=field_errors or None)
        self.field_errors = field_errors or []


class AuthenticationError(NetOpsError):
    """Authentication failed (401)."""
    status_code = 401
    error_code = 'AUTHENTICATION_ERROR'

    def __init__(self, message: str = 'Authentication required'):
        super().__init__(message)


class AuthorizationError(NetOpsError):
    """Authorization failed - insufficient permissions (403)."""
    status_code = 403
    error_code = 'AUTHORIZATION_ERROR'

    def __init__(self, message: str = 'Insufficient permissions'):
        super().__init__(message)


class NotFoundError(NetOpsError):
    """Resource not found (404)."""
    status_code = 404
    error_code = 'NOT_FOUND'

    def __init__(
        self,
        message: str = 'Resource not found',
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None
    ):
        details = {}
        if resource_type:
            details['resource_type'] = resource_type
        if resource_id:
            details['resource_id'] = resource_id
        super().__init__(message, details=details if details else None)


class ConflictError(NetOpsError):
    """Unique constraint conflict, e.g. duplicate username or email (400)."""
    status_code = 400
    error_code = 'CONFLICT'

    def __init__(
        self,
        message: str = 'Resource already exists (duplicate key)',
        conflicting_field: Optional[str] = None
    ):
        details = {}
        if conflicting_field:
            details['conflicting_field'] = conflicting_field
        super().__init__(message, details=details if details else None)


class ReferentialError(NetOpsError):
    """Foreign key violation (400)."""
    status_code = 400
    error_code = 'REFERENTIAL_ERROR'

    def __init__(self, message: str = 'Referenced resource not found (foreign key constraint)'):
        super().__init__(message)


class RequiredFieldError(NetOpsError):
    """Not-null violation surfaced from the store (400)."""
    status_code = 400
    error_code = 'REQUIRED_FIELD_MISSING'

    def __init__(self, message: str = 'Required field is missing (not null constraint)'):
        super().__init__(message)


class InvalidIdentifierError(NetOpsError):
    """Malformed identifier rejected by the store (400)."""
    status_code = 400
    error_code = 'INVALID_IDENTIFIER'

    def __init__(self, message: str = 'Invalid ID format'):
        super().__init__(message)


class ServerError(NetOpsError):
    """Unclassified failure (500)."""
    status_code = 500
    error_code = 'SERVER_ERROR'

    def __init__(self, message: str = 'Server Error'):
        super().__init__(message)
