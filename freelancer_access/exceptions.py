"""
Custom Exception Classes for Secure Freelancer Access

Access decisions themselves never raise: the engine returns UNRESTRICTED,
a set of IDs or a boolean. The exceptions below cover the host layer
(authentication, missing records, invalid admin input) and are rendered
by the handlers in ``exception_handlers``.
"""

from typing import Any

from fastapi import status


class AccessControlError(Exception):
    """Base exception class for all access-control related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(AccessControlError):
    """Raised when authentication fails"""

    def __init__(self, message: str = "Authentication failed", details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, details=details or {})


class AuthorizationError(AccessControlError):
    """Raised when user lacks permission for an action"""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN)


class AccessDeniedError(AuthorizationError):
    """Raised by the host when a direct open of a content item is refused"""

    def __init__(self, content_id: int, content_type: str):
        super().__init__(message="You do not have permission to edit this content.")
        self.details = {"content_id": content_id, "content_type": content_type}


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(AccessControlError):
    """Base class for resource not found errors"""

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: Any | None = None):
        super().__init__(resource_type="User", resource_id=user_id)


class ContentNotFoundError(ResourceNotFoundError):
    def __init__(self, content_id: Any | None = None):
        super().__init__(resource_type="Content", resource_id=content_id)


class TemplateNotFoundError(ResourceNotFoundError):
    def __init__(self, template_id: Any | None = None):
        super().__init__(resource_type="Template", resource_id=template_id)


# ============================================================================
# Validation & Business Logic Exceptions
# ============================================================================


class ValidationError(AccessControlError):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class InvalidOperationError(AccessControlError):
    """Raised when an operation is invalid in the current context"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details or {})
