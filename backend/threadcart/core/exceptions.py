"""
Domain errors raised by the services and their collaborators.

Each error carries the HTTP status it maps to; the handlers in
error_handlers.py render them as ``{"error": message}``.
"""
from typing import Any, Dict, Optional

from fastapi import status


class CartError(Exception):
    """Base exception for all cart service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        return {"error": self.message}


class InvalidArgumentError(CartError):
    """Missing or malformed request fields."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(CartError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(CartError):
    """Authenticated, but not allowed to touch this resource."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(CartError):
    """A user, product, cart, order or line item does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(CartError):
    """Store or collaborator failure."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
