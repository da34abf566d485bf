"""
Custom exceptions for Order Fulfillment.
"""

import logging
from typing import Dict, Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BusinessException(Exception):
    """Base exception for business logic errors."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, code: str = "BUSINESS_ERROR", details: Dict[str, Any] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class InvalidTransitionException(BusinessException):
    """Raised when attempting an invalid workflow transition."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current_status: str, attempted_status: str, entity_type: str = "Order"):
        message = f"Invalid transition for {entity_type}: cannot move from {current_status} to {attempted_status}"
        super().__init__(message, "INVALID_TRANSITION", {
            "current_status": current_status,
            "attempted_status": attempted_status,
            "entity_type": entity_type
        })


class ValidationException(BusinessException):
    """Raised when data validation fails."""

    def __init__(self, message: str, field_errors: Dict[str, Any] = None):
        super().__init__(message, "VALIDATION_ERROR", field_errors or {})


class NotFoundException(BusinessException):
    """Raised when referenced records do not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(message, "NOT_FOUND", details)


class ApprovalRequiredException(BusinessException):
    """
    Raised when shipping an order with unshipped items without explicit
    partial-fulfillment approval.

    Rendered as a 403 whose body carries ``requiresApproval: true`` so callers
    can offer an approval path instead of treating it as a hard failure.
    """

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, order_id: int, unshipped_count: int, can_approve: bool):
        super().__init__(
            "Partial order fulfillment requires explicit approval",
            "APPROVAL_REQUIRED",
            {
                "orderId": order_id,
                "unshippedItems": unshipped_count,
                "canApprove": can_approve,
            },
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "requiresApproval": True,
            "isPartialFulfillment": True,
            **self.details,
        }


class PartialApprovalForbiddenException(BusinessException):
    """Raised when a user without approval rights tries to approve a partial shipment."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, order_number: str, role: str):
        super().__init__(
            f"Role {role} cannot approve partial fulfillment of order {order_number}",
            "PARTIAL_APPROVAL_FORBIDDEN",
            {"role": role},
        )


def api_exception_handler(exc, context):
    """
    DRF exception handler that renders business exceptions.

    Anything that is not a BusinessException falls through to DRF's default
    handling.
    """
    if isinstance(exc, ApprovalRequiredException):
        logger.warning(f"Approval required: {exc.details}")
        return Response(exc.to_payload(), status=exc.status_code)

    if isinstance(exc, BusinessException):
        return Response({
            "success": False,
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
            }
        }, status=exc.status_code)

    return exception_handler(exc, context)
