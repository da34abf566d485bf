"""
Workflow service for Order Fulfillment.

Manages allowed order state transitions.
"""

from ..exceptions import InvalidTransitionException
from ..models import Order, OrderStatus


class OrderWorkflow:
    """Workflow rules for Order state transitions."""

    ALLOWED_TRANSITIONS = {
        OrderStatus.PENDING: [OrderStatus.PICKED, OrderStatus.CANCELLED],
        OrderStatus.PICKED: [OrderStatus.SHIPPED, OrderStatus.CANCELLED],
        OrderStatus.SHIPPED: [],  # Final state
        OrderStatus.CANCELLED: [],  # Final state
    }

    @classmethod
    def validate_transition(cls, order: Order, new_status: str) -> None:
        """
        Validate if a status transition is allowed.

        Requesting the status the order already has is not a transition and
        is rejected like any other disallowed move.

        Args:
            order: Order instance
            new_status: New status to transition to

        Raises:
            InvalidTransitionException: If transition is not allowed
        """
        current_status = order.status
        allowed_transitions = cls.ALLOWED_TRANSITIONS.get(current_status, [])

        if new_status not in allowed_transitions:
            raise InvalidTransitionException(
                current_status=current_status,
                attempted_status=new_status,
                entity_type="Order"
            )

    @classmethod
    def can_transition_to(cls, order: Order, new_status: str) -> bool:
        """
        Check if transition is allowed without raising exception.

        Args:
            order: Order instance
            new_status: New status to transition to

        Returns:
            True if transition is allowed
        """
        try:
            cls.validate_transition(order, new_status)
            return True
        except InvalidTransitionException:
            return False

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        return not cls.ALLOWED_TRANSITIONS.get(status)


def validate_order_workflow(order: Order, new_status: str) -> None:
    """
    Validate order workflow transition.

    Args:
        order: Order instance
        new_status: New status to transition to

    Raises:
        InvalidTransitionException: If transition is not allowed
    """
    OrderWorkflow.validate_transition(order, new_status)
