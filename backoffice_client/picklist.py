"""
Pick-list state for completing an order.

The state is immutable; ``reduce_pick_list`` returns a new state for each
action and leaves its input untouched.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple, Union


class PickListIncomplete(ValueError):
    """Raised when a pick list is submitted before every item is picked."""

    def __init__(self, unpicked_ids):
        self.unpicked_ids = list(unpicked_ids)
        super().__init__(f"Items not picked yet: {self.unpicked_ids}")


@dataclass(frozen=True)
class PickListItem:
    order_item_id: int
    product_id: int
    requested_quantity: int
    actual_quantity: int
    picked: bool = False

    @property
    def shortfall(self) -> int:
        return max(self.requested_quantity - self.actual_quantity, 0)


@dataclass(frozen=True)
class TogglePicked:
    item_id: int


@dataclass(frozen=True)
class SetActualQuantity:
    item_id: int
    quantity: int


@dataclass(frozen=True)
class ResetItem:
    item_id: int


PickListAction = Union[TogglePicked, SetActualQuantity, ResetItem]


@dataclass(frozen=True)
class PickListState:
    order_id: int
    items: Tuple[PickListItem, ...]

    @classmethod
    def from_order(cls, order: Dict[str, Any]) -> "PickListState":
        """
        Build a fresh pick list from an order payload.

        Actual quantities start at the requested quantity and nothing is
        picked.
        """
        return cls(
            order_id=order["id"],
            items=tuple(
                PickListItem(
                    order_item_id=item["id"],
                    product_id=item["productId"],
                    requested_quantity=item["quantity"],
                    actual_quantity=item["quantity"],
                )
                for item in order.get("items", [])
            ),
        )

    def item(self, item_id: int) -> PickListItem:
        for item in self.items:
            if item.order_item_id == item_id:
                return item
        raise KeyError(f"Order item {item_id} is not on the pick list for order {self.order_id}")

    @property
    def is_complete(self) -> bool:
        return all(item.picked for item in self.items)

    @property
    def picked_count(self) -> int:
        return sum(1 for item in self.items if item.picked)

    @property
    def has_shortfall(self) -> bool:
        return any(item.shortfall for item in self.items)

    def to_status_payload(self) -> Dict[str, Any]:
        """
        Body for ``PATCH /api/orders/:id/status`` completing the pick list.

        Raises:
            PickListIncomplete: If any item is not picked
            ValueError: If a quantity is negative or exceeds the requested quantity
        """
        unpicked = [item.order_item_id for item in self.items if not item.picked]
        if unpicked:
            raise PickListIncomplete(unpicked)

        quantities = []
        for item in self.items:
            if item.actual_quantity < 0:
                raise ValueError(f"Picked quantity for item {item.order_item_id} cannot be negative")
            if item.actual_quantity > item.requested_quantity:
                raise ValueError(
                    f"Picked quantity {item.actual_quantity} for item {item.order_item_id} "
                    f"exceeds requested quantity {item.requested_quantity}"
                )
            quantities.append({
                "orderItemId": item.order_item_id,
                "productId": item.product_id,
                "requestedQuantity": item.requested_quantity,
                "actualQuantity": item.actual_quantity,
            })
        return {"status": "picked", "itemQuantities": quantities}


def _update_item(state: PickListState, item_id: int, **changes) -> PickListState:
    state.item(item_id)
    return replace(state, items=tuple(
        replace(item, **changes) if item.order_item_id == item_id else item
        for item in state.items
    ))


def reduce_pick_list(state: PickListState, action: PickListAction) -> PickListState:
    """Apply one action to the pick list and return the new state."""
    if isinstance(action, TogglePicked):
        return _update_item(state, action.item_id, picked=not state.item(action.item_id).picked)
    if isinstance(action, SetActualQuantity):
        return _update_item(state, action.item_id, actual_quantity=action.quantity)
    if isinstance(action, ResetItem):
        item = state.item(action.item_id)
        return _update_item(state, action.item_id, picked=False, actual_quantity=item.requested_quantity)
    raise TypeError(f"Unknown pick list action: {action!r}")
