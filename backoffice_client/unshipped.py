"""
Unshipped item views: grouping by originating order and the selection used
to submit an authorization batch.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple, Union

PENDING = "pending"
FULLY_AUTHORIZED = "fully_authorized"


@dataclass(frozen=True)
class OrderGroup:
    """Unshipped items that came from the same order."""

    order_id: int
    order_number: str
    customer_name: str
    items: Tuple[Dict[str, Any], ...]

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def authorized_count(self) -> int:
        return sum(1 for item in self.items if item.get("authorized"))

    @property
    def authorization_percentage(self) -> float:
        if not self.items:
            return 0.0
        return self.authorized_count / self.total_count * 100

    @property
    def bucket(self) -> str:
        return FULLY_AUTHORIZED if self.authorization_percentage >= 100 else PENDING

    @property
    def total_quantity(self) -> int:
        return sum(item.get("quantity", 0) for item in self.items)


def group_by_order(items: Iterable[Dict[str, Any]]) -> List[OrderGroup]:
    """Group unshipped item payloads by ``orderId``, keeping first-seen order."""
    grouped: Dict[int, List[Dict[str, Any]]] = {}
    for item in items:
        grouped.setdefault(item["orderId"], []).append(item)

    return [
        OrderGroup(
            order_id=order_id,
            order_number=records[0].get("originalOrderNumber") or "",
            customer_name=records[0].get("customerName") or "",
            items=tuple(records),
        )
        for order_id, records in grouped.items()
    ]


def split_by_authorization(groups: Iterable[OrderGroup]) -> Dict[str, List[OrderGroup]]:
    """Split groups into the ``pending`` and ``fully_authorized`` buckets."""
    buckets = {PENDING: [], FULLY_AUTHORIZED: []}
    for group in groups:
        buckets[group.bucket].append(group)
    return buckets


@dataclass(frozen=True)
class ToggleSelection:
    item_id: int


@dataclass(frozen=True)
class SelectAll:
    pass


@dataclass(frozen=True)
class ClearSelection:
    pass


SelectionAction = Union[ToggleSelection, SelectAll, ClearSelection]


@dataclass(frozen=True)
class SelectionState:
    """
    Ids chosen for the next authorization call.

    ``items`` is the listing the selection is made from; authorized items in
    it can never be selected.
    """

    items: Tuple[Dict[str, Any], ...] = ()
    selected: FrozenSet[int] = field(default_factory=frozenset)

    @classmethod
    def from_items(cls, items: Iterable[Dict[str, Any]]) -> "SelectionState":
        return cls(items=tuple(items))

    @property
    def selectable_ids(self) -> FrozenSet[int]:
        return frozenset(item["id"] for item in self.items if not item.get("authorized"))

    def to_authorize_payload(self) -> Dict[str, List[int]]:
        """Body for ``POST /api/unshipped-items/authorize``."""
        if not self.selected:
            raise ValueError("Select at least one unshipped item to authorize")
        return {"itemIds": sorted(self.selected)}


def reduce_selection(state: SelectionState, action: SelectionAction) -> SelectionState:
    """Apply one selection action and return the new state."""
    if isinstance(action, ToggleSelection):
        if action.item_id in state.selected:
            return SelectionState(state.items, state.selected - {action.item_id})
        if action.item_id not in state.selectable_ids:
            return state
        return SelectionState(state.items, state.selected | {action.item_id})
    if isinstance(action, SelectAll):
        return SelectionState(state.items, state.selectable_ids)
    if isinstance(action, ClearSelection):
        return SelectionState(state.items, frozenset())
    raise TypeError(f"Unknown selection action: {action!r}")
