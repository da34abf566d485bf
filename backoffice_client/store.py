"""
Client-side state: an endpoint-keyed query cache and a normalized entity
store for orders, their items and the unshipped records derived from them.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class QueryCache:
    """
    Fetched payloads keyed by endpoint string (path plus query).

    Entries stay until they are invalidated; there is no expiry.
    """

    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[str]:
        return list(self._entries)

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def fetch(self, key: str, loader: Callable[[], Any]) -> Any:
        """Return the cached payload for ``key``, loading it on a miss."""
        if key in self._entries:
            return self._entries[key]
        value = loader()
        self._entries[key] = value
        return value

    def invalidate(self, prefix: str) -> List[str]:
        """
        Drop ``prefix`` and every key below it.

        ``/api/orders/1`` matches ``/api/orders/1``, ``/api/orders/1/changelogs``
        and ``/api/orders/1?x=y`` but not ``/api/orders/10``.
        """
        prefix = prefix.rstrip("/")
        dropped = [
            key for key in self._entries
            if key == prefix or key.startswith(prefix + "/") or key.startswith(prefix + "?")
        ]
        for key in dropped:
            del self._entries[key]
        if dropped:
            logger.debug(f"Invalidated {len(dropped)} cache entries under {prefix}")
        return dropped

    def clear(self) -> None:
        self._entries.clear()


class EntityStore:
    """
    Orders, order items and unshipped items, each keyed by id.

    Orders are stored without their nested ``items``; the item ids are kept
    on the order under ``itemIds`` and the items themselves in their own
    table.
    """

    def __init__(self):
        self.orders: Dict[int, Dict[str, Any]] = {}
        self.items: Dict[int, Dict[str, Any]] = {}
        self.unshipped: Dict[int, Dict[str, Any]] = {}

    def upsert_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        order = {key: value for key, value in payload.items() if key != "items"}
        if "items" in payload:
            stale = self.orders.get(order["id"], {}).get("itemIds", [])
            for item_id in stale:
                self.items.pop(item_id, None)
            item_ids = []
            for item in payload["items"]:
                self.items[item["id"]] = {**item, "orderId": order["id"]}
                item_ids.append(item["id"])
            order["itemIds"] = item_ids
        elif order["id"] in self.orders:
            order["itemIds"] = self.orders[order["id"]].get("itemIds", [])
        self.orders[order["id"]] = order
        return order

    def upsert_orders(self, payloads: Iterable[Dict[str, Any]]) -> None:
        for payload in payloads:
            self.upsert_order(payload)

    def upsert_unshipped(self, records: Iterable[Dict[str, Any]]) -> None:
        for record in records:
            self.unshipped[record["id"]] = dict(record)

    def order(self, order_id: int) -> Optional[Dict[str, Any]]:
        return self.orders.get(order_id)

    def items_for(self, order_id: int) -> List[Dict[str, Any]]:
        order = self.orders.get(order_id)
        if order is None:
            return []
        return [self.items[item_id] for item_id in order.get("itemIds", []) if item_id in self.items]

    def unshipped_for(self, order_id: int) -> List[Dict[str, Any]]:
        return [record for record in self.unshipped.values() if record.get("orderId") == order_id]

    def unshipped_for_item(self, order_item_id: int) -> List[Dict[str, Any]]:
        return [record for record in self.unshipped.values() if record.get("orderItemId") == order_item_id]

    def denormalized_order(self, order_id: int) -> Optional[Dict[str, Any]]:
        """The order with its items (each carrying its unshipped records) nested back in."""
        order = self.orders.get(order_id)
        if order is None:
            return None
        items = [
            {**item, "unshipped": self.unshipped_for_item(item["id"])}
            for item in self.items_for(order_id)
        ]
        result = {key: value for key, value in order.items() if key != "itemIds"}
        result["items"] = items
        return result

    def replace_unshipped(self, records: Iterable[Dict[str, Any]]) -> None:
        self.unshipped = {record["id"]: dict(record) for record in records}
