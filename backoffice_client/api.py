"""
Back-office API client.

Reads go through the query cache; each mutation invalidates the entries it
affects once the server has accepted it. A failed mutation leaves the cache
as it was.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlencode

from .config import ClientConfig
from .http import ApiSession
from .picklist import PickListState
from .store import EntityStore, QueryCache

logger = logging.getLogger(__name__)

ORDERS = "/api/orders"
UNSHIPPED_ITEMS = "/api/unshipped-items"


def _with_query(path: str, params: Dict[str, Any]) -> str:
    params = {key: value for key, value in params.items() if value not in (None, "")}
    return f"{path}?{urlencode(sorted(params.items()))}" if params else path


class BackofficeClient:
    """High-level operations on orders and unshipped items."""

    def __init__(self, session: Optional[ApiSession] = None, config: Optional[ClientConfig] = None):
        self.session = session or ApiSession(config)
        self.cache = QueryCache()
        self.entities = EntityStore()

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get(self, key: str) -> Any:
        return self.cache.fetch(key, lambda: self.session.api_request(key))

    def _mutate(self, url: str, method: str, data: Any, invalidate: Iterable[str]) -> Any:
        result = self.session.api_request(url, method, data)
        for prefix in invalidate:
            self.cache.invalidate(prefix)
        return result

    # Authentication

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Obtain a JWT pair and use the access token for later requests."""
        tokens = self.session.api_request(
            "/api/auth/token/", "POST", {"username": username, "password": password}
        )
        self.session.set_token(tokens["access"])
        self.cache.clear()
        return tokens

    # Orders

    def list_orders(self, status: Optional[str] = None, priority: Optional[str] = None,
                    search: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._get(_with_query(ORDERS, {"status": status, "priority": priority, "search": search}))

    def get_order(self, order_id: int) -> Dict[str, Any]:
        order = self._get(f"{ORDERS}/{order_id}")
        self.entities.upsert_order(order)
        return order

    def get_changelogs(self, order_id: int) -> List[Dict[str, Any]]:
        return self._get(f"{ORDERS}/{order_id}/changelogs")

    def create_order(self, customer_name: str, items: List[Dict[str, int]], **fields) -> Dict[str, Any]:
        """
        Create an order.

        ``items`` are ``{"productId", "quantity"}`` dicts. Returns the server
        response ``{"order", "warning"}``; ``warning`` is set when the
        customer still has unshipped items.
        """
        body = {"customerName": customer_name, "items": items, **fields}
        result = self._mutate(ORDERS, "POST", body, [ORDERS, UNSHIPPED_ITEMS])
        self.entities.upsert_order(result["order"])
        if result.get("warning"):
            logger.info(f"Customer {customer_name}: {result['warning']['message']}")
        return result

    def update_order(self, order_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        order = self._mutate(f"{ORDERS}/{order_id}", "PATCH", changes, [ORDERS])
        self.entities.upsert_order(order)
        return order

    def update_status(self, order_id: int, status: str, item_quantities: Optional[List[Dict[str, int]]] = None,
                      approve_partial_fulfillment: bool = False) -> Dict[str, Any]:
        """
        Move an order to ``status``.

        Raises:
            ApprovalRequired: If shipping needs partial-fulfillment approval
            HttpError: If the server rejects the transition
        """
        body: Dict[str, Any] = {"status": status}
        if item_quantities is not None:
            body["itemQuantities"] = item_quantities
        if approve_partial_fulfillment:
            body["approvePartialFulfillment"] = True
        return self._send_status(order_id, body)

    def complete_pick_list(self, pick_list: PickListState) -> Dict[str, Any]:
        """
        Submit a completed pick list.

        Raises:
            PickListIncomplete: If any item is not picked; nothing is sent
        """
        return self._send_status(pick_list.order_id, pick_list.to_status_payload())

    def ship_order(self, order_id: int, approve_partial: bool = False) -> Dict[str, Any]:
        return self.update_status(order_id, "shipped", approve_partial_fulfillment=approve_partial)

    def cancel_order(self, order_id: int) -> Dict[str, Any]:
        return self.update_status(order_id, "cancelled")

    def _send_status(self, order_id: int, body: Dict[str, Any]) -> Dict[str, Any]:
        order = self._mutate(
            f"{ORDERS}/{order_id}/status", "PATCH", body, [ORDERS, UNSHIPPED_ITEMS]
        )
        self.entities.upsert_order(order)
        return order

    # Unshipped items

    def list_unshipped_items(self, customer_id: Optional[str] = None) -> List[Dict[str, Any]]:
        records = self._get(_with_query(UNSHIPPED_ITEMS, {"customerId": customer_id}))
        self.entities.upsert_unshipped(records)
        return records

    def list_pending_authorization(self, customer_id: Optional[str] = None) -> List[Dict[str, Any]]:
        records = self._get(_with_query(f"{UNSHIPPED_ITEMS}/pending-authorization", {"customerId": customer_id}))
        self.entities.upsert_unshipped(records)
        return records

    def authorize_unshipped_items(self, item_ids: Iterable[int]) -> Dict[str, Any]:
        """
        Authorize a batch of unshipped items.

        The server applies the batch all-or-nothing. Raises ValueError
        without sending anything when ``item_ids`` is empty.
        """
        ids = sorted(set(item_ids))
        if not ids:
            raise ValueError("Select at least one unshipped item to authorize")
        result = self._mutate(f"{UNSHIPPED_ITEMS}/authorize", "POST", {"itemIds": ids}, [UNSHIPPED_ITEMS, ORDERS])
        logger.info(f"Authorized {result.get('authorizedItems', 0)} unshipped items")
        return result
