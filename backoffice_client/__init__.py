"""
Python client for the warehouse back-office API.
"""

from .api import BackofficeClient
from .config import ClientConfig
from .http import (
    ApiSession, ApprovalRequired, ClientError, HttpError, InvalidResponse, Ok, TransportError,
    api_request, fetch_result,
)
from .picklist import (
    PickListIncomplete, PickListItem, PickListState, ResetItem, SetActualQuantity,
    TogglePicked, reduce_pick_list,
)
from .store import EntityStore, QueryCache
from .unshipped import (
    ClearSelection, OrderGroup, SelectAll, SelectionState, ToggleSelection,
    group_by_order, reduce_selection, split_by_authorization,
)

__all__ = [
    'BackofficeClient', 'ClientConfig',
    'ApiSession', 'ApprovalRequired', 'ClientError', 'HttpError', 'InvalidResponse', 'Ok', 'TransportError',
    'api_request', 'fetch_result',
    'PickListIncomplete', 'PickListItem', 'PickListState', 'ResetItem', 'SetActualQuantity',
    'TogglePicked', 'reduce_pick_list',
    'EntityStore', 'QueryCache',
    'ClearSelection', 'OrderGroup', 'SelectAll', 'SelectionState', 'ToggleSelection',
    'group_by_order', 'reduce_selection', 'split_by_authorization',
]
