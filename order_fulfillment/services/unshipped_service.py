"""
Unshipped Item Service for Order Fulfillment.

Lists shortfall records and authorizes them for later fulfillment.
"""

import logging
from typing import Dict, Any, Iterable, Optional
from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from ..models import UnshippedItem, OrderChangelog, ChangelogAction
from ..exceptions import ValidationException, NotFoundException

logger = logging.getLogger(__name__)


class UnshippedItemService:
    """Service class for unshipped item operations."""

    @staticmethod
    def list_unshipped(customer_id: Optional[str] = None) -> QuerySet:
        """Unshipped items not yet consumed by a later shipment."""
        queryset = UnshippedItem.objects.select_related('order', 'product', 'authorized_by').filter(shipped=False)
        if customer_id:
            queryset = queryset.filter(
                Q(customer_id__iexact=customer_id) | Q(customer_name__icontains=customer_id)
            )
        return queryset

    @staticmethod
    def list_pending_authorization(customer_id: Optional[str] = None) -> QuerySet:
        """Unshipped items still waiting for authorization."""
        return UnshippedItemService.list_unshipped(customer_id).filter(authorized=False)

    @staticmethod
    def authorize(item_ids: Iterable[int], authorized_by) -> Dict[str, Any]:
        """
        Authorize unshipped items for future fulfillment.

        The batch is all-or-nothing: if any id is unknown nothing is changed.
        Items that are already authorized are left untouched.

        Args:
            item_ids: UnshippedItem primary keys
            authorized_by: User authorizing the items

        Returns:
            {"authorized_ids": [...], "already_authorized_ids": [...]}

        Raises:
            ValidationException: If no ids are given
            NotFoundException: If any id does not exist
        """
        ids = list(dict.fromkeys(item_ids))
        if not ids:
            raise ValidationException("Item IDs are required")

        role = getattr(authorized_by, 'role', '')

        with transaction.atomic():
            items = list(
                UnshippedItem.objects.select_for_update().select_related('order').filter(id__in=ids)
            )
            found = {item.id for item in items}
            missing = [item_id for item_id in ids if item_id not in found]
            if missing:
                raise NotFoundException(
                    f"Unshipped items not found: {missing}",
                    {"missingIds": missing}
                )

            now = timezone.now()
            authorized_ids = []
            already_authorized_ids = []

            for item in items:
                if item.authorized:
                    already_authorized_ids.append(item.id)
                    continue

                item.authorized = True
                item.authorized_by = authorized_by
                item.authorized_at = now
                item.save(update_fields=['authorized', 'authorized_by', 'authorized_at'])

                OrderChangelog.log_change(
                    order=item.order,
                    action=ChangelogAction.UNSHIPPED_AUTHORIZATION,
                    user=authorized_by,
                    changes={
                        'itemId': item.id,
                        'productId': item.product_id,
                        'quantity': item.quantity,
                        'authorizedById': authorized_by.id,
                        'authorizedByRole': role,
                    },
                    previous_values={'authorized': False},
                    notes=f"Authorized unshipped item for future fulfillment by {role}"
                )
                authorized_ids.append(item.id)

        logger.info(
            f"{authorized_by} authorized {len(authorized_ids)} unshipped items "
            f"({len(already_authorized_ids)} already authorized)"
        )
        return {
            'authorized_ids': sorted(authorized_ids),
            'already_authorized_ids': sorted(already_authorized_ids),
        }
