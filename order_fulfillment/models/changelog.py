"""
Order changelog model for Order Fulfillment.
"""

from django.db import models
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone


class ChangelogAction(models.TextChoices):
    CREATE = 'create', 'Create'
    UPDATE = 'update', 'Update'
    STATUS_CHANGE = 'status_change', 'Status change'
    UNSHIPPED_AUTHORIZATION = 'unshipped_authorization', 'Unshipped authorization'
    PARTIAL_APPROVAL = 'partial_approval', 'Partial approval'


class ImmutableChangelogError(Exception):
    """Raised when something tries to rewrite or delete a changelog entry."""


class OrderChangelog(models.Model):
    """
    Append-only audit trail of changes to an order.

    Entries are written by the services on every mutating order operation
    and are never updated or deleted afterwards.
    """

    order = models.ForeignKey(
        'Order',
        on_delete=models.PROTECT,
        related_name='changelogs',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='order_changelogs',
        help_text="User who performed the action"
    )
    action = models.CharField(max_length=30, choices=ChangelogAction.choices)
    timestamp = models.DateTimeField(default=timezone.now)
    changes = models.JSONField(
        default=dict,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text="New values after the change"
    )
    previous_values = models.JSONField(
        default=dict,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text="Previous values before the change"
    )
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['order', '-timestamp'], name='order_fulf_order_i_8d2e45_idx'),
            models.Index(fields=['action', '-timestamp'], name='order_fulf_action_0c6f13_idx'),
        ]

    def __str__(self):
        return f"Order {self.order_id} - {self.action} by {self.user} at {self.timestamp}"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ImmutableChangelogError(f"Changelog entry {self.pk} cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableChangelogError(f"Changelog entry {self.pk} cannot be deleted")

    @classmethod
    def log_change(cls, order, action: str, user=None, changes=None,
                   previous_values=None, notes=""):
        """
        Create a changelog entry for an order.

        Args:
            order: The order being changed
            action: One of ChangelogAction
            user: User who performed the action
            changes: New values
            previous_values: Previous values
            notes: Additional notes
        """
        return cls.objects.create(
            order=order,
            action=action,
            user=user,
            changes=changes or {},
            previous_values=previous_values or {},
            notes=notes,
        )

    @classmethod
    def log_status_change(cls, order, old_status: str, new_status: str, user=None, notes=""):
        """Log a status change for an order."""
        return cls.log_change(
            order=order,
            action=ChangelogAction.STATUS_CHANGE,
            user=user,
            changes={'status': new_status},
            previous_values={'status': old_status},
            notes=notes,
        )
