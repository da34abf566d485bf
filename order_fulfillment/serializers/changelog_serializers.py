"""
Changelog serializers for Order Fulfillment.
"""

from rest_framework import serializers

from ..models import OrderChangelog


class OrderChangelogSerializer(serializers.ModelSerializer):
    orderId = serializers.IntegerField(source='order_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    previousValues = serializers.JSONField(source='previous_values', read_only=True)
    user = serializers.SerializerMethodField()

    class Meta:
        model = OrderChangelog
        fields = [
            'id', 'orderId', 'userId', 'action', 'timestamp',
            'changes', 'previousValues', 'notes', 'user',
        ]

    def get_user(self, obj):
        if obj.user is None:
            return None
        return {
            'id': obj.user.id,
            'username': obj.user.username,
            'fullName': obj.user.get_full_name() or obj.user.username,
        }
