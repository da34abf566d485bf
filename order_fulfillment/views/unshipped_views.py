"""
Unshipped item views for Order Fulfillment.
"""

from rest_framework import viewsets, mixins
from rest_framework.decorators import action
from rest_framework.response import Response

from ..services import UnshippedItemService
from ..serializers.unshipped_serializers import (
    UnshippedItemSerializer, AuthorizeUnshippedItemsSerializer
)
from ..permissions import IsBackofficeUser, CanAuthorizeUnshippedItems


class UnshippedItemViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for unshipped items.

    Lists shortfall records and authorizes them for later fulfillment.
    Accepts an optional ``customerId`` query parameter on both listings.
    """

    permission_classes = [IsBackofficeUser]
    serializer_class = UnshippedItemSerializer

    def get_queryset(self):
        return UnshippedItemService.list_unshipped(self.request.query_params.get('customerId'))

    def get_serializer_class(self):
        if self.action == 'authorize':
            return AuthorizeUnshippedItemsSerializer
        return UnshippedItemSerializer

    @action(detail=False, methods=['get'], url_path='pending-authorization')
    def pending_authorization(self, request):
        """Items still waiting for authorization."""
        queryset = UnshippedItemService.list_pending_authorization(request.query_params.get('customerId'))
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    @action(detail=False, methods=['post'], permission_classes=[CanAuthorizeUnshippedItems])
    def authorize(self, request):
        """Authorize the given unshipped items, all or nothing."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = UnshippedItemService.authorize(serializer.validated_data['item_ids'], request.user)
        return Response({
            'success': True,
            'authorizedItems': len(result['authorized_ids']),
            'authorizedIds': result['authorized_ids'],
            'alreadyAuthorized': result['already_authorized_ids'],
        })
