from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.debts.exceptions import SettlementListNotFoundError
from apps.debts.serializers import DebtSerializer, PayerTotalSerializer
from apps.debts.services import (
    compute_and_record_debts,
    get_debts_for_list,
    get_totals_for_list,
)

from .models import ShoppingList, Item
from .permissions import IsListMember
from .serializers import (
    ShoppingListSerializer,
    ShoppingListListSerializer,
    ListCreateSerializer,
    ListMembershipSerializer,
    ItemSerializer,
    ItemCreateSerializer,
    ItemUpdateSerializer,
)
from .services import (
    create_list,
    get_list_by_code,
    get_lists_for_user,
    join_by_code,
    get_list_members,
    require_membership,
    add_item,
    update_item,
    get_items_for_list,
    # Exceptions
    ListNotFoundError,
    ItemNotFoundError,
    NotMemberError,
    InvalidPayerError,
)


class ListPagination(PageNumberPagination):
    """Custom pagination for lists."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ShoppingListViewSet(mixins.CreateModelMixin,
                          mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          viewsets.GenericViewSet):
    """
    ViewSet for shared lists.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Lists the user is a member of
    create: Create a new list (creator becomes first member)
    retrieve: Get a specific list with its members
    """

    queryset = ShoppingList.objects.select_related('created_by').prefetch_related('memberships__user')
    serializer_class = ShoppingListSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ListPagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        """Return only lists where user is a member."""
        return get_lists_for_user(user=self.request.user).prefetch_related('memberships__user')

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return ShoppingListListSerializer
        elif self.action == 'create':
            return ListCreateSerializer
        return ShoppingListSerializer

    def _member_list_or_error(self, pk):
        """Resolve a list the caller belongs to, or the error response to send."""
        try:
            return require_membership(list_id=int(pk), user=self.request.user), None
        except ListNotFoundError as e:
            return None, Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return None, Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    @extend_schema(request=ListCreateSerializer, responses={201: ShoppingListSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new list."""
        serializer = ListCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        shopping_list = create_list(
            name=serializer.validated_data['name'],
            created_by=request.user
        )

        output_serializer = ShoppingListSerializer(shopping_list, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ShoppingListListSerializer})
    @action(detail=False, methods=['get'], url_path=r'code/(?P<code>[A-Za-z0-9]+)')
    def by_code(self, request, code=None):
        """
        Look up a list by join code.

        GET /api/lists/code/{code}/
        """
        try:
            shopping_list = get_list_by_code(code=code)
        except ListNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ShoppingListListSerializer(shopping_list).data)

    @extend_schema(request=None, responses={200: ShoppingListSerializer})
    @action(detail=False, methods=['post'], url_path=r'join/(?P<code>[A-Za-z0-9]+)')
    def join(self, request, code=None):
        """
        Join a list with its code. Joining twice is a no-op.

        POST /api/lists/join/{code}/
        """
        try:
            shopping_list = join_by_code(code=code, user=request.user)
        except ListNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ShoppingListSerializer(shopping_list).data)

    @extend_schema(responses={200: ListMembershipSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the list."""
        shopping_list, error = self._member_list_or_error(pk)
        if error:
            return error

        memberships = get_list_members(list_id=shopping_list.id)
        return Response(ListMembershipSerializer(memberships, many=True).data)

    @extend_schema(request=ItemCreateSerializer, responses={200: ItemSerializer(many=True), 201: ItemSerializer})
    @action(detail=True, methods=['get', 'post'])
    def items(self, request, pk=None):
        """
        List or add items.

        GET  /api/lists/{id}/items/
        POST /api/lists/{id}/items/  Body: {"name": "Milk", "price": "2.50", "paid_by": 3}
        """
        shopping_list, error = self._member_list_or_error(pk)
        if error:
            return error

        if request.method == 'GET':
            items = get_items_for_list(list_id=shopping_list.id)
            return Response(ItemSerializer(items, many=True).data)

        serializer = ItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = add_item(list_id=shopping_list.id, **serializer.validated_data)
        except InvalidPayerError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: DebtSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def debts(self, request, pk=None):
        """All debts recorded for the list, settled or not."""
        shopping_list, error = self._member_list_or_error(pk)
        if error:
            return error

        debts = get_debts_for_list(list_id=shopping_list.id)
        return Response(DebtSerializer(debts, many=True).data)

    @extend_schema(request=None, responses={201: DebtSerializer(many=True)})
    @action(detail=True, methods=['post'])
    def calculate_debts(self, request, pk=None):
        """
        Compute pairwise debts from who paid what and record them.

        Every call records a fresh set; older debts stay as they are.

        POST /api/lists/{id}/calculate_debts/
        """
        shopping_list, error = self._member_list_or_error(pk)
        if error:
            return error

        try:
            debts = compute_and_record_debts(list_id=shopping_list.id)
        except SettlementListNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(DebtSerializer(debts, many=True).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: PayerTotalSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def totals(self, request, pk=None):
        """How much each payer has spent on the list."""
        shopping_list, error = self._member_list_or_error(pk)
        if error:
            return error

        try:
            totals = get_totals_for_list(list_id=shopping_list.id)
        except SettlementListNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        rows = [{'user_id': user_id, 'total': total} for user_id, total in totals.items()]
        return Response(PayerTotalSerializer(rows, many=True).data)


class ItemViewSet(mixins.RetrieveModelMixin,
                  mixins.UpdateModelMixin,
                  viewsets.GenericViewSet):
    """
    ViewSet for single items.

    retrieve: Get an item
    partial_update: Change name, price, completed flag or payer
    """

    queryset = Item.objects.select_related('list', 'paid_by')
    serializer_class = ItemSerializer
    permission_classes = [IsAuthenticated, IsListMember]
    http_method_names = ['get', 'patch', 'head', 'options']
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        """Only items on lists the user belongs to."""
        return super().get_queryset().filter(
            list__memberships__user=self.request.user
        ).distinct()

    @extend_schema(request=ItemUpdateSerializer, responses={200: ItemSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Update an item."""
        item = self.get_object()

        serializer = ItemUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_item(item_id=item.id, **serializer.validated_data)
        except ItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPayerError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ItemSerializer(item).data)
