from decimal import Decimal

from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .exceptions import DebtNotFoundError
from .models import Debt
from .serializers import DebtSerializer, DebtFilterSerializer, MyDebtsSerializer
from .services import settle_debt, get_open_debts_for_user


class DebtViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for debts (read-only apart from settling).

    list: Debts in the user's lists (filterable by list / settled)
    retrieve: Get a specific debt
    settle: Mark a debt as settled
    """

    queryset = Debt.objects.select_related('from_user', 'to_user')
    serializer_class = DebtSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """Only debts in lists the user belongs to."""
        queryset = super().get_queryset().filter(
            list__memberships__user=self.request.user
        ).distinct()

        if self.action != 'list':
            return queryset

        filter_serializer = DebtFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('list'):
            queryset = queryset.filter(list_id=params['list'])
        if params.get('settled') is not None:
            queryset = queryset.filter(settled=params['settled'])

        return queryset

    @extend_schema(request=None, responses={200: DebtSerializer})
    @action(detail=True, methods=['post'])
    def settle(self, request, pk=None):
        """
        Mark a debt as settled. Settling twice is harmless.

        POST /api/debts/{id}/settle/
        """
        debt = self.get_object()

        try:
            debt = settle_debt(debt_id=debt.id)
        except DebtNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(DebtSerializer(debt).data)


@extend_schema(
    responses={200: MyDebtsSerializer},
    description="Open debts of the current user across all lists.",
    tags=['debts'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_debts(request):
    """Get open debts the current user owes or is owed."""
    debts = get_open_debts_for_user(user=request.user)

    serializer = MyDebtsSerializer({
        'owed_by_me': debts['owed_by_me'],
        'owed_to_me': debts['owed_to_me'],
        'total_owed_by_me': sum((d.amount for d in debts['owed_by_me']), Decimal('0')),
        'total_owed_to_me': sum((d.amount for d in debts['owed_to_me']), Decimal('0')),
    })
    return Response(serializer.data)
