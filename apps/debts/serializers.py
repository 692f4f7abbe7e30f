from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import Debt, DebtState


# =============================================================================
# Input Serializers
# =============================================================================

class DebtFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for debt filtering.

    Query Parameters:
        list (int): Filter by list ID
        settled (bool): Filter by settlement state
    """

    list = serializers.IntegerField(required=False, min_value=1)
    settled = serializers.BooleanField(required=False, allow_null=True, default=None)


# =============================================================================
# Output Serializers
# =============================================================================

class DebtSerializer(serializers.ModelSerializer):
    """Debt as exposed to clients. Settlement goes through the settle action only."""

    from_user = UserMinimalSerializer(read_only=True)
    to_user = UserMinimalSerializer(read_only=True)
    amount = serializers.DecimalField(max_digits=20, decimal_places=3, read_only=True)
    state = serializers.ChoiceField(choices=DebtState.choices, read_only=True)

    class Meta:
        model = Debt
        fields = [
            'id',
            'list',
            'from_user',
            'to_user',
            'amount',
            'settled',
            'state',
            'settled_at',
            'created_at',
        ]
        read_only_fields = fields


class PayerTotalSerializer(serializers.Serializer):
    """One payer's total outlay on a list."""

    user_id = serializers.IntegerField()
    total = serializers.DecimalField(max_digits=20, decimal_places=2)


class MyDebtsSerializer(serializers.Serializer):
    """Open debts of the current user, split by direction."""

    owed_by_me = DebtSerializer(many=True)
    owed_to_me = DebtSerializer(many=True)
    total_owed_by_me = serializers.DecimalField(max_digits=20, decimal_places=3)
    total_owed_to_me = serializers.DecimalField(max_digits=20, decimal_places=3)
