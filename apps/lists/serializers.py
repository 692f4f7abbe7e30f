from decimal import Decimal

from rest_framework import serializers
from apps.accounts.models import User
from apps.accounts.serializers import UserMinimalSerializer
from .models import ShoppingList, ListMembership, Item


# =============================================================================
# Input Serializers
# =============================================================================

class ListCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating lists."""

    class Meta:
        model = ShoppingList
        fields = ['name']


class ItemCreateSerializer(serializers.Serializer):
    """
    Validate input for adding an item.

    Fields:
        name (str): Required item name
        price (decimal): Optional non-negative price
        paid_by (int): Optional payer user ID
    """

    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False,
        allow_null=True
    )
    paid_by = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True
    )


class ItemUpdateSerializer(ItemCreateSerializer):
    """Partial item update; every field is optional."""

    name = serializers.CharField(max_length=200, required=False)
    completed = serializers.BooleanField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ListMembershipSerializer(serializers.ModelSerializer):
    """Serializer for list memberships."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = ListMembership
        fields = ['id', 'user', 'joined_at']
        read_only_fields = fields


class ShoppingListSerializer(serializers.ModelSerializer):
    """Main serializer for lists."""

    created_by = UserMinimalSerializer(read_only=True)
    members = serializers.SerializerMethodField()

    class Meta:
        model = ShoppingList
        fields = [
            'id',
            'name',
            'code',
            'created_by',
            'members',
            'created_at',
        ]
        read_only_fields = fields

    def get_members(self, obj):
        """Members in join order."""
        return ListMembershipSerializer(obj.memberships.all(), many=True).data


class ShoppingListListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    member_count = serializers.SerializerMethodField()

    class Meta:
        model = ShoppingList
        fields = ['id', 'name', 'code', 'created_by', 'member_count', 'created_at']
        read_only_fields = fields

    def get_member_count(self, obj):
        return len(obj.memberships.all())


class ItemSerializer(serializers.ModelSerializer):
    """Serializer for items."""

    paid_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Item
        fields = [
            'id',
            'list',
            'name',
            'price',
            'completed',
            'paid_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
