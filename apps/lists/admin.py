# ==========================================
# apps/lists/admin.py
# ==========================================

from django.contrib import admin
from apps.lists.models import ShoppingList, ListMembership, Item


class ListMembershipInline(admin.TabularInline):
    """Inline admin for list memberships."""
    model = ListMembership
    extra = 0
    fields = ['user', 'joined_at']
    readonly_fields = ['joined_at']


class ItemInline(admin.TabularInline):
    """Inline admin for items on a list."""
    model = Item
    extra = 0
    fields = ['name', 'price', 'paid_by', 'completed']


@admin.register(ShoppingList)
class ShoppingListAdmin(admin.ModelAdmin):
    """Admin interface for Lists."""

    list_display = ['name', 'code', 'created_by', 'member_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'code', 'created_by__username']
    readonly_fields = ['code', 'created_at']
    inlines = [ListMembershipInline, ItemInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of members."""
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Admin interface for Items."""

    list_display = ['name', 'list', 'price', 'paid_by', 'completed', 'created_at']
    list_filter = ['completed', 'created_at']
    search_fields = ['name', 'list__name', 'paid_by__username']
    readonly_fields = ['created_at', 'updated_at']
