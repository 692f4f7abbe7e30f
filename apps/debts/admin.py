# ==========================================
# apps/debts/admin.py
# ==========================================

from django.contrib import admin
from .models import Debt


@admin.register(Debt)
class DebtAdmin(admin.ModelAdmin):
    """Admin interface for Debts. Debts are created by settlement runs only."""

    list_display = ['id', 'list', 'from_user', 'to_user', 'amount', 'settled', 'created_at']
    list_filter = ['settled', 'created_at']
    search_fields = ['list__name', 'list__code', 'from_user__username', 'to_user__username']
    readonly_fields = ['list', 'from_user', 'to_user', 'amount', 'settled', 'settled_at', 'created_at']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False
