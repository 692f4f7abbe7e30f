# ==========================================
# apps/lists/models.py
# ==========================================

from decimal import Decimal
import secrets
import string

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


JOIN_CODE_ALPHABET = string.ascii_letters + string.digits


def generate_join_code(length=None):
    """Random alphanumeric token handed out to people joining a list."""
    length = length or settings.JOIN_CODE_LENGTH
    return ''.join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))


class ShoppingList(models.Model):
    """Shared shopping list, joined by code."""

    name = models.CharField(max_length=200)
    code = models.CharField(max_length=32, unique=True, db_index=True, editable=False)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='created_lists'
    )
    members = models.ManyToManyField(
        'accounts.User',
        through='ListMembership',
        related_name='shopping_lists'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'lists'
        indexes = [
            models.Index(fields=['created_by', 'created_at'], name='lists_creator_created_idx'),
        ]
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = generate_join_code()
        super().save(*args, **kwargs)

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()


class ListMembership(models.Model):
    """A (list, user) pair; a user appears at most once per list."""

    list = models.ForeignKey(ShoppingList, on_delete=models.CASCADE, related_name='memberships')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='list_memberships')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'list_members'
        constraints = [
            models.UniqueConstraint(fields=['list', 'user'], name='unique_list_member'),
        ]
        ordering = ['joined_at', 'id']

    def __str__(self):
        return f"{self.user} in {self.list}"


class Item(models.Model):
    """Line on a shopping list, optionally priced and attributed to a payer."""

    list = models.ForeignKey(ShoppingList, on_delete=models.CASCADE, related_name='items')
    name = models.CharField(max_length=200)

    # Null price means "not yet priced"
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    completed = models.BooleanField(default=False)
    paid_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='paid_items'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        indexes = [
            models.Index(fields=['list', 'created_at'], name='items_list_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(price__isnull=True) | models.Q(price__gte=0),
                name='item_price_non_negative',
            ),
        ]
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.name
