from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class DebtState(models.TextChoices):
    OPEN = 'open', 'Open'
    SETTLED = 'settled', 'Settled'


class Debt(models.Model):
    """Directed obligation inside one list: from_user owes to_user."""

    list = models.ForeignKey(
        'lists.ShoppingList',
        on_delete=models.CASCADE,
        related_name='debts'
    )
    from_user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='debts_owed'
    )
    to_user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='debts_receivable'
    )

    # Halving a two-decimal difference needs a third decimal place; the
    # extra integer digits hold sums over many maximum-price items
    amount = models.DecimalField(
        max_digits=20,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0'))]
    )

    # Open -> Settled only
    settled = models.BooleanField(default=False)
    settled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'debts'
        indexes = [
            models.Index(fields=['list', 'created_at'], name='debts_list_created_idx'),
            models.Index(fields=['from_user', 'settled'], name='debts_from_settled_idx'),
            models.Index(fields=['to_user', 'settled'], name='debts_to_settled_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                check=~models.Q(from_user=models.F('to_user')),
                name='debt_distinct_users',
            ),
            models.CheckConstraint(
                check=models.Q(amount__gte=0),
                name='debt_amount_non_negative',
            ),
        ]
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.from_user} owes {self.to_user} {self.amount} ({self.state})"

    @property
    def state(self):
        return DebtState.SETTLED if self.settled else DebtState.OPEN
