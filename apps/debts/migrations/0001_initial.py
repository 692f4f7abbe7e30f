# Generated manually for the debts app

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('lists', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Debt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=3, max_digits=12, validators=[MinValueValidator(Decimal('0'))])),
                ('settled', models.BooleanField(default=False)),
                ('settled_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('from_user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='debts_owed', to=settings.AUTH_USER_MODEL)),
                ('list', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='debts', to='lists.shoppinglist')),
                ('to_user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='debts_receivable', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'debts',
                'ordering': ['created_at', 'id'],
            },
        ),
        migrations.AddIndex(
            model_name='debt',
            index=models.Index(fields=['list', 'created_at'], name='debts_list_created_idx'),
        ),
        migrations.AddIndex(
            model_name='debt',
            index=models.Index(fields=['from_user', 'settled'], name='debts_from_settled_idx'),
        ),
        migrations.AddIndex(
            model_name='debt',
            index=models.Index(fields=['to_user', 'settled'], name='debts_to_settled_idx'),
        ),
        migrations.AddConstraint(
            model_name='debt',
            constraint=models.CheckConstraint(check=models.Q(('from_user', models.F('to_user')), _negated=True), name='debt_distinct_users'),
        ),
        migrations.AddConstraint(
            model_name='debt',
            constraint=models.CheckConstraint(check=models.Q(('amount__gte', 0)), name='debt_amount_non_negative'),
        ),
    ]
