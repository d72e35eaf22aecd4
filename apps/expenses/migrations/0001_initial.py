from decimal import Decimal
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='ExpenseCategory',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False, validators=[django.core.validators.validate_slug])),
                ('name', models.CharField(max_length=100, unique=True)),
                ('requires_manpower', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'expense_categories',
                'verbose_name_plural': 'expense categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Vendor',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='vendors', to='expenses.expensecategory')),
            ],
            options={
                'db_table': 'vendors',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('booking_id', models.CharField(blank=True, max_length=32)),
                ('expense_date', models.DateField()),
                ('category', models.CharField(max_length=100)),
                ('vendor', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('payment_method', models.CharField(choices=[('Cash', 'Cash'), ('Card', 'Card'), ('UPI', 'UPI'), ('Bank', 'Bank')], max_length=4)),
                ('type', models.CharField(choices=[('Paid', 'Paid'), ('Reverted', 'Reverted')], default='Paid', max_length=8)),
                ('notes', models.TextField(blank=True)),
                ('manpower_count', models.PositiveIntegerField(blank=True, null=True)),
                ('rate_per_person', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('reverses', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='reversals', to='expenses.expense')),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['expense_date', 'created_at'],
                'indexes': [
                    models.Index(fields=['booking_id'], name='expense_booking_idx'),
                    models.Index(fields=['expense_date'], name='expense_date_idx'),
                    models.Index(fields=['category', 'vendor'], name='expense_cat_vendor_idx'),
                ],
            },
        ),
    ]
