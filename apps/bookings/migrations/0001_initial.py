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
            name='Booking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('booking_id', models.CharField(max_length=32, unique=True)),
                ('client_name', models.CharField(max_length=200)),
                ('contact', models.CharField(max_length=100)),
                ('event_type', models.CharField(default='Unspecified', max_length=100)),
                ('guests', models.PositiveIntegerField(default=0)),
                ('shift', models.CharField(choices=[('Day', 'Day'), ('Night', 'Night')], default='Night', max_length=5)),
                ('event_date', models.DateField()),
                ('season', models.CharField(max_length=7)),
                ('status', models.CharField(choices=[('Upcoming', 'Upcoming'), ('Completed', 'Completed'), ('Cancelled', 'Cancelled')], default='Upcoming', max_length=10)),
                ('tier', models.CharField(choices=[('Silver', 'Silver'), ('Gold', 'Gold'), ('Diamond', 'Diamond')], max_length=10)),
                ('rate', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('refund_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('expenses', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('services', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'bookings',
                'ordering': ['-event_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['season', 'status'], name='booking_season_status_idx'),
                    models.Index(fields=['event_date'], name='booking_event_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('method', models.CharField(choices=[('Cash', 'Cash'), ('Card', 'Card'), ('UPI', 'UPI'), ('Bank', 'Bank')], max_length=4)),
                ('type', models.CharField(choices=[('Received', 'Received'), ('Reverted', 'Reverted')], default='Received', max_length=8)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('booking', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='bookings.booking')),
                ('reverses', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='reversals', to='bookings.payment')),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['date', 'created_at'],
                'indexes': [
                    models.Index(fields=['booking', 'date'], name='payment_booking_date_idx'),
                    models.Index(fields=['date'], name='payment_date_idx'),
                ],
            },
        ),
    ]
