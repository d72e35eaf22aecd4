from decimal import Decimal
import django.core.validators
from django.db import migrations, models
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='ServiceDefinition',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False, validators=[django.core.validators.validate_slug])),
                ('category', models.CharField(choices=[('infrastructure', 'Infrastructure'), ('decoration', 'Decoration'), ('labour', 'Labour'), ('halwai', 'Halwai'), ('extra', 'Extra'), ('entry-decor', 'Entry Decor')], max_length=20)),
                ('name', models.CharField(max_length=100)),
                ('type', models.CharField(choices=[('checkbox', 'Checkbox'), ('number', 'Number'), ('dropdown', 'Dropdown')], max_length=10)),
                ('min_value', models.IntegerField(blank=True, null=True)),
                ('max_value', models.IntegerField(blank=True, null=True)),
                ('options', models.JSONField(blank=True, default=list)),
                ('position', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'service_definitions',
                'ordering': ['category', 'position', 'name'],
                'indexes': [models.Index(fields=['category', 'position'], name='service_def_cat_pos_idx')],
            },
        ),
        migrations.CreateModel(
            name='Package',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('services', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'packages',
                'ordering': ['price', 'name'],
            },
        ),
    ]
