import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Restaurant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='TableOccupation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('breakfast_minutes', models.PositiveIntegerField(blank=True, help_text='06:00-11:00 (default 45).', null=True)),
                ('lunch_minutes', models.PositiveIntegerField(blank=True, help_text='11:00-15:00 (default 60).', null=True)),
                ('dinner_minutes', models.PositiveIntegerField(blank=True, help_text='From 15:00 (default 90).', null=True)),
                ('restaurant', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='table_occupation', to='reservations.restaurant')),
            ],
        ),
        migrations.CreateModel(
            name='Table',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('capacity', models.PositiveIntegerField(default=2, validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('available', 'Available'), ('occupied', 'Occupied'), ('reserved', 'Reserved')], default='available', max_length=20)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('mergeable', models.ManyToManyField(blank=True, to='reservations.table')),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tables', to='reservations.restaurant')),
            ],
            options={
                'ordering': ['restaurant', 'number'],
                'constraints': [models.UniqueConstraint(fields=('restaurant', 'number'), name='unique_table_number_per_restaurant')],
            },
        ),
        migrations.CreateModel(
            name='Reservation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('time', models.TimeField()),
                ('duration', models.PositiveIntegerField(default=90, help_text='Minutes the table is held.')),
                ('party_size', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(20)])),
                ('contact_name', models.CharField(max_length=120)),
                ('contact_phone', models.CharField(max_length=17, validators=[django.core.validators.RegexValidator(message='Use international format: +999999999. Up to 15 digits.', regex='^\\+?1?\\d{9,15}$')])),
                ('contact_email', models.EmailField(max_length=254)),
                ('table_preference', models.PositiveIntegerField(blank=True, help_text='Requested table number (advisory).', null=True)),
                ('special_requests', models.TextField(blank=True, max_length=500)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('seated', 'Seated'), ('completed', 'Completed'), ('cancelled', 'Cancelled'), ('no-show', 'No-show')], default='pending', max_length=20)),
                ('assigned_table_number', models.PositiveIntegerField(blank=True, null=True)),
                ('admin_notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assigned_table', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reservations', to='reservations.table')),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reservations', to='reservations.restaurant')),
            ],
            options={
                'ordering': ['date', 'time'],
                'indexes': [
                    models.Index(fields=['assigned_table', 'date', 'status'], name='resv_table_date_status_idx'),
                    models.Index(fields=['restaurant', 'date'], name='resv_restaurant_date_idx'),
                ],
            },
        ),
    ]
