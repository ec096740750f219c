# Initial schema for the tracker app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import apps.tracker.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Device',
            fields=[
                ('id', models.AutoField(primary_key=True, serialize=False)),
                ('device_id', models.CharField(help_text='Identifier reported by the device', max_length=100, unique=True)),
                ('description', models.CharField(blank=True, default='New Device', max_length=255)),
                ('owner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='devices', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'devices',
                'ordering': ['device_id'],
            },
        ),
        migrations.CreateModel(
            name='ApiKey',
            fields=[
                ('id', models.AutoField(primary_key=True, serialize=False)),
                ('key', models.CharField(default=apps.tracker.models.generate_api_key, editable=False, max_length=64, unique=True)),
                ('description', models.CharField(blank=True, default='Default API Key', max_length=100)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('last_used', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='api_keys', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'api_keys',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='TrackingSession',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('device_id', models.CharField(db_index=True, max_length=100)),
                ('start_utc', models.DateTimeField(db_index=True)),
                ('end_utc', models.DateTimeField(blank=True, null=True)),
                ('session_type', models.CharField(choices=[('P', 'Private'), ('B', 'Business')], default='P', max_length=1)),
            ],
            options={
                'db_table': 'session_data',
                'ordering': ['-start_utc'],
            },
        ),
        migrations.CreateModel(
            name='LocationData',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('device_id', models.CharField(db_index=True, max_length=100)),
                ('timestamp_utc', models.DateTimeField(db_index=True)),
                ('latitude', models.FloatField()),
                ('longitude', models.FloatField()),
                ('altitude', models.FloatField(blank=True, null=True)),
            ],
            options={
                'db_table': 'location_data',
                'ordering': ['-timestamp_utc'],
                'indexes': [models.Index(fields=['device_id', 'timestamp_utc'], name='location_device_ts_idx')],
            },
        ),
    ]
