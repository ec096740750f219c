"""
GPS Tracker Data Models
Devices, API keys, tracking sessions and raw location pings
"""
import secrets
import uuid
from django.conf import settings
from django.db import models


def generate_api_key():
    """
    Generate a random 64 character hex API key
    """
    return secrets.token_hex(32)


class Device(models.Model):
    """
    Tracking device, claimed by at most one user
    """
    id = models.AutoField(primary_key=True)
    device_id = models.CharField(max_length=100, unique=True, help_text="Identifier reported by the device")
    description = models.CharField(max_length=255, blank=True, default='New Device')
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='devices',
    )

    class Meta:
        db_table = 'devices'
        ordering = ['device_id']

    def __str__(self):
        return f"{self.device_id} ({self.description})" if self.description else self.device_id


class ApiKey(models.Model):
    """
    API key used by devices to push data on behalf of a user
    """
    id = models.AutoField(primary_key=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='api_keys')
    key = models.CharField(max_length=64, unique=True, default=generate_api_key, editable=False)
    description = models.CharField(max_length=100, blank=True, default='Default API Key')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_used = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'api_keys'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.description} [{self.user}]"


class TrackingSession(models.Model):
    """
    Recording session opened and closed by a device
    end_utc stays empty while the session is running
    """
    SESSION_TYPES = [
        ('P', 'Private'),
        ('B', 'Business'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    device_id = models.CharField(max_length=100, db_index=True)
    start_utc = models.DateTimeField(db_index=True)
    end_utc = models.DateTimeField(null=True, blank=True)
    session_type = models.CharField(max_length=1, choices=SESSION_TYPES, default='P')

    class Meta:
        db_table = 'session_data'
        ordering = ['-start_utc']

    def __str__(self):
        end = self.end_utc or 'open'
        return f"Session {self.device_id} {self.start_utc} - {end}"

    @property
    def is_open(self):
        return self.end_utc is None

    def to_dict(self):
        return {
            'id': str(self.id),
            'device_id': self.device_id,
            'start_utc': self.start_utc.isoformat(),
            'end_utc': self.end_utc.isoformat() if self.end_utc else None,
            'type': self.session_type,
        }


class LocationData(models.Model):
    """
    Single location ping reported by a device
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    device_id = models.CharField(max_length=100, db_index=True)
    timestamp_utc = models.DateTimeField(db_index=True)

    # GPS coordinates
    latitude = models.FloatField()
    longitude = models.FloatField()
    altitude = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = 'location_data'
        indexes = [
            models.Index(fields=['device_id', 'timestamp_utc'], name='location_device_ts_idx'),
        ]
        ordering = ['-timestamp_utc']

    def __str__(self):
        return f"GPS {self.device_id} @ {self.timestamp_utc} ({self.latitude}, {self.longitude})"

    def as_point(self):
        """
        Point dict in the shape the trajectory functions expect
        """
        return {
            'id': str(self.id),
            'device_id': self.device_id,
            'lat': self.latitude,
            'lng': self.longitude,
            'altitude': self.altitude,
            'date': self.timestamp_utc,
        }
