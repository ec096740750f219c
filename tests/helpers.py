"""
Track builders shared by the test modules
"""
from datetime import datetime, timedelta, timezone as dt_timezone

from apps.tracker.models import LocationData

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=dt_timezone.utc)


def equator_track(count, step_deg=0.001, seconds=10, start=T0, altitude=100.0):
    """
    Points heading east along the equator, step_deg apart (0.001 deg ~ 111 m)
    """
    return [
        {
            'lat': 0.0,
            'lng': i * step_deg,
            'altitude': altitude + i,
            'date': start + timedelta(seconds=i * seconds),
        }
        for i in range(count)
    ]


def store_track(device_id, points):
    return LocationData.objects.bulk_create([
        LocationData(
            device_id=device_id,
            timestamp_utc=point['date'],
            latitude=point['lat'],
            longitude=point['lng'],
            altitude=point.get('altitude'),
        )
        for point in points
    ])

