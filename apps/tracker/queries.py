"""
Location Query Helpers
Shared filtering for the read-only GPS endpoints
"""
import math
from .functions import parse_utc
from .models import LocationData


def parse_date_bound(value, end=False):
    """
    Parse a startDate/endDate query value into a UTC datetime.

    A bare date (YYYY-MM-DD) covers the whole day: 00:00:00 for a start
    bound, 23:59:59 for an end bound.

    Raises:
        ValueError: if the value cannot be parsed
    """
    if not value:
        return None

    value = value.strip()
    if 'T' not in value and ' ' not in value:
        value = f"{value}T23:59:59" if end else f"{value}T00:00:00"

    parsed = parse_utc(value)
    if parsed is None:
        raise ValueError(f"Invalid date: {value}")
    return parsed


def parse_min_distance(value, default):
    """
    Parse the minDistance query value (meters, non-negative)
    """
    if value in (None, ''):
        return default
    min_distance = float(value)
    if not math.isfinite(min_distance) or min_distance < 0:
        raise ValueError('minDistance must be a non-negative number')
    return min_distance


def filter_locations(device_id=None, start=None, end=None):
    """
    Location queryset filtered by device and time range (inclusive)
    """
    query = LocationData.objects.all()

    if device_id:
        query = query.filter(device_id=device_id)
    if start:
        query = query.filter(timestamp_utc__gte=start)
    if end:
        query = query.filter(timestamp_utc__lte=end)

    return query


def locations_from_request(request):
    """
    Points matching the deviceId/startDate/endDate query parameters, newest first

    Raises:
        ValueError: on malformed date parameters
    """
    start = parse_date_bound(request.GET.get('startDate'))
    end = parse_date_bound(request.GET.get('endDate'), end=True)

    query = filter_locations(request.GET.get('deviceId'), start, end).order_by('-timestamp_utc')
    return [location.as_point() for location in query]
