"""
Request payload helpers for the device-facing API
"""
import json
from ...functions import parse_utc


def read_json_body(request):
    """
    Decode a JSON object request body

    Raises:
        ValueError: if the body is not a JSON object
    """
    try:
        body = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid JSON body: {e}")

    if not isinstance(body, dict):
        raise ValueError('JSON body must be an object')
    return body


def parse_coordinate(value, name, limit):
    try:
        coordinate = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number")

    if not -limit <= coordinate <= limit:
        raise ValueError(f"{name} out of range")
    return coordinate


def parse_location(location):
    """
    Validate one pushed location

    Returns:
        Dict with timestamp_utc, latitude, longitude and altitude
    """
    if not isinstance(location, dict):
        raise ValueError('location must be an object')

    timestamp = parse_utc(location.get('timestamp_utc'))
    if timestamp is None:
        raise ValueError('timestamp_utc is missing or invalid')

    altitude = location.get('altitude')
    if altitude is not None:
        try:
            altitude = float(altitude)
        except (TypeError, ValueError):
            raise ValueError('altitude must be a number')

    return {
        'timestamp_utc': timestamp,
        'latitude': parse_coordinate(location.get('latitude'), 'latitude', 90),
        'longitude': parse_coordinate(location.get('longitude'), 'longitude', 180),
        'altitude': altitude,
    }
