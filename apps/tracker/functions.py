"""
GPS Trajectory Processing

Pure helpers used by the API views, reports and management commands:
Haversine distance, point decimation, windowed speed estimation and
cumulative distance/time bookkeeping over a time-ordered list of points.

A point is a dict with at least 'lat', 'lng' and 'date' keys
(optionally 'altitude'). Dates are UTC datetimes or ISO-8601 strings.
"""
import logging
import math
from datetime import datetime, timezone as dt_timezone
from django.utils.dateparse import parse_datetime

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371000
DEFAULT_MIN_DISTANCE_M = 10
MAX_SPEED_WINDOW = 2
MS_TO_KMH = 3.6


def parse_utc(value):
    """
    Parse a timestamp into an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC) and ISO-8601 strings,
    with either 'T' or a space between date and time. Strings without an
    offset are taken as UTC.

    Returns:
        Aware datetime, or None if the value is empty or unparseable
    """
    if not value:
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        date_str = str(value).strip()
        if 'T' not in date_str:
            date_str = date_str.replace(' ', 'T', 1)
        try:
            parsed = parse_datetime(date_str)
        except ValueError:
            parsed = None
        if parsed is None:
            logger.debug(f"[PARSE] Unparseable date: {value!r}")
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt_timezone.utc)
    return parsed.astimezone(dt_timezone.utc)


def elapsed_seconds(start, end):
    """
    Seconds between two point dates; 0 if either cannot be parsed.
    """
    start_dt = parse_utc(start)
    end_dt = parse_utc(end)
    if start_dt is None or end_dt is None:
        return 0.0
    seconds = (end_dt - start_dt).total_seconds()
    return seconds if math.isfinite(seconds) else 0.0


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate distance between two points on Earth in meters using Haversine formula.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = math.sin(delta_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    # Rounding can push a just past 1 for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def point_distance(point1, point2):
    return haversine_distance(point1['lat'], point1['lng'], point2['lat'], point2['lng'])


def sort_locations(locations):
    """
    Sort points oldest first. Points with unparseable dates go last.
    """
    def sort_key(point):
        parsed = parse_utc(point.get('date'))
        return (parsed is None, parsed or datetime.min.replace(tzinfo=dt_timezone.utc))

    return sorted(locations, key=sort_key)


def filter_locations_by_distance(locations, min_distance=DEFAULT_MIN_DISTANCE_M):
    """
    Remove points closer than min_distance meters to the last kept point.

    Greedy single pass: the first point is always kept, every later point
    is compared against the most recently kept one.
    """
    if len(locations) <= 1:
        return list(locations)

    filtered = [locations[0]]

    for location in locations[1:]:
        if point_distance(filtered[-1], location) >= min_distance:
            filtered.append(location)

    return filtered


def calculate_total_distance(locations):
    """
    Total distance in meters traveled between consecutive points.
    """
    if len(locations) <= 1:
        return 0.0

    total_distance = 0.0
    for previous, current in zip(locations, locations[1:]):
        total_distance += point_distance(previous, current)

    return total_distance


def speed_window_size(count):
    return min(MAX_SPEED_WINDOW, (count - 1) // 2)


def calculate_average_speed(locations):
    """
    Estimate speed for each point from the points around it.

    For point i the distance and elapsed time are measured between
    points i - window and i + window, where window is min(2, (n - 1) // 2).
    Points closer than window to either end get no estimate.

    Returns:
        List of dicts with index, speed_kmh and date; empty for fewer than 3 points
    """
    if len(locations) < 3:
        return []

    speeds = []
    window = speed_window_size(len(locations))

    for i in range(window, len(locations) - window):
        point1 = locations[i - window]
        point2 = locations[i + window]

        distance = point_distance(point1, point2)
        time_diff = elapsed_seconds(point1.get('date'), point2.get('date'))
        speed_kmh = (distance / time_diff) * MS_TO_KMH if time_diff > 0 else 0.0

        speeds.append({
            'index': i,
            'speed_kmh': speed_kmh,
            'date': parse_utc(locations[i].get('date')),
        })

    return speeds


def format_duration(ms):
    """
    Format milliseconds as h:mm:ss
    """
    if not ms or ms < 0 or not math.isfinite(ms):
        ms = 0
    total_seconds = int(ms // 1000)

    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    return f"{hours}:{minutes:02d}:{seconds:02d}"


def process_locations(locations):
    """
    Compute incremental and cumulative distance/time plus speed per point.

    Expects points already sorted oldest first (and usually decimated).
    Cumulative values are measured from the first point. Points at the edges
    of the speed window get speed_kmh 0.0.
    """
    speeds_by_index = {s['index']: s['speed_kmh'] for s in calculate_average_speed(locations)}
    start_date = locations[0].get('date') if locations else None

    processed = []
    cumulative_distance = 0.0

    for i, current in enumerate(locations):
        incremental_distance = 0.0
        incremental_time = 0.0

        if i > 0:
            previous = locations[i - 1]
            incremental_distance = point_distance(previous, current)
            incremental_time = elapsed_seconds(previous.get('date'), current.get('date'))

        cumulative_distance += incremental_distance
        cumulative_time_ms = elapsed_seconds(start_date, current.get('date')) * 1000

        processed.append({
            **current,
            'local_date': parse_utc(current.get('date')),
            'incremental_distance': incremental_distance,
            'incremental_time_seconds': incremental_time,
            'cumulative_distance_km': cumulative_distance / 1000,
            'cumulative_time_ms': cumulative_time_ms,
            'formatted_cumulative_time': format_duration(cumulative_time_ms),
            'speed_kmh': speeds_by_index.get(i, 0.0),
        })

    return processed


def summarize_track(locations, min_distance=DEFAULT_MIN_DISTANCE_M):
    """
    Distance, speed and altitude summary for a track.

    Points are sorted and decimated before anything is measured.
    Missing altitudes count as 0.
    """
    ordered = sort_locations(locations)
    filtered = filter_locations_by_distance(ordered, min_distance)

    total_distance = calculate_total_distance(filtered)
    duration_ms = elapsed_seconds(filtered[0].get('date'), filtered[-1].get('date')) * 1000 if filtered else 0.0
    speeds = [s['speed_kmh'] for s in calculate_average_speed(filtered)]
    altitudes = [p.get('altitude') or 0.0 for p in filtered]

    summary = {
        'point_count': len(locations),
        'filtered_count': len(filtered),
        'min_distance_m': min_distance,
        'total_distance_m': total_distance,
        'total_distance_km': total_distance / 1000,
        'duration_ms': duration_ms,
        'formatted_duration': format_duration(duration_ms),
        'average_speed_kmh': (total_distance / (duration_ms / 1000)) * MS_TO_KMH if duration_ms > 0 else 0.0,
        'speed': None,
        'altitude': None,
    }

    if speeds:
        summary['speed'] = {
            'min_kmh': min(speeds),
            'max_kmh': max(speeds),
            'avg_kmh': sum(speeds) / len(speeds),
        }

    if altitudes:
        summary['altitude'] = {
            'min_m': min(altitudes),
            'max_m': max(altitudes),
            'avg_m': sum(altitudes) / len(altitudes),
            'range_m': max(altitudes) - min(altitudes),
        }

    return summary
