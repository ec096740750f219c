"""
GPS Tracker API Views Package
"""
from .receiver import receive_location_data
from .sessions import start_session, end_session, session_points
from .history import get_gps_data, get_track, get_report, list_devices

__all__ = [
    'receive_location_data',
    'start_session',
    'end_session',
    'session_points',
    'get_gps_data',
    'get_track',
    'get_report',
    'list_devices',
]
