"""
GPS Tracker Views Package
"""
from .api import (
    receive_location_data,
    start_session,
    end_session,
    session_points,
    get_gps_data,
    get_track,
    get_report,
    list_devices,
)

__all__ = [
    # Device push endpoints
    'receive_location_data',
    'start_session',
    'end_session',

    # Dashboard endpoints
    'session_points',
    'get_gps_data',
    'get_track',
    'get_report',
    'list_devices',
]
