"""
URL Configuration for GPS Tracker Application
Paths match the URLs already configured on devices, so no trailing slashes
"""
from django.urls import path
from .views.api import (
    receive_location_data,
    start_session,
    end_session,
    session_points,
    get_gps_data,
    get_track,
    get_report,
    list_devices,
)

app_name = 'tracker'

urlpatterns = [
    # Location pings (POST, X-API-Key)
    # Body: {"device_id": ..., "locations": [{timestamp_utc, latitude, longitude, altitude}]}
    path('api/LocationData', receive_location_data, name='location_data'),

    # Session boundaries (POST, X-API-Key)
    # Body: {"device_id": ..., "timestamp_utc": optional}
    path('api/Session/start-session', start_session, name='start_session'),
    path('api/Session/end-session', end_session, name='end_session'),

    # Raw history
    # Usage: GET /api/gps-data?deviceId=abc&startDate=2024-05-01&endDate=2024-05-02
    path('api/gps-data', get_gps_data, name='gps_data'),

    # Decimated track with speed/altitude series, and its summary
    # Usage: GET /api/track?deviceId=abc&startDate=...&minDistance=10
    path('api/track', get_track, name='track'),
    path('api/reports', get_report, name='reports'),

    # Processed points of one session
    path('api/sessions/<uuid:session_id>/points', session_points, name='session_points'),

    path('api/devices', list_devices, name='devices'),
]
