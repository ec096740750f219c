"""
GPS History API

Read-only endpoints used by the dashboard: raw location history,
processed tracks with speed/altitude series, track reports and the
device list.
"""
import logging
from django.http import JsonResponse
from django.views.decorators.http import require_GET
from ...functions import (
    DEFAULT_MIN_DISTANCE_M,
    calculate_average_speed,
    calculate_total_distance,
    filter_locations_by_distance,
    sort_locations,
    summarize_track,
)
from ...models import Device
from ...queries import locations_from_request, parse_min_distance

logger = logging.getLogger(__name__)


@require_GET
def get_gps_data(request):
    """
    Get location history, newest first.

    Query parameters:
        deviceId: Filter by device
        startDate: YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS (UTC)
        endDate: YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS (UTC)
    """
    try:
        locations = locations_from_request(request)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)
    except Exception as e:
        logger.error(f"[ERROR] Database error: {e}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    logger.info(f"[RESULT] Found {len(locations)} location records")
    return JsonResponse({'success': True, 'data': locations})


@require_GET
def get_track(request):
    """
    Get a decimated track with speed and altitude series.

    Returns JSON with:
    - data: points oldest first, none closer than minDistance to the previous one
    - total_distance_m
    - speeds: windowed speed estimates (interior points only)
    - altitudes: altitude per point (0 when missing)

    Query parameters:
        deviceId, startDate, endDate: as for /api/gps-data
        minDistance: Decimation threshold in meters (default: 10)
    """
    try:
        min_distance = parse_min_distance(request.GET.get('minDistance'), DEFAULT_MIN_DISTANCE_M)
        locations = locations_from_request(request)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)
    except Exception as e:
        logger.error(f"[ERROR] Database error: {e}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    try:
        filtered = filter_locations_by_distance(sort_locations(locations), min_distance)
        speeds = calculate_average_speed(filtered)
        altitudes = [
            {'index': i, 'altitude': point.get('altitude') or 0.0, 'date': point['date']}
            for i, point in enumerate(filtered)
        ]
        total_distance = calculate_total_distance(filtered)
    except Exception as e:
        logger.error(f"[ERROR] Track processing error: {e}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return JsonResponse({
        'success': True,
        'point_count': len(locations),
        'data': filtered,
        'total_distance_m': total_distance,
        'speeds': speeds,
        'altitudes': altitudes,
    })


@require_GET
def get_report(request):
    """
    Distance, speed and altitude summary for the selected points.

    Query parameters:
        deviceId, startDate, endDate: as for /api/gps-data
        minDistance: Decimation threshold in meters (default: 10)
    """
    try:
        min_distance = parse_min_distance(request.GET.get('minDistance'), DEFAULT_MIN_DISTANCE_M)
        locations = locations_from_request(request)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)
    except Exception as e:
        logger.error(f"[ERROR] Database error: {e}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    try:
        report = summarize_track(locations, min_distance)
    except Exception as e:
        logger.error(f"[ERROR] Report error: {e}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return JsonResponse({'success': True, 'report': report})


@require_GET
def list_devices(request):
    """
    List all registered devices
    """
    try:
        devices = [
            {'id': device.device_id, 'description': device.description}
            for device in Device.objects.order_by('device_id')
        ]
    except Exception as e:
        logger.error(f"[ERROR] Database error: {e}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return JsonResponse({'success': True, 'devices': devices})
