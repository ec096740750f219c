"""
Tracking Session API
Session boundaries pushed by devices and the processed point list of a session
"""
import logging
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from ...auth import api_key_required, verify_device_ownership
from ...functions import (
    DEFAULT_MIN_DISTANCE_M,
    calculate_total_distance,
    filter_locations_by_distance,
    parse_utc,
    process_locations,
)
from ...models import TrackingSession
from ...queries import filter_locations, parse_min_distance
from .payload import read_json_body

logger = logging.getLogger(__name__)


def _session_request(request):
    """
    Parse {device_id, timestamp_utc?} and check device ownership

    Returns:
        (device_id, timestamp, error_response)
    """
    try:
        body = read_json_body(request)
    except ValueError as e:
        return None, None, JsonResponse({'message': str(e)}, status=400)

    device_id = body.get('device_id')
    if not device_id:
        return None, None, JsonResponse({'message': 'Provide a device_id.'}, status=400)

    timestamp = timezone.now()
    if body.get('timestamp_utc'):
        timestamp = parse_utc(body['timestamp_utc'])
        if timestamp is None:
            return None, None, JsonResponse({'message': 'Invalid timestamp_utc.'}, status=400)

    if not verify_device_ownership(request.api_user, device_id):
        logger.warning(f"[ERROR] Device {device_id} does not belong to {request.api_user}")
        return None, None, JsonResponse(
            {'message': 'Forbidden: Device does not belong to the user.'}, status=403
        )

    return device_id, timestamp, None


@csrf_exempt
@require_POST
@api_key_required
def start_session(request):
    """
    Open a new session for a device

    JSON body:
        device_id: Device identifier
        timestamp_utc: Session start (optional, defaults to now)
    """
    device_id, start_utc, error = _session_request(request)
    if error:
        return error

    try:
        session = TrackingSession.objects.create(device_id=device_id, start_utc=start_utc)
    except Exception as e:
        logger.error(f"[ERROR] Start session error: {e}, Device: {device_id}")
        return JsonResponse({'message': 'Internal server error'}, status=500)

    logger.info(f"[RESULT] Session started. Device: {device_id} Session: {session.id}")
    return JsonResponse({'inserted': 1, 'id': str(session.id)}, status=201)


@csrf_exempt
@require_POST
@api_key_required
def end_session(request):
    """
    Close the most recently started open session of a device

    JSON body:
        device_id: Device identifier
        timestamp_utc: Session end (optional, defaults to now)
    """
    device_id, end_utc, error = _session_request(request)
    if error:
        return error

    try:
        session = TrackingSession.objects.filter(
            device_id=device_id,
            end_utc__isnull=True,
        ).order_by('-start_utc').first()

        if session is None:
            return JsonResponse({'message': 'No open session found for the device.'}, status=404)

        session.end_utc = end_utc
        session.save(update_fields=['end_utc'])
    except Exception as e:
        logger.error(f"[ERROR] End session error: {e}, Device: {device_id}")
        return JsonResponse({'message': 'Internal server error'}, status=500)

    logger.info(f"[RESULT] Session ended. Device: {device_id} Session: {session.id}")
    return JsonResponse({'updated': 1}, status=200)


@require_GET
def session_points(request, session_id):
    """
    Processed GPS points of one session, oldest first

    Points between the session start and end (or now, for a running
    session) are decimated and annotated with cumulative distance,
    elapsed time and speed.

    Query parameters:
        minDistance: Decimation threshold in meters (default: 10)
    """
    try:
        min_distance = parse_min_distance(request.GET.get('minDistance'), DEFAULT_MIN_DISTANCE_M)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    try:
        session = TrackingSession.objects.filter(id=session_id).first()
    except Exception as e:
        logger.error(f"[ERROR] Session lookup error: {e}, Session: {session_id}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    if session is None:
        return JsonResponse({'success': False, 'error': 'Session not found'}, status=404)

    try:
        end_utc = session.end_utc or timezone.now()
        query = filter_locations(session.device_id, session.start_utc, end_utc).order_by('timestamp_utc')
        points = filter_locations_by_distance([location.as_point() for location in query], min_distance)
        processed = process_locations(points)
    except Exception as e:
        logger.error(f"[ERROR] Session points error: {e}, Session: {session_id}")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return JsonResponse({
        'success': True,
        'session': session.to_dict(),
        'total_distance_m': calculate_total_distance(points),
        'data': processed,
    })
