"""
Location Data Receiver API

Receives batches of location pings pushed by devices and stores them
in the database.
"""
import logging
import time
from django.db import transaction
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST
from ...auth import api_key_required, verify_device_ownership
from ...models import LocationData
from .payload import read_json_body, parse_location

# Configure logging
logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
@api_key_required
def receive_location_data(request):
    """
    Store location pings for a device

    JSON body:
        device_id: Device identifier
        locations: List of {timestamp_utc, latitude, longitude, altitude}

    Returns:
        201 with the number of inserted rows
    """
    try:
        body = read_json_body(request)
    except ValueError as e:
        return JsonResponse({'message': str(e)}, status=400)

    device_id = body.get('device_id')
    locations = body.get('locations')

    logger.info(f"[INCOMING] Device: {device_id}, locations: {len(locations) if isinstance(locations, list) else 0}")

    if not device_id or not isinstance(locations, list) or not locations:
        return JsonResponse({'message': 'Provide a device_id and at least one location.'}, status=400)

    if not verify_device_ownership(request.api_user, device_id):
        logger.warning(f"[ERROR] Device {device_id} does not belong to {request.api_user}")
        return JsonResponse({'message': 'Forbidden: Device does not belong to the user.'}, status=403)

    rows = []
    for index, location in enumerate(locations):
        try:
            rows.append(LocationData(device_id=device_id, **parse_location(location)))
        except ValueError as e:
            logger.warning(f"[SKIP] Device {device_id}, location {index}: {e}")
            return JsonResponse({'message': f'Invalid location at index {index}: {e}'}, status=400)

    start_time = time.monotonic()
    try:
        with transaction.atomic():
            LocationData.objects.bulk_create(rows)
    except Exception as e:
        logger.error(f"[ERROR] LocationData insert error: {e}, Device: {device_id}")
        return JsonResponse({'message': 'Internal server error'}, status=500)

    elapsed_ms = (time.monotonic() - start_time) * 1000
    logger.info(f"[RESULT] Inserted rows: {len(rows)} Elapsed time: {elapsed_ms:.0f} ms - Device: {device_id}")

    return JsonResponse({'inserted': len(rows)}, status=201)
