"""
API Key Authentication
Device-facing endpoints authenticate with an X-API-Key header
"""
import logging
from functools import wraps
from django.http import JsonResponse
from django.utils import timezone
from .models import ApiKey, Device

logger = logging.getLogger(__name__)

API_KEY_HEADER = 'HTTP_X_API_KEY'


def validate_api_key(key):
    """
    Look up an active API key and record its use

    Returns:
        ApiKey instance or None if the key is unknown or inactive
    """
    if not key:
        return None

    api_key = ApiKey.objects.select_related('user').filter(key=key, is_active=True).first()
    if api_key is None:
        return None

    ApiKey.objects.filter(pk=api_key.pk).update(last_used=timezone.now())
    return api_key


def get_request_user(request):
    """
    Resolve the user behind a request: API key first, then a logged-in session
    """
    api_key = validate_api_key(request.META.get(API_KEY_HEADER, '').strip())
    if api_key:
        request.api_key = api_key
        return api_key.user

    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return user

    return None


def api_key_required(view_func):
    """
    Reject requests without a valid API key (or logged-in user) with 401
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = get_request_user(request)
        if user is None:
            logger.warning(f"[AUTH] Rejected {request.method} {request.path} - invalid or missing API key")
            return JsonResponse({'message': 'Unauthorized: Invalid or missing API Key'}, status=401)

        request.api_user = user
        return view_func(request, *args, **kwargs)

    return wrapper


def verify_device_ownership(user, device_id):
    """
    Check that the device is claimed by the given user
    """
    if user is None or not device_id:
        return False
    return Device.objects.filter(device_id=device_id, owner=user).exists()
