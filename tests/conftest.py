"""
Shared fixtures for the tracker test suite
"""
import json
import pytest

from apps.tracker.models import ApiKey, Device


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='rider', password='secret-pass-123')


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username='someone', password='secret-pass-456')


@pytest.fixture
def api_key(user):
    return ApiKey.objects.create(user=user, description='Phone')


@pytest.fixture
def device(user):
    return Device.objects.create(device_id='tracker-01', description='Bike', owner=user)


@pytest.fixture
def auth_headers(api_key):
    return {'HTTP_X_API_KEY': api_key.key}


@pytest.fixture
def post_json(client):
    def post(url, body, **extra):
        return client.post(url, data=json.dumps(body), content_type='application/json', **extra)
    return post
