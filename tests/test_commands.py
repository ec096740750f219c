"""
Tests for the management commands
"""
from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.tracker.models import ApiKey, TrackingSession
from tests.helpers import T0, equator_track, store_track

pytestmark = pytest.mark.django_db


def run(*args, **options):
    out = StringIO()
    call_command(*args, stdout=out, **options)
    return out.getvalue()


class TestCreateApiKey:
    def test_creates_key(self, user):
        output = run('create_api_key', 'rider', description='Garmin')

        api_key = ApiKey.objects.get(user=user)
        assert api_key.description == 'Garmin'
        assert api_key.key in output

    def test_unknown_user(self):
        with pytest.raises(CommandError, match='User not found'):
            run('create_api_key', 'nobody')


class TestSessionReport:
    def test_session_report(self):
        store_track('tracker-01', equator_track(5))
        session = TrackingSession.objects.create(
            device_id='tracker-01', start_utc=T0, end_utc=T0 + timedelta(minutes=1)
        )

        output = run('session_report', session=str(session.id))

        assert f'Session {session.id}' in output
        assert '2024-05-01 12:00:40' in output
        assert 'Points: 5 of 5' in output
        assert 'Distance: 0.44 km' in output
        assert 'Duration: 0:00:40' in output
        assert 'Altitude range: 100.0 - 104.0 m' in output

    def test_device_report_with_threshold(self):
        store_track('tracker-01', equator_track(5))

        output = run('session_report', device='tracker-01', min_distance=200)

        assert 'Device tracker-01' in output
        assert 'Points: 3 of 5' in output

    def test_no_data(self):
        output = run('session_report', device='ghost')
        assert 'No GPS data found' in output

    @pytest.mark.parametrize('session_id', ['8d3c0c9e-5d0e-4a8e-9a52-2f3c1b0a9f11', 'not-a-uuid'])
    def test_unknown_session(self, session_id):
        with pytest.raises(CommandError, match='Session not found'):
            run('session_report', session=session_id)
