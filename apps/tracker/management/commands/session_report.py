"""
Management command to print the processed point list and summary of a track
Works on a single session or on everything recorded for a device
"""
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from apps.tracker.functions import (
    DEFAULT_MIN_DISTANCE_M,
    filter_locations_by_distance,
    process_locations,
    summarize_track,
)
from apps.tracker.models import TrackingSession
from apps.tracker.queries import filter_locations


class Command(BaseCommand):
    help = 'Print processed GPS points and a distance/speed/altitude summary'

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument(
            '--session',
            type=str,
            help='Session ID',
        )
        group.add_argument(
            '--device',
            type=str,
            help='Device ID (whole recorded track)',
        )
        parser.add_argument(
            '--min-distance',
            type=float,
            default=DEFAULT_MIN_DISTANCE_M,
            help='Decimation threshold in meters (default: 10)',
        )

    def handle(self, *args, **options):
        if options['session']:
            try:
                session = TrackingSession.objects.get(id=options['session'])
            except (TrackingSession.DoesNotExist, ValidationError):
                raise CommandError(f"Session not found: {options['session']}")
            query = filter_locations(session.device_id, session.start_utc, session.end_utc or timezone.now())
            title = f"Session {session.id} ({session.device_id})"
        else:
            query = filter_locations(options['device'])
            title = f"Device {options['device']}"

        locations = [location.as_point() for location in query.order_by('timestamp_utc')]
        if not locations:
            self.stdout.write(self.style.WARNING('No GPS data found'))
            return

        min_distance = options['min_distance']
        processed = process_locations(filter_locations_by_distance(locations, min_distance))
        summary = summarize_track(locations, min_distance)

        self.stdout.write(self.style.SUCCESS(f'\n=== {title} ===\n'))

        for point in processed:
            altitude = f"{point['altitude']:.1f}" if point.get('altitude') is not None else '-'
            self.stdout.write(
                f"{point['local_date']:%Y-%m-%d %H:%M:%S}  "
                f"{point['lat']:.6f}, {point['lng']:.6f}  "
                f"alt {altitude}  "
                f"{point['cumulative_distance_km']:.2f} km  "
                f"{point['formatted_cumulative_time']}  "
                f"{point['speed_kmh']:.1f} km/h"
            )

        self.stdout.write("")
        self.stdout.write(f"Points: {summary['filtered_count']} of {summary['point_count']} (min distance {min_distance:g} m)")
        self.stdout.write(f"Distance: {summary['total_distance_km']:.2f} km")
        self.stdout.write(f"Duration: {summary['formatted_duration']}")
        self.stdout.write(f"Average speed: {summary['average_speed_kmh']:.1f} km/h")

        if summary['speed']:
            speed = summary['speed']
            self.stdout.write(f"Speed range: {speed['min_kmh']:.1f} - {speed['max_kmh']:.1f} km/h")
        if summary['altitude']:
            altitude = summary['altitude']
            self.stdout.write(f"Altitude range: {altitude['min_m']:.1f} - {altitude['max_m']:.1f} m")
