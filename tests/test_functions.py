"""
Tests for the trajectory processing functions
"""
import math
import random
from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from apps.tracker.functions import (
    calculate_average_speed,
    calculate_total_distance,
    elapsed_seconds,
    filter_locations_by_distance,
    format_duration,
    haversine_distance,
    parse_utc,
    process_locations,
    sort_locations,
    summarize_track,
)
from tests.helpers import T0, equator_track

# 0.001 degree of arc on a 6371 km sphere
MILLIDEGREE_M = 111.19492664455873


class TestParseUtc:
    def test_space_separated_string_is_utc(self):
        parsed = parse_utc('2024-05-01 12:30:00')
        assert parsed == datetime(2024, 5, 1, 12, 30, tzinfo=dt_timezone.utc)

    def test_zulu_suffix(self):
        assert parse_utc('2024-05-01T12:30:00Z') == datetime(2024, 5, 1, 12, 30, tzinfo=dt_timezone.utc)

    def test_offset_is_converted_to_utc(self):
        parsed = parse_utc('2024-05-01T14:30:00+02:00')
        assert parsed == datetime(2024, 5, 1, 12, 30, tzinfo=dt_timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    def test_naive_datetime_is_taken_as_utc(self):
        parsed = parse_utc(datetime(2024, 5, 1, 12, 30))
        assert parsed.tzinfo is not None
        assert parsed == datetime(2024, 5, 1, 12, 30, tzinfo=dt_timezone.utc)

    @pytest.mark.parametrize('value', [None, '', 'not a date', '2024-13-45T00:00:00', 'nan'])
    def test_unparseable_returns_none(self, value):
        assert parse_utc(value) is None

    def test_elapsed_seconds_degrades_to_zero(self):
        assert elapsed_seconds('garbage', T0) == 0.0
        assert elapsed_seconds(T0, None) == 0.0
        assert elapsed_seconds(T0, T0 + timedelta(seconds=42)) == 42.0


class TestHaversine:
    def test_known_distance(self):
        assert haversine_distance(0, 0, 0, 0.001) == pytest.approx(MILLIDEGREE_M, rel=1e-9)

    def test_zero_for_identical_points(self):
        assert haversine_distance(52.2297, 21.0122, 52.2297, 21.0122) == 0.0

    def test_symmetric_and_positive(self):
        rng = random.Random(7)
        for _ in range(50):
            lat1, lat2 = rng.uniform(-80, 80), rng.uniform(-80, 80)
            lon1, lon2 = rng.uniform(-179, 179), rng.uniform(-179, 179)
            forward = haversine_distance(lat1, lon1, lat2, lon2)
            backward = haversine_distance(lat2, lon2, lat1, lon1)
            assert forward == pytest.approx(backward)
            assert forward > 0

    def test_quarter_meridian(self):
        # Equator to pole: pi/2 * R
        assert haversine_distance(0, 0, 90, 0) == pytest.approx(10007543.4, rel=1e-6)

    def test_antipodal_points_give_half_circumference(self):
        # Rounding pushes the haversine term past 1 for some of these
        for lat, lon in [(0, 0), (69.51232454868148, 86.5812282599507), (45.0, -120.0), (-33.3, 151.2)]:
            distance = haversine_distance(lat, lon, -lat, lon + 180)
            assert distance == pytest.approx(math.pi * 6371000, rel=1e-6)


class TestFilterLocationsByDistance:
    def test_short_input_returned_as_is(self):
        assert filter_locations_by_distance([]) == []
        single = equator_track(1)
        assert filter_locations_by_distance(single) == single

    def test_drops_points_closer_than_threshold(self):
        # ~5.6 m apart: every other point survives a 10 m threshold
        points = equator_track(7, step_deg=0.00005)
        filtered = filter_locations_by_distance(points, 10)
        assert filtered == [points[0], points[2], points[4], points[6]]

    def test_compares_against_last_kept_point(self):
        # Creeping 4 m steps are dropped until they add up to 10 m
        points = equator_track(4, step_deg=0.000036)
        filtered = filter_locations_by_distance(points, 10)
        assert filtered == [points[0], points[3]]

    def test_stationary_points_collapse_to_first(self):
        points = [{'lat': 10.0, 'lng': 20.0, 'date': T0 + timedelta(seconds=i)} for i in range(5)]
        assert filter_locations_by_distance(points) == [points[0]]

    def test_output_is_spaced_subsequence_including_first(self):
        rng = random.Random(42)
        points = []
        lat, lng = 50.0, 19.0
        for i in range(300):
            lat += rng.uniform(-0.0002, 0.0002)
            lng += rng.uniform(-0.0002, 0.0002)
            points.append({'lat': lat, 'lng': lng, 'date': T0 + timedelta(seconds=i)})

        for threshold in (0, 5, 10, 25):
            filtered = filter_locations_by_distance(points, threshold)
            assert filtered[0] is points[0]

            # Subsequence: indices strictly increasing
            indices = [points.index(p) for p in filtered]
            assert indices == sorted(set(indices))

            for previous, current in zip(filtered, filtered[1:]):
                distance = haversine_distance(previous['lat'], previous['lng'], current['lat'], current['lng'])
                assert distance >= threshold

    def test_total_distance_grows_as_threshold_drops(self):
        points = equator_track(21, step_deg=0.00005)
        totals = [
            calculate_total_distance(filter_locations_by_distance(points, threshold))
            for threshold in (50, 20, 10, 0)
        ]
        for larger_threshold, smaller_threshold in zip(totals, totals[1:]):
            assert smaller_threshold >= larger_threshold - 1e-6

    def test_unfiltered_track_is_never_shorter(self):
        rng = random.Random(3)
        points = [
            {'lat': rng.uniform(-0.001, 0.001), 'lng': rng.uniform(-0.001, 0.001), 'date': T0}
            for _ in range(100)
        ]
        full = calculate_total_distance(points)
        for threshold in (5, 10, 50):
            assert calculate_total_distance(filter_locations_by_distance(points, threshold)) <= full + 1e-6


class TestTotalDistance:
    def test_empty_and_single(self):
        assert calculate_total_distance([]) == 0
        assert calculate_total_distance(equator_track(1)) == 0

    def test_sums_legs(self):
        assert calculate_total_distance(equator_track(4)) == pytest.approx(3 * MILLIDEGREE_M)


class TestAverageSpeed:
    def test_fewer_than_three_points(self):
        assert calculate_average_speed([]) == []
        assert calculate_average_speed(equator_track(2)) == []

    def test_three_points_forty_kmh(self):
        points = equator_track(3, step_deg=0.0005, seconds=5)
        speeds = calculate_average_speed(points)
        assert len(speeds) == 1
        assert speeds[0]['index'] == 1
        assert speeds[0]['speed_kmh'] == pytest.approx(40.03, abs=0.01)
        assert speeds[0]['date'] == points[1]['date']

    def test_window_caps_at_two_and_skips_edges(self):
        points = equator_track(8)
        speeds = calculate_average_speed(points)
        assert [s['index'] for s in speeds] == [2, 3, 4, 5]
        # 4 legs of ~111 m over 40 s
        for speed in speeds:
            assert speed['speed_kmh'] == pytest.approx(MILLIDEGREE_M * 4 / 40 * 3.6)

    def test_four_points_use_window_of_one(self):
        speeds = calculate_average_speed(equator_track(4))
        assert [s['index'] for s in speeds] == [1, 2]

    def test_zero_or_bad_elapsed_time_gives_zero_speed(self):
        points = equator_track(3, seconds=0)
        assert calculate_average_speed(points)[0]['speed_kmh'] == 0.0

        points = equator_track(3)
        points[0]['date'] = 'broken'
        assert calculate_average_speed(points)[0]['speed_kmh'] == 0.0


class TestFormatDuration:
    @pytest.mark.parametrize('ms, expected', [
        (0, '0:00:00'),
        (999, '0:00:00'),
        (61000, '0:01:01'),
        (3723000, '1:02:03'),
        (36000000, '10:00:00'),
        (-5000, '0:00:00'),
        (float('nan'), '0:00:00'),
    ])
    def test_format(self, ms, expected):
        assert format_duration(ms) == expected


class TestProcessLocations:
    def test_empty(self):
        assert process_locations([]) == []

    def test_cumulative_values(self):
        points = equator_track(3, step_deg=0.0005, seconds=5)
        processed = process_locations(points)

        assert [p['incremental_time_seconds'] for p in processed] == [0.0, 5.0, 5.0]
        assert processed[0]['incremental_distance'] == 0.0
        assert processed[2]['cumulative_distance_km'] == pytest.approx(MILLIDEGREE_M / 1000)
        assert processed[2]['cumulative_time_ms'] == 10000
        assert processed[2]['formatted_cumulative_time'] == '0:00:10'

        # Only the middle point has a full window
        assert processed[0]['speed_kmh'] == 0.0
        assert processed[1]['speed_kmh'] == pytest.approx(40.03, abs=0.01)
        assert processed[2]['speed_kmh'] == 0.0

    def test_keeps_original_fields(self):
        points = equator_track(2)
        points[0]['device_id'] = 'tracker-01'
        processed = process_locations(points)
        assert processed[0]['device_id'] == 'tracker-01'
        assert processed[1]['altitude'] == points[1]['altitude']
        assert processed[1]['local_date'] == points[1]['date']

    def test_unparseable_date_gives_zero_elapsed(self):
        points = equator_track(3)
        points[1]['date'] = 'not a date'
        processed = process_locations(points)

        assert processed[1]['local_date'] is None
        assert processed[1]['cumulative_time_ms'] == 0
        assert processed[1]['incremental_time_seconds'] == 0.0
        assert processed[2]['cumulative_time_ms'] == 20000
        assert processed[2]['cumulative_distance_km'] == pytest.approx(2 * MILLIDEGREE_M / 1000)


class TestSortAndSummary:
    def test_sort_oldest_first_bad_dates_last(self):
        points = equator_track(3)
        shuffled = [points[2], {'lat': 0, 'lng': 0, 'date': 'bad'}, points[0], points[1]]
        ordered = sort_locations(shuffled)
        assert ordered[:3] == points
        assert ordered[3]['date'] == 'bad'

    def test_summary_of_track(self):
        points = equator_track(5)
        summary = summarize_track(list(reversed(points)))

        assert summary['point_count'] == 5
        assert summary['filtered_count'] == 5
        assert summary['total_distance_m'] == pytest.approx(4 * MILLIDEGREE_M)
        assert summary['duration_ms'] == 40000
        assert summary['formatted_duration'] == '0:00:40'
        assert summary['average_speed_kmh'] == pytest.approx(4 * MILLIDEGREE_M / 40 * 3.6)
        assert summary['speed']['max_kmh'] == pytest.approx(40.03, abs=0.01)
        assert summary['altitude'] == {'min_m': 100.0, 'max_m': 104.0, 'avg_m': 102.0, 'range_m': 4.0}

    def test_summary_missing_altitude_counts_as_zero(self):
        points = equator_track(2)
        points[0]['altitude'] = None
        summary = summarize_track(points)
        assert summary['altitude']['min_m'] == 0.0
        assert summary['speed'] is None

    def test_summary_of_nothing(self):
        summary = summarize_track([])
        assert summary['total_distance_m'] == 0
        assert summary['duration_ms'] == 0
        assert summary['average_speed_kmh'] == 0.0
        assert summary['speed'] is None
        assert summary['altitude'] is None
