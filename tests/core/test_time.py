#!/usr/bin/env python3
"""Test suite for GPS time handling"""

import unittest
from datetime import datetime, timedelta, timezone

import pytest

from satvis.core.errors import ValidationError
from satvis.core.time import (
    GNSSTime, GPS_EPOCH, gps_seconds_to_utc, gps_seconds_to_week_tow,
    timediff, to_utc, utc_to_gps_seconds, week_tow_to_gps_seconds,
)


class TestUtcToGps(unittest.TestCase):

    def test_epoch_is_zero(self):
        self.assertEqual(utc_to_gps_seconds(datetime(1980, 1, 6, tzinfo=timezone.utc)), 0.0)

    def test_unix_offset(self):
        """GPS epoch is 315964800 s after the Unix epoch, no leap seconds"""
        unix_epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        self.assertEqual(utc_to_gps_seconds(unix_epoch), -315964800.0)

    def test_week_and_tow(self):
        # Thursday 2025-01-09 12:00 UTC
        week, tow = gps_seconds_to_week_tow(
            utc_to_gps_seconds(datetime(2025, 1, 9, 12, tzinfo=timezone.utc)))
        self.assertEqual(week, 2348)
        self.assertEqual(tow, 4 * 86400 + 12 * 3600)

    def test_naive_is_utc(self):
        naive = datetime(2025, 1, 9, 12)
        aware = datetime(2025, 1, 9, 12, tzinfo=timezone.utc)
        self.assertEqual(utc_to_gps_seconds(naive), utc_to_gps_seconds(aware))

    def test_other_timezone(self):
        tokyo = timezone(timedelta(hours=9))
        t = datetime(2025, 1, 9, 21, tzinfo=tokyo)
        self.assertEqual(to_utc(t), datetime(2025, 1, 9, 12, tzinfo=timezone.utc))

    def test_round_trip(self):
        t = datetime(2024, 6, 30, 23, 59, 59, 500000, tzinfo=timezone.utc)
        self.assertEqual(gps_seconds_to_utc(utc_to_gps_seconds(t)), t)

    def test_invalid_inputs(self):
        with self.assertRaises(ValidationError):
            to_utc(None)
        with self.assertRaises(ValidationError):
            to_utc("2025-01-09")
        with self.assertRaises(ValidationError):
            gps_seconds_to_week_tow(-1.0)
        with self.assertRaises(ValidationError):
            week_tow_to_gps_seconds(2000, 604800.0)


class TestGNSSTime(unittest.TestCase):

    def test_normalization(self):
        t = GNSSTime(2000, 604800.0 + 10.0)
        self.assertEqual((t.week, t.tow), (2001, 10.0))
        t = GNSSTime(2000, -10.0)
        self.assertEqual((t.week, t.tow), (1999, 604790.0))

    def test_arithmetic(self):
        t = GNSSTime(2000, 100.0)
        self.assertEqual((t + 50).tow, 150.0)
        self.assertEqual(GNSSTime(2001, 0.0) - GNSSTime(2000, 604700.0), 100.0)
        self.assertLess(GNSSTime(2000, 1.0), GNSSTime(2000, 2.0))

    def test_datetime_round_trip(self):
        dt = datetime(2025, 1, 9, 12, tzinfo=timezone.utc)
        t = GNSSTime.from_datetime(dt)
        self.assertEqual(t.to_datetime(), dt)
        self.assertEqual(to_utc(t), dt)
        self.assertEqual(GNSSTime(0, 0.0).to_datetime(), GPS_EPOCH)


@pytest.mark.parametrize("tow, tref, expected", [
    (100000.0, 50000.0, 50000.0),
    (10000.0, 590000.0, 24800.0),
    (590000.0, 10000.0, -24800.0),
    (302400.0, 0.0, 302400.0),
])
def test_timediff_week_rollover(tow, tref, expected):
    assert timediff(tow, tref) == pytest.approx(expected)
