#!/usr/bin/env python3
"""Tests for the validated geodetic / ECEF / body-frame conversions"""

import unittest

import numpy as np
import pytest

from satvis.coordinate.converter import body_to_ecef, ecef_to_body, ecef_to_lla, lla_to_ecef
from satvis.core.constants import RE_WGS84
from satvis.core.data_structures import AttitudeEuler, BodyOffset, GeodeticPosition
from satvis.core.errors import ValidationError


class TestGeodeticConversion(unittest.TestCase):

    def test_round_trip(self):
        for pos in [GeodeticPosition(116.3974, 39.9093, 10000.0),
                    GeodeticPosition(-74.0060, 40.7128, 10.0),
                    GeodeticPosition(0.0, -89.999, 3000.0),
                    GeodeticPosition(179.5, 0.0, -50.0)]:
            back = ecef_to_lla(lla_to_ecef(pos))
            self.assertAlmostEqual(back.longitude, pos.longitude, places=7)
            self.assertAlmostEqual(back.latitude, pos.latitude, places=7)
            self.assertAlmostEqual(back.altitude, pos.altitude, delta=1e-6)

    def test_equator(self):
        ecef = lla_to_ecef({'longitude': 90.0, 'latitude': 0.0, 'altitude': 0.0})
        np.testing.assert_allclose(ecef.as_array(), [0.0, RE_WGS84, 0.0], atol=1e-6)

    def test_missing_parameters(self):
        with self.assertRaises(ValidationError):
            lla_to_ecef(None)
        with self.assertRaises(ValidationError):
            lla_to_ecef({'longitude': 0.0, 'latitude': 0.0})
        with self.assertRaises(ValidationError):
            ecef_to_lla({'x': 1.0, 'y': None, 'z': 0.0})


class TestBodyFrame(unittest.TestCase):

    def setUp(self):
        self.aircraft = GeodeticPosition(116.3974, 39.9093, 10000.0)
        self.origin = lla_to_ecef(self.aircraft).as_array()

    def test_level_flight_antenna_above(self):
        """With zero attitude, -z in the body frame is local up"""
        antenna = body_to_ecef(self.aircraft, AttitudeEuler(0.0, 0.0, 0.0), BodyOffset(0.0, 0.0, -5.0))
        expected = lla_to_ecef(GeodeticPosition(116.3974, 39.9093, 10005.0))
        np.testing.assert_allclose(antenna.as_array(), expected.as_array(), atol=1e-6)

    def test_yaw_east(self):
        """Heading 90 deg at lat 0 / lon 0 points the nose along ECEF +y"""
        aircraft = GeodeticPosition(0.0, 0.0, 0.0)
        nose = body_to_ecef(aircraft, AttitudeEuler(0.0, 0.0, 90.0), BodyOffset(1.0, 0.0, 0.0))
        np.testing.assert_allclose(nose.as_array() - [RE_WGS84, 0.0, 0.0], [0.0, 1.0, 0.0],
                                   atol=1e-9)

    def test_offset_length_preserved(self):
        attitude = AttitudeEuler(10.0, -5.0, 237.0)
        offset = BodyOffset(3.0, -1.5, -2.0)
        point = body_to_ecef(self.aircraft, attitude, offset)
        self.assertAlmostEqual(np.linalg.norm(point.as_array() - self.origin),
                               np.linalg.norm(offset.as_array()), places=9)

    def test_round_trip(self):
        for attitude in [AttitudeEuler(0.0, 0.0, 0.0),
                         AttitudeEuler(30.0, -10.0, 45.0),
                         AttitudeEuler(-179.0, 89.0, 359.0)]:
            offset = BodyOffset(12.5, -3.0, -5.0)
            ecef = body_to_ecef(self.aircraft, attitude, offset)
            back = ecef_to_body(self.aircraft, attitude, ecef)
            np.testing.assert_allclose(back.as_array(), offset.as_array(), atol=1e-6)

    def test_mappings_accepted(self):
        ecef = body_to_ecef({'longitude': 116.3974, 'latitude': 39.9093, 'altitude': 10000.0},
                            {'roll': 0.0, 'pitch': 0.0, 'yaw': 0.0},
                            {'x': 0.0, 'y': 0.0, 'z': 0.0})
        np.testing.assert_allclose(ecef.as_array(), self.origin, atol=1e-9)


@pytest.mark.parametrize("args", [
    (None, AttitudeEuler(0, 0, 0), BodyOffset(0, 0, 0)),
    (GeodeticPosition(0, 0, 0), None, BodyOffset(0, 0, 0)),
    (GeodeticPosition(0, 0, 0), AttitudeEuler(0, 0, 0), None),
    (GeodeticPosition(0, 0, 0), {'roll': 0.0, 'pitch': 0.0}, BodyOffset(0, 0, 0)),
])
def test_body_to_ecef_missing_parameter(args):
    with pytest.raises(ValidationError):
        body_to_ecef(*args)


def test_ecef_to_body_missing_parameter():
    with pytest.raises(ValidationError):
        ecef_to_body(GeodeticPosition(0, 0, 0), AttitudeEuler(0, 0, 0), None)
    with pytest.raises(ValidationError):
        ecef_to_body(GeodeticPosition(0, 0, 0), AttitudeEuler(0, 0, 0), {'x': 1.0, 'y': 2.0})
