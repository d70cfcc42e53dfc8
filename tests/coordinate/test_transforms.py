import unittest
import numpy as np
import pytest
from satvis.coordinate.transforms import (
    ecef2llh, llh2ecef, ecef2enu, ecef2ned, ned2ecef,
    compute_rotation_matrix_enu, compute_rotation_matrix_ned
)
from satvis.core.constants import RE_WGS84, FE_WGS84
from satvis.core.errors import NumericalError


class TestCoordinateTransforms(unittest.TestCase):

    def setUp(self):
        # Test points
        self.beijing_llh = np.array([np.radians(39.9093), np.radians(116.3974), 10000.0])
        self.newyork_llh = np.array([np.radians(40.7128), np.radians(-74.0060), 10.0])
        self.equator_llh = np.array([0.0, 0.0, 0.0])  # Equator, prime meridian
        self.pole_llh = np.array([np.radians(90.0), 0.0, 0.0])  # North pole

    def test_llh2ecef_ecef2llh_round_trip(self):
        test_points = [
            self.beijing_llh,
            self.newyork_llh,
            self.equator_llh,
            self.pole_llh,
            np.array([np.radians(-89.9), np.radians(10.0), 12000.0]),  # near south pole
            np.array([np.radians(-35.0), np.radians(150.0), 100.0]),  # Southern hemisphere
            np.array([np.radians(10.0), np.radians(-170.0), 2.0e7]),  # orbital altitude
        ]

        for llh in test_points:
            xyz = llh2ecef(llh)
            llh_recovered = ecef2llh(xyz)

            np.testing.assert_allclose(llh_recovered[:2], llh[:2], rtol=0, atol=1e-9,
                                       err_msg=f"Round-trip failed for lat/lon {llh}")
            np.testing.assert_allclose(llh_recovered[2], llh[2], rtol=0, atol=1e-6,
                                       err_msg=f"Round-trip failed for height {llh}")

    def test_llh2ecef_known_values(self):
        xyz = llh2ecef(self.equator_llh)
        np.testing.assert_allclose(xyz, [RE_WGS84, 0.0, 0.0], atol=1e-3)

        # North pole lies on the Z-axis at the polar radius
        b = RE_WGS84 * np.sqrt(1 - FE_WGS84 * (2 - FE_WGS84))
        np.testing.assert_allclose(llh2ecef(self.pole_llh), [0.0, 0.0, b], atol=1e-3)

    def test_ecef2llh_at_pole(self):
        b = RE_WGS84 * (1 - FE_WGS84)
        llh = ecef2llh(np.array([0.0, 0.0, b + 1000.0]))
        self.assertAlmostEqual(llh[0], np.pi / 2, places=10)
        self.assertAlmostEqual(llh[2], 1000.0, places=6)

    def test_ecef2llh_non_convergence(self):
        with self.assertRaises(NumericalError):
            ecef2llh(llh2ecef(self.beijing_llh), max_iter=1)

    def test_rotation_matrices_orthonormal(self):
        for R in (compute_rotation_matrix_enu(self.beijing_llh),
                  compute_rotation_matrix_ned(self.beijing_llh)):
            np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
            self.assertAlmostEqual(np.linalg.det(R), 1.0, places=12)

    def test_rotation_matrices_relationship(self):
        """NED rows are ENU rows reordered: n = n, e = e, d = -u"""
        R_enu = compute_rotation_matrix_enu(self.newyork_llh)
        R_ned = compute_rotation_matrix_ned(self.newyork_llh)
        np.testing.assert_allclose(R_ned[0], R_enu[1], atol=1e-12)
        np.testing.assert_allclose(R_ned[1], R_enu[0], atol=1e-12)
        np.testing.assert_allclose(R_ned[2], -R_enu[2], atol=1e-12)

    def test_up_direction(self):
        """A point straight above the origin is pure up / pure down"""
        above = self.beijing_llh + np.array([0.0, 0.0, 500.0])
        enu = ecef2enu(llh2ecef(above), self.beijing_llh)
        ned = ecef2ned(llh2ecef(above), self.beijing_llh)
        np.testing.assert_allclose(enu, [0.0, 0.0, 500.0], atol=1e-6)
        np.testing.assert_allclose(ned, [0.0, 0.0, -500.0], atol=1e-6)

    def test_ecef2ned_ned2ecef_round_trip(self):
        ned = np.array([1234.5, -678.9, 42.0])
        xyz = ned2ecef(ned, self.newyork_llh)
        np.testing.assert_allclose(ecef2ned(xyz, self.newyork_llh), ned, atol=1e-6)


@pytest.mark.parametrize("lon_deg", [-180.0, -90.0, 0.0, 90.0, 179.999])
def test_longitude_range(lon_deg):
    llh = np.array([np.radians(20.0), np.radians(lon_deg), 0.0])
    lon = ecef2llh(llh2ecef(llh))[1]
    assert np.isclose(np.cos(lon), np.cos(llh[1]), atol=1e-12)
    assert np.isclose(np.sin(lon), np.sin(llh[1]), atol=1e-12)
