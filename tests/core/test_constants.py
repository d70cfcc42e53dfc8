#!/usr/bin/env python3
"""Test suite for physical constants and satellite system helpers"""

import unittest

from satvis.core.constants import (
    CLIGHT, FREQ_B3, FREQ_L1, RE_WGS84, FE_WGS84, E2_WGS84, OMGE, GME,
    SYS_BDS, SYS_GAL, SYS_GPS, SYS_NONE, SYS_QZS,
    MAXDTOE_BDS, MAXDTOE_DEFAULT, MAXDTOE_GAL, MAXDTOE_GPS,
    char2sys, max_dtoe,
)


class TestPhysicalConstants(unittest.TestCase):
    """Test physical constants values"""

    def test_speed_of_light(self):
        self.assertEqual(CLIGHT, 299792458.0)

    def test_frequencies(self):
        self.assertEqual(FREQ_L1, 1575.42e6)
        self.assertEqual(FREQ_B3, 1268.52e6)

    def test_earth_parameters(self):
        self.assertEqual(RE_WGS84, 6378137.0)
        self.assertAlmostEqual(1.0 / FE_WGS84, 298.257223563, places=9)
        self.assertAlmostEqual(E2_WGS84, 0.00669437999014, places=12)
        self.assertEqual(OMGE, 7.2921151467e-5)
        self.assertEqual(GME, 3.986004418e14)


class TestSystemHelpers(unittest.TestCase):
    """Satellite id to system mapping"""

    def test_rinex_system_chars(self):
        for c, sys in [('G', SYS_GPS), ('E', SYS_GAL), ('C', SYS_BDS), ('J', SYS_QZS)]:
            self.assertEqual(char2sys(c), sys)

    def test_beidou_alias(self):
        self.assertEqual(char2sys('B'), SYS_BDS)
        self.assertEqual(char2sys('c'), SYS_BDS)

    def test_unknown_ids(self):
        self.assertEqual(char2sys('X'), SYS_NONE)

    def test_max_dtoe(self):
        self.assertEqual(max_dtoe(SYS_GPS), MAXDTOE_GPS)
        self.assertEqual(max_dtoe(SYS_QZS), MAXDTOE_GPS)
        self.assertEqual(max_dtoe(SYS_GAL), MAXDTOE_GAL)
        self.assertEqual(max_dtoe(SYS_BDS), MAXDTOE_BDS)
        self.assertEqual(max_dtoe(SYS_NONE), MAXDTOE_DEFAULT)


if __name__ == '__main__':
    unittest.main()
