#!/usr/bin/env python3
"""Tests for the ephemeris store"""

import unittest
from datetime import datetime, timedelta, timezone

from satvis.core.data_structures import OrbitalElements, SatelliteEphemeris, ValidityWindow
from satvis.core.errors import DataError, NotFoundError, ValidationError
from satvis.satellite.ephemeris import EphemerisStore


def make_elements(toe, m0=0.3):
    return OrbitalElements(
        toe=toe, m0=m0, e=0.0123, root_a=5153.79, i0=0.9599, idot=1.0e-10,
        omega0=1.0, omegadot=-8.0e-9, omega=0.5, delta_n=4.5e-9,
        cuc=0.0, cus=0.0, crc=0.0, crs=0.0, cic=0.0, cis=0.0)


class TestEphemerisStore(unittest.TestCase):

    def setUp(self):
        self.t0 = datetime(2025, 1, 9, 12, 0, 0, tzinfo=timezone.utc)
        self.window = ValidityWindow.around(self.t0, 7200.0)
        self.elements = make_elements(toe=388800.0)
        self.store = EphemerisStore()
        self.store.add('G05', self.elements, self.window)

    def test_membership(self):
        self.assertIn('G05', self.store)
        self.assertNotIn('G06', self.store)
        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.store.satellite_ids, ['G05'])

    def test_duplicates_are_ignored(self):
        self.store.add('G05', self.elements, self.window)
        self.assertEqual(len(self.store.entries('G05')), 1)

    def test_resolve(self):
        elements, validity = self.store.resolve('G05', self.t0)
        self.assertEqual(elements, self.elements)
        self.assertEqual(validity, self.window)

    def test_unknown_satellite(self):
        with self.assertRaises(NotFoundError):
            self.store.resolve('C01', self.t0)
        with self.assertRaises(NotFoundError):
            self.store.entries('C01')

    def test_incomplete_entry_raises_data_error(self):
        self.store.add('C02', None, self.window, missing=('e', 'm0'))
        with self.assertRaises(DataError) as ctx:
            self.store.resolve('C02', self.t0)
        self.assertEqual(ctx.exception.missing, ['e', 'm0'])

    def test_complete_entry_preferred(self):
        self.store.add('G05', None, ValidityWindow.around(self.t0, 60.0), missing=('e',))
        elements, _ = self.store.resolve('G05', self.t0)
        self.assertEqual(elements, self.elements)

    def test_nearest_window_when_none_contains(self):
        later = make_elements(toe=396000.0, m0=1.0)
        self.store.add('G05', later, ValidityWindow.around(self.t0 + timedelta(hours=4), 7200.0))
        elements, _ = self.store.resolve('G05', self.t0 + timedelta(hours=6, minutes=30))
        self.assertEqual(elements, later)

    def test_empty_satellite_id(self):
        with self.assertRaises(ValidationError):
            self.store.add_entry(SatelliteEphemeris('', self.elements, self.window))

    def test_from_records(self):
        record = {
            'id': 'B01',
            'orbitalParameters': self.elements.to_dict(),
            'timeParameters': {'validFrom': '2025-01-09T10:00:00', 'validTo': '2025-01-09T14:00:00'},
        }
        store = EphemerisStore.from_records([record])
        elements, validity = store.resolve('B01', self.t0)
        self.assertEqual(elements, self.elements)
        self.assertTrue(validity.contains(self.t0))


if __name__ == '__main__':
    unittest.main()
