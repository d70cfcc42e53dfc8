"""Shared fixtures: a GPS-like and a BeiDou-like broadcast ephemeris"""

from datetime import datetime, timezone

import pytest

from satvis.core.data_structures import OrbitalElements, ValidityWindow
from satvis.core.time import gps_seconds_to_week_tow, utc_to_gps_seconds
from satvis.satellite.ephemeris import EphemerisStore

EPOCH = datetime(2025, 1, 9, 12, 0, 0, tzinfo=timezone.utc)


def make_elements(toe, root_a=5153.79, e=0.0123, m0=0.3, omega0=1.0, **overrides):
    """Keplerian elements with zero harmonic corrections unless overridden"""
    params = dict(
        toe=toe, m0=m0, e=e, root_a=root_a, i0=0.9599, idot=1.0e-10,
        omega0=omega0, omegadot=-8.0e-9, omega=0.5, delta_n=4.5e-9,
        cuc=0.0, cus=0.0, crc=0.0, crs=0.0, cic=0.0, cis=0.0,
    )
    params.update(overrides)
    return OrbitalElements(**params)


@pytest.fixture
def element_factory():
    return make_elements


@pytest.fixture
def epoch():
    return EPOCH


@pytest.fixture
def toe():
    return gps_seconds_to_week_tow(utc_to_gps_seconds(EPOCH))[1]


@pytest.fixture
def gps_elements(toe):
    return make_elements(toe)


@pytest.fixture
def bds_elements(toe):
    # MEO-like BeiDou orbit, half a revolution ahead of the GPS one
    return make_elements(toe, root_a=5282.6, e=0.0008, m0=0.3 + 3.14159, omega0=2.5)


@pytest.fixture
def window():
    return ValidityWindow.around(EPOCH, 7200.0)


@pytest.fixture
def store(gps_elements, bds_elements, window):
    s = EphemerisStore()
    s.add('G05', gps_elements, window)
    s.add('C11', bds_elements, window)
    return s
