# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Broadcast ephemeris loading from RINEX navigation files.

Text decoding is done by ``cssrlib.rinex``; this module converts the decoded
Keplerian ephemerides into :class:`~satvis.core.data_structures.OrbitalElements`
with a :class:`~satvis.core.data_structures.ValidityWindow` each and collects
them in an :class:`~satvis.satellite.ephemeris.EphemerisStore`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import numpy as np
from cssrlib.gnss import Eph, Nav, gtime_t, sat2id, time2gpst
from cssrlib.rinex import rnxdec

from ..core.constants import (
    BDT_GPST_OFFSET, OMGE, SYS_BDS, SYS_GPS, WEEK_SECONDS, char2sys, max_dtoe,
)
from ..core.data_structures import OrbitalElements, ValidityWindow
from ..core.errors import DataError
from ..core.time import gps_seconds_to_utc
from ..satellite.ephemeris import EphemerisStore

__all__ = [
    "decode_nav",
    "eph_satellite_id",
    "eph_to_elements",
    "eph_validity_window",
    "read_nav",
    "store_from_nav",
]

logger = logging.getLogger(__name__)

DEFAULT_SYSTEMS = (SYS_GPS, SYS_BDS)


def _toe_gps_seconds(eph: Eph) -> float:
    """Reference epoch of an ephemeris in GPS seconds"""
    if isinstance(eph.toe, gtime_t):
        week, tow = time2gpst(eph.toe)
        return week * WEEK_SECONDS + tow
    return float(eph.toe)


def eph_satellite_id(eph: Eph) -> str:
    """Satellite identifier such as 'G05' or 'C23'"""
    return sat2id(eph.sat)


def eph_to_elements(eph: Eph) -> OrbitalElements:
    """
    Convert a cssrlib Keplerian ephemeris to orbital elements.

    ``toe`` is taken as seconds of the GPS week. BeiDou reference epochs are
    already shifted to GPS time by the decoder, but the broadcast ``OMG0`` is
    referenced to the start of the BDT week; it is advanced by the Earth
    rotation between the BDT and GPST seconds of week so that
    ``omega0 - OMGE * toe`` gives the same node longitude.

    Raises
    ------
    DataError
        If a parameter is missing or not finite
    """
    satellite_id = eph_satellite_id(eph)
    if eph.A is None or not eph.A > 0:
        raise DataError(f"Satellite {satellite_id}: invalid semi-major axis {eph.A}",
                        satellite_id=satellite_id, missing=['root_a'])

    toe_gps = _toe_gps_seconds(eph)
    toe = toe_gps % WEEK_SECONDS
    omega0 = eph.OMG0
    if omega0 is not None and char2sys(satellite_id[0]) == SYS_BDS:
        toe_bdt = (toe_gps - BDT_GPST_OFFSET) % WEEK_SECONDS
        omega0 = omega0 + OMGE * (toe - toe_bdt)

    params = {
        'toe': toe,
        'm0': eph.M0,
        'e': eph.e,
        'root_a': np.sqrt(eph.A),
        'i0': eph.i0,
        'idot': eph.idot,
        'omega0': omega0,
        'omegadot': eph.OMGd,
        'omega': eph.omg,
        'delta_n': eph.deln,
        'cuc': eph.cuc,
        'cus': eph.cus,
        'crc': eph.crc,
        'crs': eph.crs,
        'cic': eph.cic,
        'cis': eph.cis,
    }
    return OrbitalElements.from_mapping(params, satellite_id)


def eph_validity_window(eph: Eph) -> ValidityWindow:
    """
    Validity window of a broadcast ephemeris.

    The window is centred on toe with half the broadcast fit interval on each
    side. Without a fit interval the system default is used: 2 h for
    GPS/QZSS, 3 h for Galileo, 6 h for BeiDou and 1 h otherwise.
    """
    center = gps_seconds_to_utc(_toe_gps_seconds(eph))
    fit_hours = getattr(eph, 'fit', 0.0) or 0.0
    if fit_hours > 0:
        half_width = fit_hours * 3600.0 / 2.0
    else:
        half_width = max_dtoe(char2sys(eph_satellite_id(eph)[0]))
    return ValidityWindow.around(center, half_width)


def decode_nav(filename: str | Path) -> Nav:
    """Decode a RINEX navigation file into a cssrlib Nav object."""
    filename = Path(filename)
    if not filename.exists():
        raise FileNotFoundError(f"Navigation file not found: {filename}")

    nav = Nav()
    decoder = rnxdec()
    decoder.decode_nav(str(filename), nav, append=False)
    return nav


def store_from_nav(nav: Nav, systems: Iterable[int] = DEFAULT_SYSTEMS) -> EphemerisStore:
    """
    Collect the Keplerian ephemerides of ``nav`` into a store.

    Ephemerides whose parameters are unusable are kept as incomplete entries,
    so that propagating them raises ``DataError`` naming the missing
    parameters.
    """
    systems = set(systems)
    store = EphemerisStore()
    skipped = 0

    for eph in nav.eph:
        satellite_id = eph_satellite_id(eph)
        if char2sys(satellite_id[0]) not in systems:
            skipped += 1
            continue

        validity = eph_validity_window(eph)
        try:
            elements = eph_to_elements(eph)
        except DataError as exc:
            logger.warning(f"{satellite_id}: unusable ephemeris ({exc})")
            store.add(satellite_id, None, validity, missing=exc.missing)
            continue
        store.add(satellite_id, elements, validity)

    logger.debug(f"Skipped {skipped} ephemerides of other systems")
    return store


def read_nav(filename: str | Path, systems: Iterable[int] = DEFAULT_SYSTEMS) -> EphemerisStore:
    """
    Load GPS and BeiDou broadcast ephemerides from a RINEX navigation file.

    Parameters
    ----------
    filename : str or Path
        RINEX 3/4 navigation file
    systems : iterable of int
        Satellite systems to keep (``SYS_*`` constants)

    Returns
    -------
    EphemerisStore
    """
    store = store_from_nav(decode_nav(filename), systems)
    logger.info(f"Loaded {sum(len(store.entries(s)) for s in store.satellite_ids)} "
                f"ephemerides for {len(store)} satellites from {filename}")
    return store
