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

"""Satellite position computation from broadcast orbital elements

Positions are geometric ECEF coordinates of the antenna phase center as
described by the broadcast Keplerian elements. No satellite clock bias,
relativistic or ionospheric correction is applied.
"""

import numpy as np

from ..attitude.wrap import wrap_to_2pi
from ..core.constants import GME, OMGE
from ..core.data_structures import ECEFPosition, OrbitalElements, ValidityWindow
from ..core.errors import DataError, RangeError, ValidationError
from ..core.time import gps_seconds_to_week_tow, timediff, to_utc, utc_to_gps_seconds
from .kepler import solve_kepler

__all__ = [
    "compute_satellite_position",
    "propagate",
    "propagate_satellite",
    "time_from_ephemeris",
]


def _orbit_position(elements: OrbitalElements, tk: float) -> np.ndarray:
    """ECEF position ``tk`` seconds after the reference epoch toe"""
    e = elements.e
    A = elements.root_a ** 2

    # Corrected mean motion and mean anomaly
    n0 = np.sqrt(GME / A**3)
    n = n0 + elements.delta_n
    Mk = wrap_to_2pi(elements.m0 + n * tk)

    Ek = solve_kepler(Mk, e)

    # True anomaly and argument of latitude
    vk = np.arctan2(np.sqrt(1.0 - e * e) * np.sin(Ek), np.cos(Ek) - e)
    phik = vk + elements.omega

    # Second harmonic perturbations
    sin2p = np.sin(2.0 * phik)
    cos2p = np.cos(2.0 * phik)
    duk = elements.cus * sin2p + elements.cuc * cos2p
    drk = elements.crs * sin2p + elements.crc * cos2p
    dik = elements.cis * sin2p + elements.cic * cos2p

    uk = phik + duk
    rk = A * (1.0 - e * np.cos(Ek)) + drk
    ik = elements.i0 + dik + elements.idot * tk

    # Position in the orbital plane
    xk_p = rk * np.cos(uk)
    yk_p = rk * np.sin(uk)

    # Corrected longitude of ascending node, Earth rotation since week start
    Omegak = (elements.omega0 + (elements.omegadot - OMGE) * tk
              - OMGE * elements.toe)

    sinO = np.sin(Omegak)
    cosO = np.cos(Omegak)
    cosi = np.cos(ik)

    return np.array([
        xk_p * cosO - yk_p * cosi * sinO,
        xk_p * sinO + yk_p * cosi * cosO,
        yk_p * np.sin(ik),
    ])


def time_from_ephemeris(elements: OrbitalElements, t) -> float:
    """
    Seconds from the ephemeris reference time toe to ``t``.

    ``t`` is mapped to GPS seconds-of-week without leap seconds and the
    difference is wrapped into +/- half a week around toe.
    """
    _, t_sow = gps_seconds_to_week_tow(utc_to_gps_seconds(t))
    return timediff(t_sow, elements.toe)


def compute_satellite_position(elements: OrbitalElements, t) -> np.ndarray:
    """
    Compute satellite ECEF position without a validity check.

    Parameters
    ----------
    elements : OrbitalElements
        Broadcast orbital elements
    t : datetime
        Evaluation instant (UTC; naive values are taken as UTC)

    Returns
    -------
    np.ndarray
        ECEF position [x, y, z] in meters

    Raises
    ------
    NumericalError
        If Kepler's equation does not converge
    """
    if elements is None:
        raise DataError("No orbital elements supplied")
    return _orbit_position(elements, time_from_ephemeris(elements, t))


def propagate(elements: OrbitalElements, validity: ValidityWindow, t) -> ECEFPosition:
    """
    Propagate broadcast elements to ``t`` inside their validity window.

    Parameters
    ----------
    elements : OrbitalElements
        Broadcast orbital elements
    validity : ValidityWindow
        Span in which the elements may be used; both bounds are valid
    t : datetime
        Evaluation instant (UTC)

    Returns
    -------
    ECEFPosition
        Geometric satellite position, uncorrected for clock error

    Raises
    ------
    ValidationError
        If ``t`` or ``validity`` is missing
    DataError
        If ``elements`` is missing
    RangeError
        If ``t`` lies outside ``validity``; the elements are never extrapolated
    NumericalError
        If Kepler's equation does not converge

    Examples
    --------
    >>> pos = propagate(elements, window, datetime(2025, 1, 9, 12, 0, tzinfo=timezone.utc))
    >>> 2.0e7 < pos.norm() < 4.5e7
    True
    """
    if elements is None:
        raise DataError("No orbital elements supplied")
    if validity is None:
        raise ValidationError("Missing validity window", parameter='validity')
    t = to_utc(t)
    if not validity.contains(t):
        raise RangeError(
            f"Time {t.isoformat()} outside ephemeris validity "
            f"[{validity.valid_from.isoformat()}, {validity.valid_to.isoformat()}]",
            timestamp=t, valid_from=validity.valid_from, valid_to=validity.valid_to)

    return ECEFPosition.from_array(compute_satellite_position(elements, t))


def propagate_satellite(store, satellite_id: str, t) -> ECEFPosition:
    """
    Look up a satellite in an ephemeris store and propagate it to ``t``.

    Raises
    ------
    NotFoundError
        If the store has no entry for ``satellite_id``
    DataError
        If the entry lacks orbital parameters or a validity window
    RangeError
        If ``t`` lies outside the selected entry's validity window
    """
    elements, validity = store.resolve(satellite_id, t)
    try:
        return propagate(elements, validity, t)
    except RangeError as exc:
        exc.satellite_id = satellite_id
        raise
