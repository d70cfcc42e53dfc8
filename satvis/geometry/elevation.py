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

"""
Elevation and azimuth of GNSS satellites seen from a receiver.

The line-of-sight vector from the receiver to the satellite is rotated from
ECEF into the local East-North-Up (ENU) frame at the receiver, and the
angles are read off its components:

- elevation = arctan2(up, horizontal distance), in [-90, 90] degrees
- azimuth = arctan2(east, north), clockwise from north in [0, 360) degrees

Negative elevations mean the satellite is below the local horizontal plane
of the receiver. For an airborne receiver that does not imply Earth
occlusion: the geometric horizon dips below the horizontal with altitude.
"""

import numpy as np

from ..attitude.wrap import wrap_to_2pi
from ..coordinate.transforms import compute_rotation_matrix_enu, ecef2llh


def compute_azimuth_elevation(sat_pos: np.ndarray, rcv_pos: np.ndarray,
                              reference_llh: np.ndarray = None) -> tuple:
    """
    Compute azimuth and elevation of a satellite as observed from a receiver.

    Parameters
    ----------
    sat_pos : np.ndarray
        Satellite position in ECEF [m], shape (3,)
    rcv_pos : np.ndarray
        Receiver position in ECEF [m], shape (3,)
    reference_llh : np.ndarray, optional
        Receiver geodetic coordinates [lat, lon, height] (rad, rad, m).
        Computed from ``rcv_pos`` when omitted.

    Returns
    -------
    tuple[float, float]
        (azimuth, elevation) in degrees

    Examples
    --------
    >>> sat_pos = np.array([0.0, 0.0, 26560000.0])
    >>> rcv_pos = np.array([0.0, 0.0, 6366752.0])     # near the north pole
    >>> az, el = compute_azimuth_elevation(sat_pos, rcv_pos)
    >>> round(el, 6)
    90.0
    """
    rcv_pos = np.asarray(rcv_pos, dtype=float)
    if reference_llh is None:
        reference_llh = ecef2llh(rcv_pos)

    los_vector = np.asarray(sat_pos, dtype=float) - rcv_pos
    enu = compute_rotation_matrix_enu(reference_llh) @ los_vector

    horizontal = np.hypot(enu[0], enu[1])
    elevation = np.arctan2(enu[2], horizontal)
    azimuth = wrap_to_2pi(float(np.arctan2(enu[0], enu[1])))

    return float(np.degrees(azimuth)), float(np.degrees(elevation))


def compute_elevation_angle(sat_pos: np.ndarray, rcv_pos: np.ndarray,
                            reference_llh: np.ndarray = None) -> float:
    """Elevation angle in degrees, see :func:`compute_azimuth_elevation`"""
    return compute_azimuth_elevation(sat_pos, rcv_pos, reference_llh)[1]
