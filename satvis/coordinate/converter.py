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
Validated conversions between geodetic, ECEF and aircraft body frames.

These functions are the typed entry points over the array kernels in
:mod:`satvis.coordinate.transforms`. Positions and attitudes may be given as
the record dataclasses or as plain mappings (for example decoded JSON);
any absent, ``None`` or non-finite field raises
:class:`~satvis.core.errors.ValidationError`.

Frames
------
- Geodetic: longitude/latitude in degrees, altitude in meters (WGS84)
- ECEF: x/y/z in meters
- NED: local north-east-down at the aircraft position
- Body: x nose, y right wing, z down; reached from NED by the intrinsic
  yaw-pitch-roll sequence

Examples
--------
>>> aircraft = GeodeticPosition(longitude=116.3974, latitude=39.9093, altitude=10000.0)
>>> attitude = AttitudeEuler(roll=0.0, pitch=5.0, yaw=90.0)
>>> antenna = body_to_ecef(aircraft, attitude, BodyOffset(0.0, 0.0, -5.0))
>>> offset = ecef_to_body(aircraft, attitude, antenna)   # BodyOffset(0, 0, -5)
"""

from ..attitude.euler import euler2dcm
from ..core.constants import R2D
from ..core.data_structures import AttitudeEuler, BodyOffset, ECEFPosition, GeodeticPosition
from .transforms import compute_rotation_matrix_ned, ecef2llh, llh2ecef


def lla_to_ecef(position) -> ECEFPosition:
    """
    Convert a WGS84 geodetic position to ECEF.

    Parameters
    ----------
    position : GeodeticPosition or mapping
        Longitude/latitude in degrees, altitude in meters

    Returns
    -------
    ECEFPosition
    """
    position = GeodeticPosition.from_mapping(position, 'position')
    return ECEFPosition.from_array(llh2ecef(position.as_llh()))


def ecef_to_lla(position) -> GeodeticPosition:
    """
    Convert an ECEF position to WGS84 geodetic coordinates.

    Raises
    ------
    ValidationError
        If the position is missing or malformed
    NumericalError
        If the latitude iteration does not converge
    """
    position = ECEFPosition.from_mapping(position, 'position')
    lat, lon, h = ecef2llh(position.as_array())
    return GeodeticPosition(longitude=float(lon * R2D), latitude=float(lat * R2D),
                            altitude=float(h))


def body_frame(aircraft_position, attitude) -> tuple:
    """
    Origin and orientation of the aircraft body frame.

    Returns
    -------
    origin : np.ndarray, shape (3,)
        Aircraft position in ECEF (m)
    C_e_b : np.ndarray, shape (3, 3)
        ECEF-to-body rotation, v_body = C_e_b @ v_ecef
    """
    aircraft_position = GeodeticPosition.from_mapping(aircraft_position, 'aircraft_position')
    attitude = AttitudeEuler.from_mapping(attitude, 'attitude')

    llh = aircraft_position.as_llh()
    C_e_n = compute_rotation_matrix_ned(llh)
    C_n_b = euler2dcm(attitude.as_radians())

    return llh2ecef(llh), C_n_b @ C_e_n


def body_to_ecef(aircraft_position, attitude, body_offset) -> ECEFPosition:
    """
    Place a point given in the aircraft body frame into ECEF.

    Parameters
    ----------
    aircraft_position : GeodeticPosition or mapping
        Aircraft reference point
    attitude : AttitudeEuler or mapping
        Roll/pitch/yaw in degrees
    body_offset : BodyOffset or mapping
        Point in the body frame (m), nose/right/down

    Returns
    -------
    ECEFPosition
    """
    body_offset = BodyOffset.from_mapping(body_offset, 'body_offset')
    origin, C_e_b = body_frame(aircraft_position, attitude)
    return ECEFPosition.from_array(origin + C_e_b.T @ body_offset.as_array())


def ecef_to_body(aircraft_position, attitude, ecef_position) -> BodyOffset:
    """
    Express an ECEF point in the aircraft body frame.

    Exact inverse of :func:`body_to_ecef` for the same aircraft position and
    attitude.
    """
    ecef_position = ECEFPosition.from_mapping(ecef_position, 'ecef_position')
    origin, C_e_b = body_frame(aircraft_position, attitude)
    return BodyOffset.from_array(C_e_b @ (ecef_position.as_array() - origin))

