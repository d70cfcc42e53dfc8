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

"""Coordinate transformation utilities

Array kernels working in radians and meters. Geodetic coordinates use the
layout [lat, lon, height] on the WGS84 ellipsoid.
"""


import numpy as np

from ..core.constants import E2_WGS84, LAT_MAX_ITER, LAT_TOL, RE_WGS84
from ..core.errors import NumericalError


def ecef2llh(xyz: np.ndarray, tol: float = LAT_TOL, max_iter: int = LAT_MAX_ITER) -> np.ndarray:
    """Convert ECEF coordinates to geodetic coordinates

    Converts Earth-Centered Earth-Fixed (ECEF) Cartesian coordinates
    to geodetic coordinates using a fixed-point iteration on latitude.

    Parameters
    ----------
    xyz : np.ndarray
        ECEF coordinates [x, y, z] in meters
    tol : float, optional
        Latitude convergence tolerance in radians (default 1e-11)
    max_iter : int, optional
        Iteration cap (default 10)

    Returns
    -------
    np.ndarray
        Geodetic coordinates [lat, lon, height] where:
        - lat: latitude in radians (-pi/2 to pi/2)
        - lon: longitude in radians (-pi to pi)
        - height: height above WGS84 ellipsoid in meters

    Raises
    ------
    NumericalError
        If successive latitude estimates still differ by ``tol`` or more
        after ``max_iter`` iterations

    Notes
    -----
    The height is evaluated as p*cos(lat) + z*sin(lat) - a*sqrt(1 - e^2*sin^2(lat)),
    which stays well conditioned at the poles where p/cos(lat) does not.
    Near-Earth and orbital points converge in 3-5 iterations.

    Examples
    --------
    >>> import numpy as np
    >>> ecef = np.array([-2178193.0, 4385320.0, 4077003.0])
    >>> llh = ecef2llh(ecef)
    >>> lat_deg, lon_deg = np.degrees(llh[0]), np.degrees(llh[1])
    """
    x, y, z = float(xyz[0]), float(xyz[1]), float(xyz[2])

    lon = np.arctan2(y, x)
    p = np.hypot(x, y)
    lat = np.arctan2(z, p * (1.0 - E2_WGS84))

    for _ in range(max_iter):
        sin_lat = np.sin(lat)
        N = RE_WGS84 / np.sqrt(1.0 - E2_WGS84 * sin_lat**2)
        lat_next = np.arctan2(z + E2_WGS84 * N * sin_lat, p)
        converged = abs(lat_next - lat) < tol
        lat = lat_next
        if converged:
            break
    else:
        raise NumericalError(
            f"Geodetic latitude did not converge within {max_iter} iterations",
            iterations=max_iter)

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    h = p * cos_lat + z * sin_lat - RE_WGS84 * np.sqrt(1.0 - E2_WGS84 * sin_lat**2)

    return np.array([lat, lon, h])


def llh2ecef(llh: np.ndarray) -> np.ndarray:
    """Convert geodetic coordinates to ECEF coordinates

    Parameters
    ----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] where:
        - lat: latitude in radians
        - lon: longitude in radians
        - height: height above WGS84 ellipsoid in meters

    Returns
    -------
    np.ndarray
        ECEF coordinates [x, y, z] in meters

    Notes
    -----
    Closed form through the prime-vertical radius of curvature
    N = a / sqrt(1 - e^2 sin^2(lat)); no iterations required.
    """
    lat, lon, h = llh[0], llh[1], llh[2]

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    N = RE_WGS84 / np.sqrt(1.0 - E2_WGS84 * sin_lat**2)

    x = (N + h) * cos_lat * cos_lon
    y = (N + h) * cos_lat * sin_lon
    z = (N * (1.0 - E2_WGS84) + h) * sin_lat

    return np.array([x, y, z])


def compute_rotation_matrix_enu(llh: np.ndarray) -> np.ndarray:
    """Compute rotation matrix from ECEF to ENU coordinates

    Parameters
    ----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m); height unused

    Returns
    -------
    np.ndarray
        Rotation matrix (3x3), v_enu = R @ v_ecef
    """
    lat, lon = llh[0], llh[1]
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    return np.array([
        [-sin_lon, cos_lon, 0],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat]
    ])


def compute_rotation_matrix_ned(llh: np.ndarray) -> np.ndarray:
    """Compute rotation matrix from ECEF to NED coordinates

    Parameters
    ----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m); height unused

    Returns
    -------
    np.ndarray
        Rotation matrix (3x3), v_ned = R @ v_ecef

    Examples
    --------
    >>> import numpy as np
    >>> R = compute_rotation_matrix_ned(np.array([0.0, 0.0, 0.0]))
    >>> north = R @ np.array([0, 0, 1])  # ECEF z at the equator points north
    """
    lat, lon = llh[0], llh[1]
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    return np.array([
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [-sin_lon, cos_lon, 0],
        [-cos_lat * cos_lon, -cos_lat * sin_lon, -sin_lat]
    ])


def ecef2enu(xyz: np.ndarray, org_llh: np.ndarray) -> np.ndarray:
    """Convert an ECEF point to local ENU coordinates around ``org_llh``

    Parameters
    ----------
    xyz : np.ndarray
        ECEF coordinates [x, y, z] in meters
    org_llh : np.ndarray
        Origin geodetic coordinates [lat, lon, height] (rad, rad, m)

    Returns
    -------
    np.ndarray
        Local ENU coordinates [e, n, u] in meters
    """
    dx = np.asarray(xyz, dtype=float) - llh2ecef(org_llh)
    return compute_rotation_matrix_enu(org_llh) @ dx


def ecef2ned(xyz: np.ndarray, org_llh: np.ndarray) -> np.ndarray:
    """
    Convert an ECEF point to local NED coordinates around ``org_llh``

    Parameters:
    -----------
    xyz : np.ndarray
        ECEF coordinates [x, y, z] (m)
    org_llh : np.ndarray
        Origin geodetic coordinates [lat, lon, height] (rad, rad, m)

    Returns:
    --------
    ned : np.ndarray
        Local NED coordinates [n, e, d] (m)
    """
    dx = np.asarray(xyz, dtype=float) - llh2ecef(org_llh)
    return compute_rotation_matrix_ned(org_llh) @ dx


def ned2ecef(ned: np.ndarray, org_llh: np.ndarray) -> np.ndarray:
    """
    Convert local NED coordinates around ``org_llh`` to an ECEF point

    Parameters:
    -----------
    ned : np.ndarray
        Local NED coordinates [n, e, d] (m)
    org_llh : np.ndarray
        Origin geodetic coordinates [lat, lon, height] (rad, rad, m)

    Returns:
    --------
    xyz : np.ndarray
        ECEF coordinates [x, y, z] (m)
    """
    R = compute_rotation_matrix_ned(org_llh)
    return llh2ecef(org_llh) + R.T @ np.asarray(ned, dtype=float)
