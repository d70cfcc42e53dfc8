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
Line-of-sight occlusion by the Earth.

The Earth is modelled as a sphere of radius ``earth_radius`` centred at the
ECEF origin. The straight segment from observer to target is parameterised as
``p(t) = p1 + t * d`` with ``d = p2 - p1`` and ``t`` in [0, 1]; substituting
into ``|p(t)|^2 = R^2`` gives

    A t^2 + B t + C = 0,   A = |d|^2,  B = 2 (p1 . d),  C = |p1|^2 - R^2

The path is blocked when a real root lies on the segment. There is no
tolerance band: grazing rays count as occluded.
"""

import numpy as np

from ..core.constants import RE_WGS84
from ..core.data_structures import to_ecef_array
from ..core.errors import ValidationError


def is_occluded(observer, target, earth_radius: float = RE_WGS84) -> bool:
    """
    Check whether the Earth blocks the straight path between two points.

    Parameters
    ----------
    observer : ECEFPosition, mapping or array_like
        Segment start, usually the aircraft antenna (m)
    target : ECEFPosition, mapping or array_like
        Segment end, usually the satellite (m)
    earth_radius : float
        Radius of the occluding sphere (m)

    Returns
    -------
    bool
        True if the segment intersects the sphere

    Raises
    ------
    ValidationError
        If either point is missing or malformed

    Examples
    --------
    >>> R = 6378137.0
    >>> is_occluded([0, 0, R + 1e4], [0, 0, R + 2e7])
    False
    >>> is_occluded([R, 0, 1e4], [-R, 0, -1e4])
    True
    """
    p1 = to_ecef_array(observer, 'observer')
    p2 = to_ecef_array(target, 'target')
    if earth_radius is None or not earth_radius > 0:
        raise ValidationError(f"Earth radius must be positive: {earth_radius}",
                              parameter='earth_radius')

    if np.array_equal(p1, p2):
        return False

    d = p2 - p1
    A = d @ d
    B = 2.0 * (p1 @ d)
    C = p1 @ p1 - earth_radius * earth_radius

    disc = B * B - 4.0 * A * C
    if disc < 0.0:
        return False

    sq = np.sqrt(disc)
    t1 = (-B + sq) / (2.0 * A)
    t2 = (-B - sq) / (2.0 * A)

    return bool(0.0 <= t1 <= 1.0 or 0.0 <= t2 <= 1.0)
