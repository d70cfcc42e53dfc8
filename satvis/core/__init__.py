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

"""Core Visibility Processing Module.

This module provides fundamental components used throughout satvis:

- **Constants and Parameters**: WGS84 ellipsoid, Earth rotation, gravitational
  constant, GNSS carrier frequencies, solver tolerances, ephemeris validity
  periods and satellite system identifiers
- **Errors**: the closed error taxonomy (validation, not-found, data, range,
  numerical) raised by every satvis operation
- **Data Structures**: orbital elements, validity windows, ECEF/geodetic
  positions, attitude, body-frame offsets and visibility results
- **Time Systems**: UTC to GPS time mapping, GPS week / time-of-week handling
  and week-rollover aware differences

Example Usage:
    >>> from satvis.core import *
    >>>
    >>> pos = GeodeticPosition(longitude=116.3974, latitude=39.9093, altitude=10000.0)
    >>> t = GNSSTime.from_datetime(datetime(2025, 1, 9, 12, 0, 0))
    >>> week, tow = t.week, t.tow
"""

from .constants import *
from .data_structures import *
from .errors import *
from .time import *
