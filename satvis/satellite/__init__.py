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
Satellite computation module.

Modules
-------
kepler : module
    Newton-Raphson solution of Kepler's equation with an explicit
    non-convergence error
satellite_position : module
    Satellite ECEF position from broadcast Keplerian elements
ephemeris : module
    Ephemeris storage and per-time selection

Usage Examples
--------------
Propagate a satellite held in a store:

    >>> from satvis.satellite import EphemerisStore, propagate_satellite
    >>> store = EphemerisStore()
    >>> store.add('C01', elements, window)
    >>> pos = propagate_satellite(store, 'C01', t)

Notes
-----
Time systems: instants are UTC datetimes mapped onto GPS time without leap
seconds. Positions are geometric ECEF coordinates; satellite clock errors are
not corrected.
"""

from .ephemeris import *
from .kepler import *
from .satellite_position import *
