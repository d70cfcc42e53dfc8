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

This module provides:
- Array kernels for ECEF, geodetic (LLH), ENU and NED frames
- Validated record-level conversions between geodetic, ECEF and the
  aircraft body frame

For Euler-angle / DCM kernels with Numba optimization, use satvis.attitude.
"""

from .converter import (
    body_frame,
    body_to_ecef,
    ecef_to_body,
    ecef_to_lla,
    lla_to_ecef,
)
from .transforms import (
    compute_rotation_matrix_enu,
    compute_rotation_matrix_ned,
    ecef2enu,
    ecef2llh,
    ecef2ned,
    llh2ecef,
    ned2ecef,
)
