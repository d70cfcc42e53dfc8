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
Geometry module for satellite look angles.

Functions
---------
compute_azimuth_elevation
    Azimuth and elevation of a satellite seen from a receiver, in degrees.
compute_elevation_angle
    Elevation only.
"""

from .elevation import compute_azimuth_elevation, compute_elevation_angle

__all__ = ['compute_azimuth_elevation', 'compute_elevation_angle']
