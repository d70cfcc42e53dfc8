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
Attitude module for coordinate transformations and rotations.

This module provides functions for converting between Euler angles and
Direction Cosine Matrices (DCM), plus angle wrapping helpers.

All rotations assume right-hand coordinate frames with euler angles in the order
'roll-pitch-yaw' and DCMs with the order of 'ZYX'.

References:
    Principles of GNSS, Inertial, and Multisensor Integrated Navigation Systems
    - (2013) Paul D. Groves
"""

from .dcm import dcm2euler
from .euler import euler2dcm, rot_x, rot_y, rot_z
from .wrap import wrap_to_2pi, wrap_to_pi

__all__ = [
    'dcm2euler',
    'euler2dcm', 'rot_x', 'rot_y', 'rot_z',
    'wrap_to_2pi', 'wrap_to_pi',
]
