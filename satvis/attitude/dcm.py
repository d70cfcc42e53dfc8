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
Attitude conversion from direction cosine matrices.

All rotations assume right-hand coordinate frames with euler angles in the
order 'roll-pitch-yaw' and DCMs with the order of 'ZYX'.
"""

import numpy as np
from numba import njit


@njit(cache=True, fastmath=True)
def dcm2euler(C):
    """
    Convert a NED-to-body 'ZYX' DCM into euler angles (roll-pitch-yaw).

    Parameters
    ----------
    C : ndarray, shape (3, 3)
        Direction cosine matrix as produced by ``euler2dcm``

    Returns
    -------
    e : ndarray, shape (3,)
        Euler angles [roll, pitch, yaw] in radians
    """
    e = np.array([np.arctan2(C[1, 2], C[2, 2]),
                  np.arcsin(-C[0, 2]),
                  np.arctan2(C[0, 1], C[0, 0])],
                 dtype=np.double)
    return e
