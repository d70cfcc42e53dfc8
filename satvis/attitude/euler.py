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
Attitude conversion from euler angles.

All rotations assume right-hand coordinate frames with euler angles in the
order 'roll-pitch-yaw' and DCMs with the order of 'ZYX'. The DCM returned by
:func:`euler2dcm` rotates local-level NED vectors into the aircraft body
frame (x nose, y right wing, z down); its transpose rotates body vectors back
into NED.

References:
    Principles of GNSS, Inertial, and Multisensor Integrated Navigation Systems
    - (2013) Paul D. Groves
"""

import numpy as np
from numba import njit


@njit(cache=True, fastmath=True)
def euler2dcm(e):
    """
    Convert euler angles (roll-pitch-yaw) to the NED-to-body 'ZYX' DCM.

    The rotation sequence is intrinsic:
    1. Yaw (psi) about z-axis
    2. Pitch (theta) about the rotated y-axis
    3. Roll (phi) about the twice-rotated x-axis

    Parameters
    ----------
    e : ndarray, shape (3,)
        RPY euler angles [roll, pitch, yaw] in radians

    Returns
    -------
    C : ndarray, shape (3, 3)
        Direction cosine matrix, v_body = C @ v_ned
    """
    sinP, sinT, sinS = np.sin(e)
    cosP, cosT, cosS = np.cos(e)
    C = np.array([[cosT*cosS, cosT*sinS, -sinT],
                  [sinP*sinT*cosS - cosP*sinS, sinP*sinT*sinS + cosP*cosS, cosT*sinP],
                  [sinT*cosP*cosS + sinS*sinP, sinT*cosP*sinS - cosS*sinP, cosT*cosP]],
                 dtype=np.double)
    return C


@njit(cache=True, fastmath=True)
def rot_x(phi):
    """Rotation matrix about the x-axis by ``phi`` radians"""
    sinP = np.sin(phi)
    cosP = np.cos(phi)
    R = np.array([[1.0,  0.0,   0.0],
                  [0.0, cosP, -sinP],
                  [0.0, sinP,  cosP]],
                 dtype=np.double)
    return R


@njit(cache=True, fastmath=True)
def rot_y(theta):
    """Rotation matrix about the y-axis by ``theta`` radians"""
    sinT = np.sin(theta)
    cosT = np.cos(theta)
    R = np.array([[ cosT, 0.0, sinT],
                  [  0.0, 1.0,  0.0],
                  [-sinT, 0.0, cosT]],
                 dtype=np.double)
    return R


@njit(cache=True, fastmath=True)
def rot_z(psi):
    """Rotation matrix about the z-axis by ``psi`` radians"""
    sinS = np.sin(psi)
    cosS = np.cos(psi)
    R = np.array([[cosS, -sinS, 0.0],
                  [sinS,  cosS, 0.0],
                  [ 0.0,   0.0, 1.0]],
                 dtype=np.double)
    return R
