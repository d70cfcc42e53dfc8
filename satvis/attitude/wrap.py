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

"""Angle wrapping helpers."""

import numpy as np
from numba import njit

from ..core.constants import TWO_PI


@njit(cache=True)
def wrap_to_2pi(angle):
    """
    Wrap a scalar angle into the half-open range [0, 2*pi).

    Parameters
    ----------
    angle : float
        Angle in radians

    Returns
    -------
    float
        Equivalent angle in [0, 2*pi)
    """
    wrapped = angle % TWO_PI
    # float modulo can round up to exactly 2*pi for tiny negative inputs
    if wrapped >= TWO_PI:
        wrapped -= TWO_PI
    return wrapped


@njit(cache=True)
def wrap_to_pi(angle):
    """Wrap a scalar angle into [-pi, pi)"""
    return wrap_to_2pi(angle + np.pi) - np.pi
