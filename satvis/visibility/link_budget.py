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
Free-space link budget between a satellite and the aircraft antenna.

Only free-space spreading is modelled. Atmospheric, rain and multipath losses
are not included.
"""

import numpy as np

from ..core.constants import BOLTZMANN, CLIGHT, T0_NOISE
from ..core.data_structures import _require_number, to_ecef_array
from ..core.errors import ValidationError

# 20 log10(4 pi / c)
FSPL_CONST_DB = 20.0 * np.log10(4.0 * np.pi / CLIGHT)
DBW_TO_DBM = 30.0


def free_space_path_loss(distance: float, frequency: float) -> float:
    """
    Free-space path loss (dB) from the Friis formula.

    FSPL = 20 log10(d) + 20 log10(f) + 20 log10(4 pi / c)

    Parameters
    ----------
    distance : float
        Range (m), must be positive
    frequency : float
        Carrier frequency (Hz), must be positive
    """
    distance = _require_number(distance, 'distance')
    frequency = _require_number(frequency, 'frequency')
    if distance <= 0 or frequency <= 0:
        raise ValidationError(
            f"Distance and frequency must be positive: d={distance}, f={frequency}",
            parameter='distance' if distance <= 0 else 'frequency')
    return float(20.0 * np.log10(distance) + 20.0 * np.log10(frequency) + FSPL_CONST_DB)


def signal_strength(observer, target, transmit_power_dbw, frequency_hz,
                    sat_antenna_gain_dbi: float = 0.0,
                    rx_antenna_gain_dbi: float = 0.0) -> float:
    """
    Received signal power at ``observer`` from a transmitter at ``target``.

    Parameters
    ----------
    observer : ECEFPosition, mapping or array_like
        Receiver antenna position in ECEF (m)
    target : ECEFPosition, mapping or array_like
        Satellite position in ECEF (m)
    transmit_power_dbw : float
        Transmitter power (dBW)
    frequency_hz : float
        Carrier frequency (Hz)
    sat_antenna_gain_dbi : float
        Satellite antenna gain (dBi)
    rx_antenna_gain_dbi : float
        Receiver antenna gain (dBi)

    Returns
    -------
    float
        Received power (dBm). ``-inf`` when the range or the frequency is not
        positive.

    Raises
    ------
    ValidationError
        If a position, the power or the frequency is missing or not finite

    Examples
    --------
    >>> p = signal_strength([0, 0, 0], [0, 0, 20200e3], 14.3, 1575.42e6)
    >>> round(p, 1)
    -138.2
    """
    p_rx = to_ecef_array(observer, 'observer')
    p_tx = to_ecef_array(target, 'target')
    transmit_power_dbw = _require_number(transmit_power_dbw, 'transmit_power_dbw')
    frequency_hz = _require_number(frequency_hz, 'frequency_hz')

    distance = float(np.linalg.norm(p_tx - p_rx))
    if distance <= 0 or frequency_hz <= 0:
        return float('-inf')

    fspl = free_space_path_loss(distance, frequency_hz)
    received_dbw = (transmit_power_dbw + (sat_antenna_gain_dbi or 0.0)
                    + (rx_antenna_gain_dbi or 0.0) - fspl)

    return received_dbw + DBW_TO_DBM


def carrier_to_noise_density(power_dbm: float, noise_temperature_k: float = T0_NOISE) -> float:
    """
    Carrier-to-noise density ratio C/N0 (dB-Hz).

    C/N0 = P[dBW] - 10 log10(k T)

    ``-inf`` input power passes through unchanged.
    """
    if power_dbm is None or np.isnan(power_dbm):
        raise ValidationError(f"Power must be a number or -inf: {power_dbm}", parameter='power_dbm')
    if noise_temperature_k is None or noise_temperature_k <= 0:
        raise ValidationError(f"Noise temperature must be positive: {noise_temperature_k}",
                              parameter='noise_temperature_k')
    if np.isneginf(power_dbm):
        return float('-inf')

    n0_dbw = 10.0 * np.log10(BOLTZMANN * noise_temperature_k)
    return float(power_dbm - DBW_TO_DBM - n0_dbw)
