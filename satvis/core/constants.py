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

"""GNSS Constants and System Parameters"""

import numpy as np

# Physical Constants
CLIGHT = 299792458.0           # speed of light (m/s)
BOLTZMANN = 1.380649E-23       # Boltzmann constant (J/K)
T0_NOISE = 290.0               # reference noise temperature (K)

# GPS frequencies
FREQ_L1 = 1.57542E9   # L1 frequency (Hz)

# BeiDou frequencies
FREQ_B3 = 1.26852E9    # BeiDou B3I frequency (Hz)

# GNSS System IDs
SYS_NONE = 0x00   # invalid
SYS_GPS = 0x01    # GPS
SYS_GLO = 0x02    # GLONASS
SYS_GAL = 0x04    # Galileo
SYS_BDS = 0x08    # BeiDou
SYS_QZS = 0x10    # QZSS
SYS_SBS = 0x20    # SBAS
SYS_IRN = 0x40    # IRNSS

# Time System Parameters
GPST0 = [1980, 1, 6, 0, 0, 0]  # GPS time reference epoch
BDT_GPST_OFFSET = 14.0          # BDT lags GPST by 14 s (s)
WEEK_SECONDS = 604800.0        # seconds per GPS week
HALF_WEEK = 302400.0           # half a GPS week (s)

# Earth Parameters (WGS84)
RE_WGS84 = 6378137.0           # earth semimajor axis (m)
FE_WGS84 = 1.0 / 298.257223563 # earth flattening
E2_WGS84 = FE_WGS84 * (2.0 - FE_WGS84)  # first eccentricity squared
OMGE = 7.2921151467E-5         # earth angular velocity (rad/s)
GME = 3.986004418E14           # earth gravitational constant (m^3/s^2)

# Broadcast ephemeris propagation
KEPLER_TOL = 1E-12             # Newton-Raphson step tolerance (rad)
KEPLER_MAX_ITER = 100          # Newton-Raphson iteration cap

# Geodetic conversion
LAT_TOL = 1E-11                # latitude convergence tolerance (rad)
LAT_MAX_ITER = 10              # latitude iteration cap

# Ephemeris validity half-windows (s), applied around toe
MAXDTOE_GPS = 7200.0           # GPS/QZSS: 2 hours
MAXDTOE_GAL = 10800.0          # Galileo: 3 hours
MAXDTOE_BDS = 21600.0          # BeiDou: 6 hours
MAXDTOE_DEFAULT = 3600.0       # other systems: 1 hour

# Unit conversions
R2D = 180.0 / np.pi            # radians to degrees
D2R = np.pi / 180.0            # degrees to radians
TWO_PI = 2.0 * np.pi


def char2sys(c):
    """Convert character to system ID

    'B' is accepted as an alias for BeiDou ('C' in RINEX), matching the
    satellite naming used by the satellite catalog (B01, B02, ...).
    """
    charmap = {
        'G': SYS_GPS,
        'R': SYS_GLO,
        'E': SYS_GAL,
        'C': SYS_BDS,
        'B': SYS_BDS,
        'J': SYS_QZS,
        'S': SYS_SBS,
        'I': SYS_IRN
    }
    return charmap.get(c.upper(), SYS_NONE)


def max_dtoe(sys):
    """Default ephemeris half-validity period for a satellite system (s)"""
    if sys == SYS_GPS or sys == SYS_QZS:
        return MAXDTOE_GPS
    elif sys == SYS_GAL:
        return MAXDTOE_GAL
    elif sys == SYS_BDS:
        return MAXDTOE_BDS
    return MAXDTOE_DEFAULT
