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

"""Aircraft trajectory generation, CSV reading and interpolation"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd
from scipy import interpolate

from ..attitude.wrap import wrap_to_pi
from ..core.data_structures import AttitudeEuler, GeodeticPosition
from ..core.errors import RangeError, ValidationError
from ..core.time import to_utc, utc_to_gps_seconds

__all__ = [
    "FLIGHT_PHASES",
    "TrajectoryInterpolator",
    "TrajectoryState",
    "dataframe_to_trajectory",
    "generate_trajectory",
    "read_trajectory_csv",
    "trajectory_to_dataframe",
]

logger = logging.getLogger(__name__)

FLIGHT_PHASES = ('takeoff', 'cruise', 'landing')

# Reference airfield and cruise parameters of the simulated flights
ORIGIN_LONGITUDE = 116.3974    # deg
ORIGIN_LATITUDE = 39.9093      # deg
CRUISE_ALTITUDE = 10000.0      # m
CRUISE_LONGITUDE_SPAN = 0.1    # deg covered over a cruise segment

TRAJECTORY_COLUMNS = ['timestamp', 'longitude', 'latitude', 'altitude',
                      'roll', 'pitch', 'yaw']


@dataclass(frozen=True)
class TrajectoryState:
    """Aircraft state at one instant"""
    timestamp: datetime
    position: GeodeticPosition
    attitude: AttitudeEuler

    def __post_init__(self):
        object.__setattr__(self, 'timestamp', to_utc(self.timestamp))
        object.__setattr__(self, 'position',
                           GeodeticPosition.from_mapping(self.position, 'position'))
        object.__setattr__(self, 'attitude',
                           AttitudeEuler.from_mapping(self.attitude, 'attitude'))

    def to_dict(self) -> dict:
        return {
            'timestamp': self.timestamp.isoformat(),
            'position': self.position.to_dict(),
            'attitude': self.attitude.to_dict(),
        }


def _phase_state(flight_phase: str, frac: float, t: float) -> tuple:
    """Position and attitude at fraction ``frac`` of a phase, ``t`` seconds in"""
    if flight_phase == 'takeoff':
        # Linear climb while the nose comes down from 15 deg to level
        position = GeodeticPosition(ORIGIN_LONGITUDE, ORIGIN_LATITUDE, CRUISE_ALTITUDE * frac)
        attitude = AttitudeEuler(0.0, 15.0 * (1.0 - frac), 0.0)
    elif flight_phase == 'cruise':
        # Eastbound at constant altitude with a slow roll oscillation
        position = GeodeticPosition(ORIGIN_LONGITUDE + CRUISE_LONGITUDE_SPAN * frac,
                                    ORIGIN_LATITUDE, CRUISE_ALTITUDE)
        attitude = AttitudeEuler(2.0 * np.sin(t / 10.0), 0.0, 0.0)
    else:
        # Linear descent with the nose going down to -3 deg
        position = GeodeticPosition(ORIGIN_LONGITUDE, ORIGIN_LATITUDE,
                                    CRUISE_ALTITUDE * (1.0 - frac))
        attitude = AttitudeEuler(0.0, -3.0 * frac, 0.0)
    return position, attitude


def generate_trajectory(flight_phase: str, duration: float, interval: float,
                        start_time: Optional[datetime] = None) -> list:
    """
    Generate a simulated trajectory for one flight phase.

    Parameters
    ----------
    flight_phase : str
        'takeoff', 'cruise' or 'landing'
    duration : float
        Length of the simulated segment (s)
    interval : float
        Sample spacing (s)
    start_time : datetime, optional
        Timestamp of the first sample; the current UTC time if omitted

    Returns
    -------
    list[TrajectoryState]
        Samples at ``start_time + k * interval`` for ``k * interval < duration``

    Raises
    ------
    ValidationError
        If the phase is unknown or duration/interval are missing or not positive
    """
    if flight_phase is None or duration is None or interval is None:
        raise ValidationError("flight_phase, duration and interval are required")
    if flight_phase not in FLIGHT_PHASES:
        raise ValidationError(f"Invalid flight phase: {flight_phase}", parameter='flight_phase')
    if duration <= 0 or interval <= 0:
        raise ValidationError(
            f"Duration and interval must be positive: duration={duration}, interval={interval}",
            parameter='duration' if duration <= 0 else 'interval')

    start = datetime.now(timezone.utc) if start_time is None else to_utc(start_time)
    n_samples = int(np.ceil(duration / interval))

    trajectory = []
    for k in range(n_samples):
        t = k * interval
        if t >= duration:
            break
        position, attitude = _phase_state(flight_phase, t / duration, t)
        trajectory.append(TrajectoryState(start + timedelta(seconds=t), position, attitude))

    logger.debug(f"Generated {len(trajectory)} {flight_phase} states over {duration} s")
    return trajectory


def trajectory_to_dataframe(states: Iterable[TrajectoryState]) -> pd.DataFrame:
    """Flatten trajectory states into a DataFrame with one row per state"""
    rows = [{
        'timestamp': s.timestamp,
        'longitude': s.position.longitude,
        'latitude': s.position.latitude,
        'altitude': s.position.altitude,
        'roll': s.attitude.roll,
        'pitch': s.attitude.pitch,
        'yaw': s.attitude.yaw,
    } for s in states]
    df = pd.DataFrame(rows, columns=TRAJECTORY_COLUMNS)
    if not df.empty:
        df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
    return df


def dataframe_to_trajectory(df: pd.DataFrame) -> list:
    """
    Build trajectory states from a DataFrame.

    Raises
    ------
    ValidationError
        If a required column is missing
    """
    missing_cols = [col for col in TRAJECTORY_COLUMNS if col not in df.columns]
    if missing_cols:
        raise ValidationError(f"Missing required columns: {missing_cols}",
                              parameter=missing_cols[0])

    timestamps = pd.to_datetime(df['timestamp'], utc=True)
    states = []
    for ts, row in zip(timestamps, df.itertuples(index=False)):
        states.append(TrajectoryState(
            ts.to_pydatetime(),
            GeodeticPosition(row.longitude, row.latitude, row.altitude),
            AttitudeEuler(row.roll, row.pitch, row.yaw),
        ))
    return states


def read_trajectory_csv(file_path: Union[str, Path]) -> list:
    """
    Read a trajectory from CSV.

    Expected columns are ``timestamp, longitude, latitude, altitude, roll,
    pitch, yaw``; ``time``/``lon``/``lat``/``alt``/``height`` are accepted
    as aliases. Timestamps are ISO strings, naive values taken as UTC. Rows
    are returned sorted by time.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValidationError
        If a required column is missing
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Trajectory file not found: {file_path}")

    df = pd.read_csv(file_path)

    column_mapping = {
        'time': 'timestamp',
        'lon': 'longitude',
        'lat': 'latitude',
        'alt': 'altitude',
        'height': 'altitude',
    }
    df.columns = [column_mapping.get(col.lower().strip(), col.lower().strip())
                  for col in df.columns]

    states = sorted(dataframe_to_trajectory(df), key=lambda s: s.timestamp)
    logger.info(f"Loaded {len(states)} trajectory states from {file_path}")
    return states


class TrajectoryInterpolator:
    """
    Continuous aircraft state from sampled trajectory states.

    Position and attitude components are interpolated independently over GPS
    seconds with ``scipy.interpolate.interp1d``. Angles are unwrapped first so
    that yaw crossing +/-180 deg interpolates along the short arc.

    Parameters
    ----------
    states : iterable of TrajectoryState
        At least two states with distinct timestamps
    kind : str
        Interpolation kind passed to ``interp1d`` ('linear', 'cubic', ...)
    """

    def __init__(self, states: Iterable[TrajectoryState], kind: str = 'linear'):
        states = sorted(states, key=lambda s: s.timestamp)
        if len(states) < 2:
            raise ValidationError("Interpolation needs at least two trajectory states",
                                  parameter='states')

        times = np.array([utc_to_gps_seconds(s.timestamp) for s in states])
        if np.any(np.diff(times) <= 0):
            raise ValidationError("Trajectory timestamps must be distinct", parameter='states')

        values = np.array([[s.position.longitude, s.position.latitude, s.position.altitude,
                            s.attitude.roll, s.attitude.pitch, s.attitude.yaw]
                           for s in states])
        for col in (0, 3, 5):
            values[:, col] = np.degrees(np.unwrap(np.radians(values[:, col])))

        self.start = states[0].timestamp
        self.end = states[-1].timestamp
        self._t0 = times[0]
        self._interp = interpolate.interp1d(times - self._t0, values, kind=kind, axis=0)

    def __call__(self, t) -> TrajectoryState:
        return self.state_at(t)

    def state_at(self, t) -> TrajectoryState:
        """
        Interpolated state at ``t``.

        Raises
        ------
        RangeError
            If ``t`` lies outside the sampled span
        """
        t = to_utc(t)
        if t < self.start or t > self.end:
            raise RangeError(
                f"Time {t.isoformat()} outside trajectory span "
                f"[{self.start.isoformat()}, {self.end.isoformat()}]",
                timestamp=t, valid_from=self.start, valid_to=self.end)

        lon, lat, alt, roll, pitch, yaw = self._interp(utc_to_gps_seconds(t) - self._t0)
        return TrajectoryState(
            t,
            GeodeticPosition(_wrap_deg(lon), lat, alt),
            AttitudeEuler(_wrap_deg(roll), pitch, _wrap_deg(yaw)),
        )

    def sample(self, interval: float) -> list:
        """States every ``interval`` seconds from the start of the span"""
        if interval is None or interval <= 0:
            raise ValidationError(f"Interval must be positive: {interval}", parameter='interval')
        span = (self.end - self.start).total_seconds()
        return [self.state_at(self.start + timedelta(seconds=k * interval))
                for k in range(int(np.floor(span / interval)) + 1)]


def _wrap_deg(angle: float) -> float:
    """Wrap an angle to [-180, 180) degrees"""
    return float(np.degrees(wrap_to_pi(np.radians(angle))))
