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

"""GNSS Time Systems and Conversions

UTC instants are mapped onto GPS time with the fixed offset between the Unix
and GPS epochs. No leap-second table is applied, so GPS time computed here
runs behind true GPS time by the current leap-second count (18 s as of 2025).
This is a known limitation of the visibility model and is kept on purpose.
"""

from datetime import datetime, timedelta, timezone
from typing import Union

from .constants import GPST0, HALF_WEEK, WEEK_SECONDS
from .errors import ValidationError

GPS_EPOCH = datetime(*GPST0, tzinfo=timezone.utc)


class GNSSTime:
    """GPS week / time-of-week pair

    TOW is normalized into [0, 604800) on construction.
    """

    def __init__(self, week: int = 0, tow: float = 0.0):
        self.week = int(week)
        self.tow = float(tow)

        while self.tow >= WEEK_SECONDS:
            self.week += 1
            self.tow -= WEEK_SECONDS
        while self.tow < 0:
            self.week -= 1
            self.tow += WEEK_SECONDS

    @classmethod
    def from_datetime(cls, dt) -> 'GNSSTime':
        """Create GNSSTime from a UTC datetime"""
        return cls.from_gps_seconds(utc_to_gps_seconds(dt))

    @classmethod
    def from_gps_seconds(cls, gps_seconds: float) -> 'GNSSTime':
        """Create GNSSTime from GPS seconds since GPS epoch"""
        week, tow = gps_seconds_to_week_tow(gps_seconds)
        return cls(week, tow)

    def to_gps_seconds(self) -> float:
        """Convert to GPS seconds since GPS epoch"""
        return self.week * WEEK_SECONDS + self.tow

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime"""
        return gps_seconds_to_utc(self.to_gps_seconds())

    def __add__(self, seconds: float) -> 'GNSSTime':
        if isinstance(seconds, (int, float)):
            return GNSSTime(self.week, self.tow + seconds)
        raise TypeError(f"Cannot add {type(seconds)} to GNSSTime")

    def __sub__(self, other: Union['GNSSTime', float]) -> Union[float, 'GNSSTime']:
        if isinstance(other, GNSSTime):
            return (self.week - other.week) * WEEK_SECONDS + (self.tow - other.tow)
        elif isinstance(other, (int, float)):
            return GNSSTime(self.week, self.tow - other)
        raise TypeError(f"Cannot subtract {type(other)} from GNSSTime")

    def __lt__(self, other: 'GNSSTime') -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return (self.week, self.tow) < (other.week, other.tow)

    def __le__(self, other: 'GNSSTime') -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return (self.week, self.tow) <= (other.week, other.tow)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return self.week == other.week and abs(self.tow - other.tow) < 1e-9

    def __hash__(self):
        return hash((self.week, round(self.tow, 9)))

    def __str__(self):
        return f"GPS Week: {self.week}, TOW: {self.tow:.3f}"

    def __repr__(self):
        return f"GNSSTime({self.week}, {self.tow})"


def to_utc(t) -> datetime:
    """Normalize an instant to an aware UTC datetime

    Naive datetimes are interpreted as UTC. GNSSTime values are converted
    through GPS seconds.

    Raises
    ------
    ValidationError
        If ``t`` is missing or not a time instant
    """
    if t is None:
        raise ValidationError("Missing timestamp", parameter='timestamp')
    if isinstance(t, GNSSTime):
        return t.to_datetime()
    if not isinstance(t, datetime):
        raise ValidationError(f"Unsupported timestamp type: {type(t).__name__}",
                              parameter='timestamp')
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def utc_to_gps_seconds(t) -> float:
    """Convert a UTC instant to GPS seconds since 1980-01-06 (no leap seconds)"""
    return (to_utc(t) - GPS_EPOCH).total_seconds()


def gps_seconds_to_utc(gps_seconds: float) -> datetime:
    """Inverse of :func:`utc_to_gps_seconds`"""
    return GPS_EPOCH + timedelta(seconds=float(gps_seconds))


def gps_seconds_to_week_tow(gps_seconds: float) -> tuple:
    """
    Convert GPS seconds to GPS week number and time of week

    Parameters:
    -----------
    gps_seconds : float
        GPS seconds since GPS epoch (Jan 6, 1980 00:00:00)

    Returns:
    --------
    tuple : (week, tow)
        GPS week number and time of week in seconds
    """
    if gps_seconds < 0:
        raise ValidationError(f"GPS seconds cannot be negative: {gps_seconds}",
                              parameter='timestamp')

    week = int(gps_seconds // WEEK_SECONDS)
    tow = gps_seconds - week * WEEK_SECONDS

    return week, tow


def week_tow_to_gps_seconds(week: int, tow: float) -> float:
    """Convert GPS week number and time of week to GPS seconds"""
    if week < 0:
        raise ValidationError(f"GPS week cannot be negative: {week}", parameter='week')
    if tow < 0 or tow >= WEEK_SECONDS:
        raise ValidationError(f"Time of week must be in range [0, 604800): {tow}",
                              parameter='tow')

    return week * WEEK_SECONDS + tow


def timediff(tow: float, tref: float) -> float:
    """Time-of-week difference ``tow - tref`` with week rollover

    The result is kept within half a week of the reference epoch.
    """
    dt = tow - tref

    if dt > HALF_WEEK:
        dt -= WEEK_SECONDS
    elif dt < -HALF_WEEK:
        dt += WEEK_SECONDS

    return dt
