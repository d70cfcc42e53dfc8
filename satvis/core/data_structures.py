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

"""Core data structures for visibility processing"""

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timedelta
from typing import Optional

import numpy as np

from .constants import D2R
from .errors import DataError, ValidationError
from .time import to_utc


def _require_number(value, name: str) -> float:
    """Coerce a required scalar to float, rejecting None/NaN/inf"""
    if value is None:
        raise ValidationError(f"Missing parameter: {name}", parameter=name)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Parameter {name} is not a number: {value!r}", parameter=name)
    if not math.isfinite(number):
        raise ValidationError(f"Parameter {name} must be finite: {value!r}", parameter=name)
    return number


def _parse_instant(value, name: str):
    """ISO-8601 strings to datetime; other values are left to ``to_utc``"""
    if not isinstance(value, str):
        return value
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Parameter {name} is not an ISO-8601 time: {value!r}",
                              parameter=name)


class _Record:
    """Mapping construction shared by the position and attitude records"""

    @classmethod
    def from_mapping(cls, data, parameter: Optional[str] = None):
        """
        Build the record from a mapping of field values.

        Instances of the record class are returned unchanged. Absent or
        ``None`` fields are rejected; nothing is defaulted.

        Raises
        ------
        ValidationError
            If ``data`` or one of its fields is missing
        """
        name = parameter or cls.__name__
        if data is None:
            raise ValidationError(f"Missing parameter: {name}", parameter=name)
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Parameter {name} must be a {cls.__name__} or a mapping, got {type(data).__name__}",
                parameter=name)

        values = {}
        for f in fields(cls):
            if data.get(f.name) is None:
                raise ValidationError(f"Missing parameter: {name}.{f.name}",
                                      parameter=f"{name}.{f.name}")
            values[f.name] = data[f.name]
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)

    def _coerce_fields(self):
        for f in fields(self):
            object.__setattr__(self, f.name, _require_number(getattr(self, f.name), f.name))


@dataclass(frozen=True)
class ECEFPosition(_Record):
    """Earth-Centered-Earth-Fixed position (m)"""
    x: float
    y: float
    z: float

    def __post_init__(self):
        self._coerce_fields()

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, xyz) -> 'ECEFPosition':
        xyz = np.asarray(xyz, dtype=float).reshape(3)
        return cls(xyz[0], xyz[1], xyz[2])

    def norm(self) -> float:
        return float(np.linalg.norm(self.as_array()))

    def distance_to(self, other: 'ECEFPosition') -> float:
        return float(np.linalg.norm(other.as_array() - self.as_array()))


@dataclass(frozen=True)
class GeodeticPosition(_Record):
    """WGS84 geodetic position: longitude/latitude in degrees, altitude in meters"""
    longitude: float
    latitude: float
    altitude: float

    def __post_init__(self):
        self._coerce_fields()
        if abs(self.latitude) > 90.0:
            raise ValidationError(f"Latitude out of range [-90, 90]: {self.latitude}",
                                  parameter='latitude')

    def as_llh(self) -> np.ndarray:
        """[lat, lon, height] in radians/meters, the layout used by the transform kernels"""
        return np.array([self.latitude * D2R, self.longitude * D2R, self.altitude])


@dataclass(frozen=True)
class AttitudeEuler(_Record):
    """Aircraft attitude as roll/pitch/yaw Euler angles (degrees)"""
    roll: float
    pitch: float
    yaw: float

    def __post_init__(self):
        self._coerce_fields()

    def as_radians(self) -> np.ndarray:
        """[roll, pitch, yaw] in radians"""
        return np.array([self.roll, self.pitch, self.yaw], dtype=float) * D2R


@dataclass(frozen=True)
class BodyOffset(_Record):
    """Offset in the aircraft body frame (m): x nose, y right wing, z down"""
    x: float
    y: float
    z: float

    def __post_init__(self):
        self._coerce_fields()

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, xyz) -> 'BodyOffset':
        xyz = np.asarray(xyz, dtype=float).reshape(3)
        return cls(xyz[0], xyz[1], xyz[2])


# Accepted spellings for each broadcast parameter
_ELEMENT_ALIASES = {
    'toe': ('toe', 'toes'),
    'm0': ('m0', 'M0'),
    'e': ('e',),
    'root_a': ('root_a', 'rootA', 'sqrtA'),
    'i0': ('i0',),
    'idot': ('idot',),
    'omega0': ('omega0', 'OMG0'),
    'omegadot': ('omegadot', 'omegaDot', 'OMGd'),
    'omega': ('omega', 'omg'),
    'delta_n': ('delta_n', 'deltaN', 'deln'),
    'cuc': ('cuc',),
    'cus': ('cus',),
    'crc': ('crc',),
    'crs': ('crs',),
    'cic': ('cic',),
    'cis': ('cis',),
}


@dataclass(frozen=True)
class OrbitalElements:
    """Broadcast orbital elements of a single satellite.

    Attributes
    ----------
    toe : float
        Reference time of ephemeris, seconds into the GPS week
    m0 : float
        Mean anomaly at reference time (rad)
    e : float
        Eccentricity, in [0, 1)
    root_a : float
        Square root of the semi-major axis (m^1/2)
    i0, idot : float
        Inclination at reference time (rad) and its rate (rad/s)
    omega0, omegadot : float
        Longitude of ascending node at weekly epoch (rad) and its rate (rad/s)
    omega : float
        Argument of perigee (rad)
    delta_n : float
        Mean motion difference from computed value (rad/s)
    cuc, cus : float
        Argument of latitude harmonic corrections (rad)
    crc, crs : float
        Orbit radius harmonic corrections (m)
    cic, cis : float
        Inclination harmonic corrections (rad)
    """
    toe: float
    m0: float
    e: float
    root_a: float
    i0: float
    idot: float
    omega0: float
    omegadot: float
    omega: float
    delta_n: float
    cuc: float
    cus: float
    crc: float
    crs: float
    cic: float
    cis: float

    def __post_init__(self):
        bad = []
        for f in fields(self):
            value = getattr(self, f.name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                bad.append(f.name)
                continue
            if not math.isfinite(value):
                bad.append(f.name)
                continue
            object.__setattr__(self, f.name, value)
        if bad:
            raise DataError(f"Invalid orbital parameters: {', '.join(bad)}", missing=bad)
        if not 0.0 <= self.e < 1.0:
            raise DataError(f"Eccentricity out of range [0, 1): {self.e}", missing=['e'])
        if self.root_a <= 0.0:
            raise DataError(f"Square root of semi-major axis must be positive: {self.root_a}",
                            missing=['root_a'])

    @property
    def semi_major_axis(self) -> float:
        return self.root_a * self.root_a

    @classmethod
    def from_mapping(cls, data, satellite_id: Optional[str] = None) -> 'OrbitalElements':
        """
        Build elements from a parameter mapping.

        Both snake_case names and the broadcast-message spellings
        (``rootA``, ``deltaN``, ``OMG0``, ...) are accepted.

        Raises
        ------
        DataError
            Listing every missing or invalid parameter
        """
        if data is None or not isinstance(data, Mapping):
            raise DataError(f"Satellite {satellite_id} has no orbital parameters",
                            satellite_id=satellite_id, missing=list(_ELEMENT_ALIASES))

        values = {}
        missing = []
        for name, aliases in _ELEMENT_ALIASES.items():
            value = next((data[key] for key in aliases if data.get(key) is not None), None)
            if value is None:
                missing.append(name)
            else:
                values[name] = value
        if missing:
            raise DataError(
                f"Satellite {satellite_id} is missing orbital parameters: {', '.join(missing)}",
                satellite_id=satellite_id, missing=missing)

        try:
            return cls(**values)
        except DataError as exc:
            raise DataError(f"Satellite {satellite_id}: {exc}", satellite_id=satellite_id,
                            missing=exc.missing) from exc

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ValidityWindow:
    """Inclusive time span during which orbital elements may be used"""
    valid_from: datetime
    valid_to: datetime

    def __post_init__(self):
        object.__setattr__(self, 'valid_from', to_utc(self.valid_from))
        object.__setattr__(self, 'valid_to', to_utc(self.valid_to))
        if self.valid_from > self.valid_to:
            raise ValidationError(
                f"Validity window starts after it ends: {self.valid_from} > {self.valid_to}",
                parameter='validity')

    def contains(self, t) -> bool:
        t = to_utc(t)
        return self.valid_from <= t <= self.valid_to

    @classmethod
    def around(cls, center, half_width: float) -> 'ValidityWindow':
        """Window of +/- ``half_width`` seconds around ``center``"""
        center = to_utc(center)
        delta = timedelta(seconds=half_width)
        return cls(center - delta, center + delta)

    @classmethod
    def from_mapping(cls, data) -> 'ValidityWindow':
        if data is None or not isinstance(data, Mapping):
            raise ValidationError("Missing validity window", parameter='validity')
        start = data.get('valid_from', data.get('validFrom'))
        end = data.get('valid_to', data.get('validTo'))
        if start is None or end is None:
            raise ValidationError("Validity window needs valid_from and valid_to",
                                  parameter='validity')
        return cls(_parse_instant(start, 'valid_from'), _parse_instant(end, 'valid_to'))


@dataclass(frozen=True)
class SatelliteEphemeris:
    """One ephemeris store entry.

    ``elements`` or ``validity`` may be absent when the source record was
    incomplete; ``missing`` then names the absent parameters.
    """
    satellite_id: str
    elements: Optional[OrbitalElements] = None
    validity: Optional[ValidityWindow] = None
    missing: tuple = ()

    @classmethod
    def from_record(cls, record: Mapping) -> 'SatelliteEphemeris':
        """
        Build an entry from a parsed ephemeris record.

        The record layout is ``{'id': 'G01', 'orbitalParameters': {...},
        'timeParameters': {'validFrom': ..., 'validTo': ...}}``. Missing
        orbital parameters are recorded, not raised, so that the failure
        surfaces as a ``DataError`` when the satellite is propagated.
        """
        satellite_id = record.get('id', record.get('satellite_id'))
        if not satellite_id:
            raise ValidationError("Ephemeris record without satellite id", parameter='id')

        params = record.get('orbitalParameters', record.get('elements'))
        elements = None
        missing = ()
        try:
            elements = OrbitalElements.from_mapping(params, satellite_id)
        except DataError as exc:
            missing = tuple(exc.missing)

        times = record.get('timeParameters', record.get('validity'))
        validity = ValidityWindow.from_mapping(times) if times is not None else None

        return cls(satellite_id, elements, validity, missing)


@dataclass(frozen=True)
class VisibilityResult:
    """Visibility of one satellite at one instant.

    ``signal_strength_dbm`` is ``None`` when the satellite is occluded.
    """
    satellite_id: str
    timestamp: datetime
    occluded: bool
    signal_strength_dbm: Optional[float] = None
    elevation_deg: Optional[float] = None
    azimuth_deg: Optional[float] = None
    cn0_dbhz: Optional[float] = None
    range_m: Optional[float] = field(default=None, compare=False)

    @property
    def key(self) -> tuple:
        return (self.satellite_id, self.timestamp)

    @property
    def visible(self) -> bool:
        return not self.occluded

    def to_dict(self) -> dict:
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data


def to_ecef_array(position, name: str = 'position') -> np.ndarray:
    """
    ECEF coordinates of ``position`` as a float array of shape (3,).

    Accepts an :class:`ECEFPosition`, a mapping with ``x``/``y``/``z`` or a
    three-element sequence.

    Raises
    ------
    ValidationError
        If the position is missing, malformed or non-finite
    """
    if position is None:
        raise ValidationError(f"Missing parameter: {name}", parameter=name)
    if isinstance(position, (ECEFPosition, Mapping)):
        return ECEFPosition.from_mapping(position, name).as_array()
    try:
        xyz = np.asarray(position, dtype=float).reshape(3)
    except (TypeError, ValueError):
        raise ValidationError(f"Parameter {name} is not an ECEF position: {position!r}",
                              parameter=name)
    if not np.all(np.isfinite(xyz)):
        raise ValidationError(f"Parameter {name} must be finite: {position!r}", parameter=name)
    return xyz
