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
Visibility configuration: satellite catalog, aircraft antenna and thresholds.

Configurations are plain dataclasses that round-trip through dictionaries,
so they can be stored as YAML or JSON:

.. code-block:: yaml

    constellations:
      - name: GPS
        frequency_hz: 1575420000.0
        transmit_power_dbw: 14.3
        antenna_gain_dbi: 13.0
        id_prefixes: [G]
    antenna:
      offset: [0.0, 0.0, -5.0]
      gain_dbi: 3.0
    signal:
      minimum_strength_dbm: -130.0
      quality_threshold_dbhz: 30.0
    logging:
      default_level: INFO
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from .core.constants import FREQ_B3, FREQ_L1, RE_WGS84, T0_NOISE
from .core.data_structures import BodyOffset, _require_number
from .core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class ConstellationConfig:
    """
    Radio parameters shared by the satellites of one constellation.

    Attributes:
        name (str): Constellation name
        frequency_hz (float): Carrier frequency used for the link budget
        transmit_power_dbw (float): Satellite transmit power
        antenna_gain_dbi (float): Satellite antenna gain towards the Earth
        id_prefixes (list[str]): Satellite id prefixes belonging to this constellation
        supported_ids (list[str]): Explicit id list; empty accepts any id with a matching prefix
        orbital_radius_m (float): Nominal orbital radius, informational
    """
    name: str
    frequency_hz: float
    transmit_power_dbw: float
    antenna_gain_dbi: float = 0.0
    id_prefixes: list = field(default_factory=list)
    supported_ids: list = field(default_factory=list)
    orbital_radius_m: Optional[float] = None

    def __post_init__(self):
        if self.frequency_hz is None or self.frequency_hz <= 0:
            raise ValidationError(f"{self.name}: frequency must be positive: {self.frequency_hz}",
                                  parameter='frequency_hz')
        if self.transmit_power_dbw is None:
            raise ValidationError(f"{self.name}: missing transmit power",
                                  parameter='transmit_power_dbw')
        self.id_prefixes = [p.upper() for p in self.id_prefixes]
        self.supported_ids = [s.upper() for s in self.supported_ids]

    def covers(self, satellite_id: str) -> bool:
        """True if ``satellite_id`` belongs to this constellation"""
        sid = satellite_id.strip().upper()
        if self.supported_ids:
            return sid in self.supported_ids
        return any(sid.startswith(p) for p in self.id_prefixes)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'frequency_hz': self.frequency_hz,
            'transmit_power_dbw': self.transmit_power_dbw,
            'antenna_gain_dbi': self.antenna_gain_dbi,
            'id_prefixes': list(self.id_prefixes),
            'supported_ids': list(self.supported_ids),
            'orbital_radius_m': self.orbital_radius_m,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ConstellationConfig':
        if not isinstance(data, dict) or not data.get('name'):
            raise ValidationError("Constellation config needs a name", parameter='name')
        name = data['name']
        radius = data.get('orbital_radius_m')
        return cls(
            name=name,
            frequency_hz=_require_number(data.get('frequency_hz'), f"{name}.frequency_hz"),
            transmit_power_dbw=_require_number(data.get('transmit_power_dbw'),
                                               f"{name}.transmit_power_dbw"),
            antenna_gain_dbi=_require_number(data.get('antenna_gain_dbi', 0.0),
                                             f"{name}.antenna_gain_dbi"),
            id_prefixes=list(data.get('id_prefixes') or []),
            supported_ids=list(data.get('supported_ids') or []),
            orbital_radius_m=(_require_number(radius, f"{name}.orbital_radius_m")
                              if radius is not None else None),
        )


@dataclass
class AntennaConfig:
    """Aircraft GNSS antenna: body-frame offset from the reference point and gain"""
    offset: BodyOffset = field(default_factory=lambda: BodyOffset(0.0, 0.0, -5.0))
    gain_dbi: float = 3.0

    def to_dict(self) -> dict:
        return {'offset': self.offset.as_array().tolist(), 'gain_dbi': self.gain_dbi}

    @classmethod
    def from_dict(cls, data: dict) -> 'AntennaConfig':
        offset = data.get('offset', [0.0, 0.0, -5.0])
        if isinstance(offset, dict):
            offset = BodyOffset.from_mapping(offset, 'antenna.offset')
        elif isinstance(offset, (list, tuple)) and len(offset) == 3:
            offset = BodyOffset(*offset)
        else:
            raise ValidationError(f"Antenna offset must be x/y/z or a 3-list: {offset!r}",
                                  parameter='antenna.offset')
        return cls(offset=offset,
                   gain_dbi=_require_number(data.get('gain_dbi', 3.0), 'antenna.gain_dbi'))


@dataclass
class SignalConfig:
    """Acceptance thresholds for a tracked signal"""
    minimum_strength_dbm: float = -130.0
    quality_threshold_dbhz: float = 30.0
    noise_temperature_k: float = T0_NOISE

    def to_dict(self) -> dict:
        return {
            'minimum_strength_dbm': self.minimum_strength_dbm,
            'quality_threshold_dbhz': self.quality_threshold_dbhz,
            'noise_temperature_k': self.noise_temperature_k,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SignalConfig':
        defaults = cls()
        return cls(
            minimum_strength_dbm=_require_number(
                data.get('minimum_strength_dbm', defaults.minimum_strength_dbm),
                'signal.minimum_strength_dbm'),
            quality_threshold_dbhz=_require_number(
                data.get('quality_threshold_dbhz', defaults.quality_threshold_dbhz),
                'signal.quality_threshold_dbhz'),
            noise_temperature_k=_require_number(
                data.get('noise_temperature_k', defaults.noise_temperature_k),
                'signal.noise_temperature_k'),
        )


def default_constellations() -> list:
    """BeiDou B3I and GPS L1 C/A catalog entries"""
    return [
        ConstellationConfig(name='BEIDOU', frequency_hz=FREQ_B3, transmit_power_dbw=15.0,
                            antenna_gain_dbi=13.0, id_prefixes=['C', 'B'],
                            orbital_radius_m=42164000.0),
        ConstellationConfig(name='GPS', frequency_hz=FREQ_L1, transmit_power_dbw=14.3,
                            antenna_gain_dbi=13.0, id_prefixes=['G'],
                            orbital_radius_m=26560000.0),
    ]


@dataclass
class VisibilityConfig:
    """Complete configuration of a visibility run"""
    constellations: list = field(default_factory=default_constellations)
    antenna: AntennaConfig = field(default_factory=AntennaConfig)
    signal: SignalConfig = field(default_factory=SignalConfig)
    earth_radius_m: float = RE_WGS84
    max_workers: int = 1
    logging: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.earth_radius_m is None or self.earth_radius_m <= 0:
            raise ValidationError(f"Earth radius must be positive: {self.earth_radius_m}",
                                  parameter='earth_radius_m')
        if self.max_workers is None or int(self.max_workers) < 1:
            raise ValidationError(f"max_workers must be at least 1: {self.max_workers}",
                                  parameter='max_workers')
        self.max_workers = int(self.max_workers)

    def radio_for(self, satellite_id: str) -> ConstellationConfig:
        """
        Catalog entry of the constellation a satellite belongs to.

        Raises
        ------
        ValidationError
            If ``satellite_id`` is empty
        NotFoundError
            If no configured constellation covers the id
        """
        if not satellite_id:
            raise ValidationError("Missing satellite id", parameter='satellite_id')
        for constellation in self.constellations:
            if constellation.covers(satellite_id):
                return constellation
        raise NotFoundError(satellite_id, what="satellite catalog")

    def to_dict(self) -> dict:
        return {
            'constellations': [c.to_dict() for c in self.constellations],
            'antenna': self.antenna.to_dict(),
            'signal': self.signal.to_dict(),
            'earth_radius_m': self.earth_radius_m,
            'max_workers': self.max_workers,
            'logging': dict(self.logging),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'VisibilityConfig':
        """Build a configuration; absent sections keep their defaults"""
        data = data or {}
        kwargs = {}
        if 'constellations' in data:
            kwargs['constellations'] = [ConstellationConfig.from_dict(c)
                                        for c in data['constellations']]
        if 'antenna' in data:
            kwargs['antenna'] = AntennaConfig.from_dict(data['antenna'])
        if 'signal' in data:
            kwargs['signal'] = SignalConfig.from_dict(data['signal'])
        if 'earth_radius_m' in data:
            kwargs['earth_radius_m'] = float(data['earth_radius_m'])
        if 'max_workers' in data:
            kwargs['max_workers'] = data['max_workers']
        if 'logging' in data:
            kwargs['logging'] = dict(data['logging'] or {})
        return cls(**kwargs)

    def save(self, filepath: Union[str, Path]) -> None:
        """Write the configuration as YAML or JSON, chosen by file suffix"""
        filepath = Path(filepath)
        data = self.to_dict()
        if filepath.suffix in ['.yaml', '.yml']:
            with open(filepath, 'w') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        elif filepath.suffix == '.json':
            with open(filepath, 'w') as f:
                json.dump(data, f, indent=2)
        else:
            raise ValidationError(f"Unsupported file format: {filepath.suffix}",
                                  parameter='filepath')


def load_config(filepath: Union[str, Path]) -> VisibilityConfig:
    """
    Load a visibility configuration from a YAML or JSON file.

    The file format is determined from the file extension.

    Raises:
        ValidationError: If the file format is not supported
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError or json.JSONDecodeError: If file parsing fails
    """
    filepath = Path(filepath)

    if filepath.suffix in ['.yaml', '.yml']:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    elif filepath.suffix == '.json':
        with open(filepath) as f:
            data = json.load(f)
    else:
        raise ValidationError(f"Unsupported file format: {filepath.suffix}",
                              parameter='filepath')

    config = VisibilityConfig.from_dict(data)
    logger.info(f"Loaded configuration from {filepath}: "
                f"{', '.join(c.name for c in config.constellations)}")
    return config
