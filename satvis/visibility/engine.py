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
Visibility engine: satellite positions, occlusion and link budget per epoch.

For every tracked satellite the engine

1. propagates the broadcast ephemeris to the epoch,
2. places the aircraft antenna in ECEF,
3. tests the line of sight against the Earth,
4. computes received power and C/N0 for unoccluded satellites.

Errors raised by any step (unknown satellite, incomplete ephemeris, epoch
outside the validity window, non-convergence) propagate to the caller.

Examples
--------
>>> engine = VisibilityEngine(read_nav('BRDC00IGS_R_20250090000_01D_MN.rnx'))
>>> results = engine.compute_visibility(
...     datetime(2025, 1, 9, 12, 0, tzinfo=timezone.utc), ['C23', 'G05'],
...     GeodeticPosition(116.3974, 39.9093, 10000.0), AttitudeEuler(0.0, 2.0, 90.0))
>>> [(r.satellite_id, r.occluded, r.signal_strength_dbm) for r in results]
"""

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from typing import Optional

import numpy as np
import pandas as pd

from ..config import VisibilityConfig
from ..coordinate.converter import body_to_ecef, ecef_to_lla, lla_to_ecef
from ..core.data_structures import ECEFPosition, GeodeticPosition, VisibilityResult, to_ecef_array
from ..core.errors import ValidationError
from ..core.time import to_utc
from ..geometry.elevation import compute_azimuth_elevation
from ..satellite.ephemeris import EphemerisStore
from ..satellite.satellite_position import propagate_satellite
from .link_budget import carrier_to_noise_density, signal_strength
from .occlusion import is_occluded

__all__ = ["VisibilityEngine", "results_to_dataframe"]

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ['satellite_id', 'timestamp', 'occluded', 'signal_strength_dbm',
                  'elevation_deg', 'azimuth_deg', 'cn0_dbhz', 'range_m']


class VisibilityEngine:
    """
    Satellite visibility for an airborne receiver.

    Parameters
    ----------
    ephemerides : EphemerisStore or iterable of records
        Broadcast ephemerides; records are parsed with
        ``EphemerisStore.from_records``
    config : VisibilityConfig, optional
        Satellite catalog, antenna and thresholds; defaults if omitted
    max_workers : int, optional
        Worker threads used to evaluate satellites of one epoch. Overrides
        ``config.max_workers``; 1 evaluates sequentially.
    """

    def __init__(self, ephemerides, config: Optional[VisibilityConfig] = None,
                 max_workers: Optional[int] = None):
        if ephemerides is None:
            raise ValidationError("Missing ephemerides", parameter='ephemerides')
        if not isinstance(ephemerides, EphemerisStore):
            ephemerides = EphemerisStore.from_records(ephemerides)

        self.ephemerides = ephemerides
        self.config = config if config is not None else VisibilityConfig()
        self.max_workers = int(max_workers) if max_workers is not None else self.config.max_workers
        if self.max_workers < 1:
            raise ValidationError(f"max_workers must be at least 1: {self.max_workers}",
                                  parameter='max_workers')

        logger.debug(f"Visibility engine: {len(self.ephemerides)} satellites, "
                     f"{self.max_workers} worker(s)")

    def receiver_position(self, aircraft_position, attitude=None) -> ECEFPosition:
        """
        ECEF position of the receiving antenna.

        ``aircraft_position`` is a GeodeticPosition (or mapping with
        longitude/latitude/altitude), or an ECEF position given as
        ECEFPosition, x/y/z mapping or three-element array. With an
        attitude the configured antenna offset is rotated from the body frame
        into ECEF; without one the aircraft position is used directly.
        """
        if aircraft_position is None:
            raise ValidationError("Missing parameter: aircraft_position",
                                  parameter='aircraft_position')

        is_geodetic = isinstance(aircraft_position, GeodeticPosition) or (
            isinstance(aircraft_position, Mapping) and 'longitude' in aircraft_position)

        if is_geodetic:
            if attitude is None:
                return lla_to_ecef(aircraft_position)
            geodetic = aircraft_position
        else:
            ecef = ECEFPosition.from_array(to_ecef_array(aircraft_position, 'aircraft_position'))
            if attitude is None:
                return ecef
            geodetic = ecef_to_lla(ecef)

        return body_to_ecef(geodetic, attitude, self.config.antenna.offset)

    def evaluate(self, satellite_id: str, epoch, receiver_ecef) -> VisibilityResult:
        """
        Visibility of one satellite from a fixed receiver position.

        Raises
        ------
        NotFoundError
            If the satellite has no ephemeris or catalog entry
        DataError
            If its ephemeris lacks orbital parameters
        RangeError
            If ``epoch`` is outside the ephemeris validity window
        NumericalError
            If the orbit or geodetic iteration does not converge
        """
        epoch = to_utc(epoch)
        radio = self.config.radio_for(satellite_id)
        rcv = to_ecef_array(receiver_ecef, 'receiver_ecef')

        sat = propagate_satellite(self.ephemerides, satellite_id, epoch).as_array()
        azimuth, elevation = compute_azimuth_elevation(sat, rcv)
        occluded = is_occluded(rcv, sat, self.config.earth_radius_m)

        power = None
        cn0 = None
        if not occluded:
            power = signal_strength(rcv, sat, radio.transmit_power_dbw, radio.frequency_hz,
                                    radio.antenna_gain_dbi, self.config.antenna.gain_dbi)
            cn0 = carrier_to_noise_density(power, self.config.signal.noise_temperature_k)

        return VisibilityResult(
            satellite_id=satellite_id,
            timestamp=epoch,
            occluded=occluded,
            signal_strength_dbm=power,
            elevation_deg=elevation,
            azimuth_deg=azimuth,
            cn0_dbhz=cn0,
            range_m=float(np.linalg.norm(sat - rcv)),
        )

    def compute_visibility(self, epoch, satellite_ids: Iterable[str], aircraft_position,
                           attitude=None) -> list:
        """
        Visibility of every tracked satellite at one epoch.

        Parameters
        ----------
        epoch : datetime
            Evaluation instant (UTC)
        satellite_ids : iterable of str
            Tracked satellites, e.g. ['C01', 'G05']
        aircraft_position : GeodeticPosition or ECEFPosition
            Aircraft reference point
        attitude : AttitudeEuler, optional
            Aircraft attitude; enables the antenna lever arm

        Returns
        -------
        list[VisibilityResult]
            Sorted by (satellite_id, timestamp)
        """
        epoch = to_utc(epoch)
        if satellite_ids is None:
            raise ValidationError("Missing parameter: satellite_ids", parameter='satellite_ids')
        satellite_ids = list(satellite_ids)
        receiver = self.receiver_position(aircraft_position, attitude)

        if self.max_workers > 1 and len(satellite_ids) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(
                    lambda sid: self.evaluate(sid, epoch, receiver), satellite_ids))
        else:
            results = [self.evaluate(sid, epoch, receiver) for sid in satellite_ids]

        results.sort(key=lambda r: r.key)
        logger.debug(f"{epoch.isoformat()}: {sum(r.visible for r in results)}/{len(results)} "
                     f"satellites unoccluded")
        return results

    def compute_series(self, states: Iterable, satellite_ids: Iterable[str]) -> list:
        """
        Visibility along a trajectory.

        ``states`` are TrajectoryState objects; each is evaluated with its
        own position and attitude. Results are sorted by (satellite_id,
        timestamp).
        """
        if states is None:
            raise ValidationError("Missing parameter: states", parameter='states')
        if satellite_ids is None:
            raise ValidationError("Missing parameter: satellite_ids", parameter='satellite_ids')
        satellite_ids = list(satellite_ids)

        results = []
        n_states = 0
        for state in states:
            results.extend(self.compute_visibility(state.timestamp, satellite_ids,
                                                   state.position, state.attitude))
            n_states += 1

        results.sort(key=lambda r: r.key)
        logger.info(f"Computed visibility for {len(satellite_ids)} satellites "
                    f"over {n_states} epochs")
        return results

    def is_trackable(self, result: VisibilityResult) -> bool:
        """Unoccluded with power and C/N0 above the configured thresholds"""
        if result.occluded or result.signal_strength_dbm is None:
            return False
        cn0 = result.cn0_dbhz
        if cn0 is None:
            cn0 = carrier_to_noise_density(result.signal_strength_dbm,
                                           self.config.signal.noise_temperature_k)
        signal = self.config.signal
        return (result.signal_strength_dbm >= signal.minimum_strength_dbm
                and cn0 >= signal.quality_threshold_dbhz)


def results_to_dataframe(results: Iterable[VisibilityResult]) -> pd.DataFrame:
    """One row per result, columns named after the VisibilityResult fields"""
    df = pd.DataFrame([asdict(r) for r in results], columns=RESULT_COLUMNS)
    if not df.empty:
        df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
    return df
