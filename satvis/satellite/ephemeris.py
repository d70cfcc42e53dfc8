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

"""Ephemeris storage and selection"""

import logging
from collections.abc import Iterable, Mapping
from typing import Optional

from ..core.data_structures import OrbitalElements, SatelliteEphemeris, ValidityWindow
from ..core.errors import DataError, NotFoundError, ValidationError
from ..core.time import to_utc

__all__ = ["EphemerisStore"]

logger = logging.getLogger(__name__)


def _window_offset(validity: ValidityWindow, t) -> float:
    """Seconds between ``t`` and the middle of ``validity``"""
    center = validity.valid_from + (validity.valid_to - validity.valid_from) / 2
    return abs((t - center).total_seconds())


def _issue_order(entry: SatelliteEphemeris):
    """Sort key: entries without a window first, then by window start"""
    if entry.validity is None:
        return (0, None)
    return (1, entry.validity.valid_from)


class EphemerisStore:
    """
    Read-only table of broadcast ephemerides keyed by satellite id.

    A satellite may hold several entries (successive broadcast issues); the
    entry whose validity window contains the requested time and is centred
    closest to it is selected. Entries are never modified after insertion,
    so concurrent readers do not need locking.

    Examples
    --------
    >>> store = EphemerisStore()
    >>> store.add('G01', elements, ValidityWindow(t0, t1))
    >>> elements, window = store.resolve('G01', t)
    """

    def __init__(self, entries: Optional[Iterable[SatelliteEphemeris]] = None):
        self._entries = {}  # satellite_id -> list of SatelliteEphemeris
        for entry in entries or ():
            self.add_entry(entry)

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> 'EphemerisStore':
        """Build a store from parsed records (see SatelliteEphemeris.from_record)"""
        return cls(SatelliteEphemeris.from_record(record) for record in records)

    def add(self, satellite_id: str, elements: Optional[OrbitalElements],
            validity: Optional[ValidityWindow], missing=()) -> SatelliteEphemeris:
        """Insert one ephemeris issue for a satellite"""
        entry = SatelliteEphemeris(satellite_id, elements, validity, tuple(missing))
        self.add_entry(entry)
        return entry

    def add_entry(self, entry: SatelliteEphemeris) -> None:
        if not entry.satellite_id:
            raise ValidationError("Ephemeris entry without satellite id", parameter='satellite_id')

        entries = self._entries.setdefault(entry.satellite_id, [])
        # Skip duplicates of the same issue
        for existing in entries:
            if existing.elements == entry.elements and existing.validity == entry.validity:
                return
        entries.append(entry)
        entries.sort(key=_issue_order)
        logger.debug(f"Added ephemeris for {entry.satellite_id} ({len(entries)} issues)")

    def __contains__(self, satellite_id) -> bool:
        return satellite_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def satellite_ids(self) -> list:
        return sorted(self._entries)

    def entries(self, satellite_id: str) -> list:
        """All stored issues for a satellite"""
        if satellite_id not in self._entries:
            raise NotFoundError(satellite_id)
        return list(self._entries[satellite_id])

    def select(self, satellite_id: str, t=None) -> SatelliteEphemeris:
        """
        Select the entry to use for ``satellite_id`` at ``t``.

        Complete entries (elements and validity window) are preferred. Among
        them, windows containing ``t`` win, then the smallest distance between
        ``t`` and the window centre. Without ``t`` the latest issue is used.

        Raises
        ------
        NotFoundError
            If the satellite has no entry
        """
        entries = self._entries.get(satellite_id)
        if not entries:
            raise NotFoundError(satellite_id)

        complete = [x for x in entries if x.elements is not None and x.validity is not None]
        if not complete:
            return entries[-1]
        if t is None:
            return complete[-1]

        t = to_utc(t)
        return min(complete, key=lambda x: (not x.validity.contains(t), _window_offset(x.validity, t)))

    def resolve(self, satellite_id: str, t=None) -> tuple:
        """
        Elements and validity window for ``satellite_id`` at ``t``.

        Raises
        ------
        NotFoundError
            If the satellite has no entry
        DataError
            If the selected entry lacks orbital parameters or a validity window
        """
        entry = self.select(satellite_id, t)
        if entry.elements is None:
            missing = list(entry.missing) or ['orbital_parameters']
            raise DataError(f"Satellite {satellite_id} is missing orbital parameters: "
                            f"{', '.join(missing)}", satellite_id=satellite_id, missing=missing)
        if entry.validity is None:
            raise DataError(f"Satellite {satellite_id} has no validity window",
                            satellite_id=satellite_id, missing=['validity'])
        return entry.elements, entry.validity
