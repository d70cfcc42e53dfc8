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
Error taxonomy for visibility computations.

Every failure raised by satvis derives from :class:`SatVisError`, so callers
can branch on the error kind instead of parsing message text:

- :class:`ValidationError` - a required input is missing or malformed
- :class:`NotFoundError` - a satellite identifier has no ephemeris or catalog entry
- :class:`DataError` - an ephemeris entry exists but lacks orbital parameters
- :class:`RangeError` - an evaluation time falls outside a validity window
- :class:`NumericalError` - an iterative solver failed to converge

The subclasses also derive from the matching builtin (``ValueError``,
``LookupError``, ``ArithmeticError``) so generic handlers keep working.
"""

from typing import Optional, Sequence


class SatVisError(Exception):
    """Base class of all satvis errors"""

    #: short machine-readable error kind
    kind = "error"

    def to_dict(self) -> dict:
        """Structured representation for transport layers"""
        data = {'error': self.kind, 'message': str(self)}
        for key, value in vars(self).items():
            if key.startswith('_') or value is None:
                continue
            data[key] = value if isinstance(value, (int, float, str, list)) else str(value)
        return data


class ValidationError(SatVisError, ValueError):
    """Required input missing or malformed"""

    kind = "validation"

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


class NotFoundError(SatVisError, LookupError):
    """Satellite identifier has no entry"""

    kind = "not_found"

    def __init__(self, satellite_id: str, what: str = "ephemeris"):
        super().__init__(f"No {what} entry for satellite {satellite_id}")
        self.satellite_id = satellite_id
        self.what = what


class DataError(SatVisError, ValueError):
    """Ephemeris entry lacks required orbital parameters"""

    kind = "data"

    def __init__(self, message: str, satellite_id: Optional[str] = None,
                 missing: Sequence[str] = ()):
        super().__init__(message)
        self.satellite_id = satellite_id
        self.missing = list(missing)


class RangeError(SatVisError, ValueError):
    """Evaluation time outside the validity window"""

    kind = "out_of_validity_range"

    def __init__(self, message: str, timestamp=None, valid_from=None, valid_to=None):
        super().__init__(message)
        self.timestamp = timestamp
        self.valid_from = valid_from
        self.valid_to = valid_to


class NumericalError(SatVisError, ArithmeticError):
    """Iterative solver failed to converge within its iteration cap"""

    kind = "non_convergence"

    def __init__(self, message: str, iterations: Optional[int] = None,
                 residual: Optional[float] = None):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual
