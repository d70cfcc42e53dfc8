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
Kepler's equation solver.

Solves ``E - e*sin(E) = M`` for the eccentric anomaly ``E`` with
Newton-Raphson iteration started at ``E0 = M``, each step limited to one
radian so that high eccentricities cannot throw the iterate out of range.
The iteration stops when the Newton step falls below the tolerance; reaching
the iteration cap first is reported as
:class:`~satvis.core.errors.NumericalError` rather than returning the last
iterate.
"""

import math

import numpy as np
from numba import njit

from ..core.constants import KEPLER_MAX_ITER, KEPLER_TOL
from ..core.errors import NumericalError, ValidationError

__all__ = ["solve_kepler"]


@njit(cache=True)
def _kepler_newton(M, e, tol, max_iter):
    """Newton-Raphson kernel returning (E, iterations, converged)"""
    E = M
    for k in range(max_iter):
        step = (E - e * np.sin(E) - M) / (1.0 - e * np.cos(E))
        # near-flat derivative at high e, limit the jump to one radian
        step = max(-1.0, min(1.0, step))
        E -= step
        if abs(step) < tol:
            return E, k + 1, True
    return E, max_iter, False


def solve_kepler(M: float, e: float, tol: float = KEPLER_TOL,
                 max_iter: int = KEPLER_MAX_ITER) -> float:
    """
    Solve Kepler's equation for the eccentric anomaly.

    Parameters
    ----------
    M : float
        Mean anomaly (rad)
    e : float
        Eccentricity, 0 <= e < 1
    tol : float, optional
        Convergence tolerance on the Newton step (rad), default 1e-12
    max_iter : int, optional
        Iteration cap, default 100

    Returns
    -------
    float
        Eccentric anomaly E (rad)

    Raises
    ------
    ValidationError
        If ``e`` is outside [0, 1) or an input is not finite
    NumericalError
        If the iteration cap is reached without meeting ``tol``

    Examples
    --------
    >>> E = solve_kepler(1.0, 0.1)
    >>> abs(E - 0.1 * np.sin(E) - 1.0) < 1e-12
    True
    """
    M = float(M)
    e = float(e)
    if not (math.isfinite(M) and math.isfinite(e)):
        raise ValidationError(f"Kepler inputs must be finite: M={M}, e={e}")
    if not 0.0 <= e < 1.0:
        raise ValidationError(f"Eccentricity out of range [0, 1): {e}", parameter='e')
    if max_iter < 1:
        raise ValidationError(f"Iteration cap must be positive: {max_iter}", parameter='max_iter')

    E, iterations, converged = _kepler_newton(M, e, float(tol), int(max_iter))
    if not converged:
        residual = E - e * math.sin(E) - M
        raise NumericalError(
            f"Kepler iteration did not converge within {iterations} iterations "
            f"(M={M}, e={e}, residual={residual:.3e})",
            iterations=iterations, residual=residual)
    return E
