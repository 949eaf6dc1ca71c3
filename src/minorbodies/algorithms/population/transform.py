"""
One-shot preparation of raw orbital elements.

Persisted and generated populations store their elements in catalog units and
at the catalog epoch. Before a group is handed to the simulation, every new
row goes through a single pass that

1. scales the distance element (semi-major axis or radial offset) into
   simulation length units,
2. for orbiting rows, derives missing mean motions from the two-body relation
   and re-phases the mean anomaly to the simulation reference epoch,
3. for co-orbital rows, draws a placeholder initial libration angle,
4. tracks the largest apoapsis distance of the group.

The per-row work is done by Numba kernels operating in place on the group's
float32 element columns. Arithmetic is carried out in float64 and the results
are rounded once when written back.
"""

from dataclasses import dataclass

import numba
import numpy as np

from minorbodies import config
from minorbodies.algorithms.core.elements import (
    apoapsis,
    correct_mean_anomaly,
    mean_motion,
    wrap_two_pi_f32,
)


@dataclass(frozen=True)
class TransformSettings:
    """
    Snapshot of the process-wide settings used by one transform pass.

    Attributes
    ----------
    length_scale : float
        Simulation length units per stored length unit
    epoch_offset_days : float
        Days by which the catalog epoch precedes the simulation reference epoch
    debug : bool
        Collect per-column min/max diagnostics while transforming
    """
    length_scale: float = 1.0
    epoch_offset_days: float = 0.0
    debug: bool = False

    @classmethod
    def from_config(cls, **overrides):
        """Build settings from the current values in `minorbodies.config`."""
        values = dict(
            length_scale=config.LENGTH_UNIT_SCALE,
            epoch_offset_days=config.EPOCH_OFFSET_DAYS,
            debug=config.DEBUG_DIAGNOSTICS,
        )
        values.update(overrides)
        return cls(**values)


@numba.njit(cache=True, error_model='numpy')
def transform_orbiting_rows(elements_3, elements_4, start, stop, length_scale, mu, epoch_offset_days):
    """
    Prepare rows [start, stop) of an orbiting group in place.

    Parameters
    ----------
    elements_3 : ndarray, shape (N, 3), float32
        (a, e, i) per row
    elements_4 : ndarray, shape (N, 4), float32
        (Ω, ω, M0, n) per row
    start, stop : int
        Row range to transform
    length_scale : float
        Factor applied to the semi-major axis
    mu : float
        Gravitational parameter of the primary, in scaled length units
    epoch_offset_days : float
        Days from the catalog epoch to the reference epoch

    Returns
    -------
    float
        Largest apoapsis among the transformed rows (0 if none is larger)
    """
    max_apo = 0.0
    for i in range(start, stop):
        elements_3[i, 0] = elements_3[i, 0] * length_scale
        a = np.float64(elements_3[i, 0])

        # n == 0 marks a mean motion the catalog did not provide
        if elements_4[i, 3] == 0.0:
            elements_4[i, 3] = mean_motion(mu, a)
        n = np.float64(elements_4[i, 3])

        m0 = np.float64(elements_4[i, 2])
        elements_4[i, 2] = wrap_two_pi_f32(correct_mean_anomaly(m0, n, epoch_offset_days))

        apo = apoapsis(a, np.float64(elements_3[i, 1]))
        if apo > max_apo:
            max_apo = apo
    return max_apo


@numba.njit(cache=True, error_model='numpy')
def transform_co_orbital_rows(elements_3, elements_2, start, stop, length_scale, point_semi_major_axis, phases):
    """
    Prepare rows [start, stop) of a co-orbital group in place.

    The initial libration angle is not derivable from the stored elements, so
    each row receives the matching entry of `phases` (uniform draws in
    [0, 2π)) as a stand-in. The apoapsis is approximated by treating the
    cluster point's distance plus the radial offset as a semi-major axis.

    Parameters
    ----------
    elements_3 : ndarray, shape (N, 3), float32
        (d, e, i) per row
    elements_2 : ndarray, shape (N, 2), float32
        (θ0, reserved) per row
    start, stop : int
        Row range to transform
    length_scale : float
        Factor applied to the radial offset
    point_semi_major_axis : float
        Distance of the cluster point from the primary, in scaled length units
    phases : ndarray, shape (stop - start,)
        Placeholder libration angles

    Returns
    -------
    float
        Largest apoapsis among the transformed rows (0 if none is larger)
    """
    max_apo = 0.0
    for i in range(start, stop):
        elements_3[i, 0] = elements_3[i, 0] * length_scale
        d = np.float64(elements_3[i, 0])

        elements_2[i, 0] = wrap_two_pi_f32(phases[i - start])

        apo = apoapsis(point_semi_major_axis + d, np.float64(elements_3[i, 1]))
        if apo > max_apo:
            max_apo = apo
    return max_apo


def row_apoapses(elements_3, count, reference_distance=0.0):
    """
    Per-row apoapsis distances, as tracked by the transform kernels.

    `reference_distance` is added to the distance element (the cluster point's
    semi-major axis for co-orbital groups, 0 for orbiting ones).
    """
    distance = reference_distance + elements_3[:count, 0].astype(np.float64)
    return distance * (1.0 + elements_3[:count, 1].astype(np.float64))
