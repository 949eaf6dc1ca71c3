"""
Scalar orbital-element relations used when preparing stored populations.

These are small two-body identities compiled with Numba so they can be called
from the per-row population kernels as well as from plain Python:

- mean motion from the gravitational parameter and semi-major axis
- apoapsis distance from semi-major axis and eccentricity
- wrapping angles into [0, 2π)
- re-phasing a mean anomaly from one epoch to another

None of these functions validate their inputs. Degenerate elements (a <= 0,
e < 0, NaN) produce NaN or meaningless results rather than exceptions.
"""

import math

import numba
import numpy as np

TWO_PI = 2.0 * math.pi


@numba.njit(cache=True, error_model='numpy')
def mean_motion(mu, a):
    """
    Two-body mean motion n = sqrt(mu / a^3).

    Parameters
    ----------
    mu : float
        Gravitational parameter of the primary
    a : float
        Semi-major axis, in the length unit of `mu`

    Returns
    -------
    float
        Mean motion in radians per time unit of `mu`
    """
    return math.sqrt(mu / (a * a * a))


@numba.njit(cache=True, error_model='numpy')
def apoapsis(a, e):
    """Farthest distance from the focus, a (1 + e)."""
    return a * (1.0 + e)


@numba.njit(cache=True, error_model='numpy')
def wrap_two_pi(angle):
    """
    Wrap an angle into [0, 2π).

    Python float modulo already has the sign of the divisor, so only the
    rounding case where a tiny negative input lands exactly on 2π needs care.
    """
    wrapped = angle % TWO_PI
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


@numba.njit(cache=True, error_model='numpy')
def wrap_two_pi_f32(angle):
    """
    Wrap an angle into [0, 2π) such that it stays in range once stored as float32.

    float32 rounding can carry values just below 2π up to a representable
    number above it; those are folded back to 0.
    """
    wrapped = wrap_two_pi(angle)
    if np.float32(wrapped) >= TWO_PI:
        wrapped = 0.0
    return wrapped


@numba.njit(cache=True, error_model='numpy')
def correct_mean_anomaly(m0, n, epoch_offset_days):
    """
    Re-phase a mean anomaly to a later reference epoch.

    Parameters
    ----------
    m0 : float
        Mean anomaly at the source epoch (rad)
    n : float
        Mean motion (rad / day)
    epoch_offset_days : float
        Days by which the source epoch precedes the reference epoch

    Returns
    -------
    float
        (m0 - n * epoch_offset_days) mod 2π, in [0, 2π)
    """
    return wrap_two_pi(m0 - n * epoch_offset_days)
