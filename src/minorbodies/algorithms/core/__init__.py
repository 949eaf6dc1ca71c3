"""
Core orbital-element relations shared by the population kernels.
"""

from .elements import (
    TWO_PI,
    mean_motion,
    apoapsis,
    wrap_two_pi,
    wrap_two_pi_f32,
    correct_mean_anomaly,
)

__all__ = [
    'TWO_PI',
    'mean_motion',
    'apoapsis',
    'wrap_two_pi',
    'wrap_two_pi_f32',
    'correct_mean_anomaly',
]
