"""
Algorithms for large minor-body populations.

This package is organized into two submodules:

- core:       Scalar orbital-element relations (Numba compiled)
- population: Columnar group storage, blob persistence and the one-shot
              orbital transform
"""

from .core.elements import mean_motion, apoapsis, wrap_two_pi, correct_mean_anomaly
from .population import (
    AsteroidGroup,
    PopulationBuilder,
    PopulationDiagnostics,
    TransformSettings,
)

__all__ = [
    # Core relations
    'mean_motion',
    'apoapsis',
    'wrap_two_pi',
    'correct_mean_anomaly',

    # Populations
    'AsteroidGroup',
    'PopulationBuilder',
    'PopulationDiagnostics',
    'TransformSettings',
]
