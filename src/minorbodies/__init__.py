"""
Compact columnar storage and preparation of minor-body populations.
"""

from .errors import PopulationError, PreconditionViolation, BlobDecodeError, ConfigurationError
from .algorithms.population import AsteroidGroup, PopulationBuilder, TransformSettings
from .models import Body, SystemRegistry, create_lagrange_point, lagrange_point_for

__version__ = "0.1.0"

__all__ = [
    'PopulationError',
    'PreconditionViolation',
    'BlobDecodeError',
    'ConfigurationError',
    'AsteroidGroup',
    'PopulationBuilder',
    'TransformSettings',
    'Body',
    'SystemRegistry',
    'create_lagrange_point',
    'lagrange_point_for',
]
