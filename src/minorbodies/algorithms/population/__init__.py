"""
Columnar storage, persistence and preparation of asteroid populations.

- group:       AsteroidGroup, the parallel-column store
- layout:      column tables of the orbiting and co-orbital element sets
- codec:       blob encoding of a group's columns
- transform:   one-shot unit scaling, epoch re-phasing and apoapsis tracking
- diagnostics: optional min/max tallies
- builder:     owner of named groups (generation and bulk loading)
"""

from .group import AsteroidGroup
from .layout import UNNUMBERED, ORBITING_LAYOUT, CO_ORBITAL_LAYOUT
from .transform import TransformSettings
from .diagnostics import PopulationDiagnostics
from .builder import PopulationBuilder

__all__ = [
    'AsteroidGroup',
    'UNNUMBERED',
    'ORBITING_LAYOUT',
    'CO_ORBITAL_LAYOUT',
    'TransformSettings',
    'PopulationDiagnostics',
    'PopulationBuilder',
]
