"""
Process-wide settings for population loading (constants + small helpers).
Units: AU for length, days for time, radians for angles.

These values are read-only while a group is being loaded; a load snapshots
them into a `TransformSettings` (see `minorbodies.algorithms.population.transform`).
"""
from __future__ import annotations

from typing import Optional

from minorbodies.errors import ConfigurationError

# Run
DEFAULT_RANDOM_SEED: Optional[int] = None
VALIDATE_ON_IMPORT = False

# Units
# Simulation length units per stored length unit. Catalog values are in AU
# and the simulation also works in AU, so the default is the identity.
LENGTH_UNIT_SCALE = 1.0

# Days by which the source catalog epoch precedes the simulation reference epoch.
EPOCH_OFFSET_DAYS = 6655.5

# Streaming population
DEFAULT_CAPACITY_CHUNK = 10_000

# Diagnostics
DEBUG_DIAGNOSTICS = False


def validate_settings() -> None:
    if not LENGTH_UNIT_SCALE > 0.0:
        raise ConfigurationError("LENGTH_UNIT_SCALE must be > 0")
    if EPOCH_OFFSET_DAYS != EPOCH_OFFSET_DAYS:
        raise ConfigurationError("EPOCH_OFFSET_DAYS must be a number")
    if DEFAULT_CAPACITY_CHUNK <= 0:
        raise ConfigurationError("DEFAULT_CAPACITY_CHUNK must be > 0")


if VALIDATE_ON_IMPORT:
    validate_settings()
