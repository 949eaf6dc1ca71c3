import numpy as np
import pytest

from minorbodies.algorithms.population import AsteroidGroup, TransformSettings
from minorbodies.models import Body, L4Point, SystemRegistry


@pytest.fixture
def registry():
    registry = SystemRegistry()
    registry.add_body(Body("Sun", 1.0, 0.0, 0.0))
    registry.add_lagrange_point("L4", L4Point(0.001, 5.0))
    return registry


@pytest.fixture
def orbiting(registry):
    return AsteroidGroup(registry, "Sun", "Main Belt")


@pytest.fixture
def co_orbital(registry):
    return AsteroidGroup(registry, "Sun", "Trojans (L4)", is_co_orbital=True, co_orbital_point="L4")


@pytest.fixture
def unit_settings():
    return TransformSettings(length_scale=1.0, epoch_offset_days=0.0)


def _fill_orbiting(group, rows, seed=0):
    """Append `rows` random orbiting rows, returning the raw element array."""
    rng = np.random.default_rng(seed)
    elements = np.column_stack([
        rng.uniform(2.0, 3.5, rows),
        rng.uniform(0.0, 0.3, rows),
        rng.uniform(0.0, 0.5, rows),
        rng.uniform(0.0, 2 * np.pi, (rows, 3)),
        np.zeros(rows),
    ])
    group.expand_capacity(rows)
    for j in range(rows):
        group.append_orbiting(f"ast {j}", 10.0 + j % 7, elements[j], catalog_number=j + 1)
    return elements


def _fill_co_orbital(group, rows, seed=0):
    rng = np.random.default_rng(seed)
    group.expand_capacity(rows)
    for j in range(rows):
        shared = (rng.uniform(0.0, 0.15), rng.uniform(0.0, 0.4), rng.uniform(0, 6), rng.uniform(0, 6))
        co = (rng.normal(0.0, 0.05), rng.uniform(0.1, 0.6), 1e-4, 0.0)
        group.append_co_orbital(f"trojan {j}", 12.0, shared, co)


@pytest.fixture
def fill_orbiting():
    return _fill_orbiting


@pytest.fixture
def fill_co_orbital():
    return _fill_co_orbital
