"""
Demonstration: build a Sun/Jupiter system, generate a Main Belt and the
Jupiter L4 Trojans, persist both groups, reload them and plot the result.

Run with ``python -m minorbodies.main``.
"""

import logging
import tempfile
from pathlib import Path

import numpy as np

from minorbodies.algorithms.population import PopulationBuilder
from minorbodies.logging_config import setup_logging
from minorbodies.models import Body, SystemRegistry, lagrange_point_for
from minorbodies.utils.constants import Constants
from minorbodies.utils.plot import plot_apoapsis_histogram, plot_population

logger = logging.getLogger(__name__)


def solar_system_registry():
    """Registry holding the Sun, Jupiter and Jupiter's L4 and L5 points."""
    registry = SystemRegistry()
    sun = Body("Sun", Constants.get_gm("sun"), Constants.get_radius("sun"), 0.0)
    jupiter = Body("Jupiter", Constants.get_gm("jupiter"), Constants.get_radius("jupiter"),
                   Constants.get_semi_major_axis("jupiter"))
    registry.add_body(sun)
    registry.add_body(jupiter)
    registry.add_lagrange_point("Jupiter L4", lagrange_point_for(sun, jupiter, 4))
    registry.add_lagrange_point("Jupiter L5", lagrange_point_for(sun, jupiter, 5))
    return registry


def main(main_belt_count=20_000, trojan_count=2_000, seed=42, show=True):
    registry = solar_system_registry()
    rng = np.random.default_rng(seed)

    builder = PopulationBuilder(registry)
    # Raw catalogs, as a catalog compiler would persist them
    builder.generate_main_belt("Main Belt", "Sun", main_belt_count, rng=rng, transform=False)
    builder.generate_trojans("Jupiter Trojans (L4)", "Sun", "Jupiter L4", trojan_count, rng=rng, transform=False)

    # Loading transforms each group exactly once
    reloaded = PopulationBuilder(registry)
    with tempfile.TemporaryDirectory() as tmp:
        for group in builder:
            path = builder.save_group(group.group_name, Path(tmp) / f"{group.group_name}.npyblob")
            reloaded.load_group_files(group.group_name + " (reloaded)", group.primary, [path],
                                      is_co_orbital=group.is_co_orbital,
                                      co_orbital_point=group.co_orbital_point, rng=rng)

    for group in reloaded:
        logger.info(repr(group))
        plot_population(group, show=show)
        plot_apoapsis_histogram(group, show=show)

    return builder, reloaded


if __name__ == "__main__":
    setup_logging()
    main()
