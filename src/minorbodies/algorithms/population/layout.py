"""
Column layouts of an asteroid group.

A group stores one attribute per column, every column indexed by row. The two
element sets (orbiting and co-orbital) are two fixed, ordered tables of
columns; a group picks one at construction and never mixes them. The table
order is also the order of records in a serialized blob.

Orbiting element columns:
    elements_3 = (a, e, i)
    elements_4 = (Ω, ω, M0, n)

Co-orbital element columns:
    elements_3 = (d, e, i)
    elements_4 = (Ω, ω, D, f)
    elements_2 = (θ0, reserved)
"""

from collections import namedtuple

import numpy as np

#: Description of one column. `width` is 0 for scalar (1-D) columns.
ColumnSpec = namedtuple("ColumnSpec", ["name", "dtype", "width"])

NAMES = "names"
CATALOG_NUMBERS = "catalog_numbers"
MAGNITUDES = "magnitudes"
RENDER_POSITIONS = "render_positions"
ELEMENTS_3 = "elements_3"
ELEMENTS_4 = "elements_4"
ELEMENTS_2 = "elements_2"

#: Catalog number of an unnumbered object
UNNUMBERED = -1

COMMON_COLUMNS = (
    ColumnSpec(NAMES, np.dtype(object), 0),
    ColumnSpec(CATALOG_NUMBERS, np.dtype(np.int32), 0),
    ColumnSpec(MAGNITUDES, np.dtype(np.float32), 0),
    ColumnSpec(RENDER_POSITIONS, np.dtype(np.float32), 3),
)

ORBITING_LAYOUT = COMMON_COLUMNS + (
    ColumnSpec(ELEMENTS_3, np.dtype(np.float32), 3),
    ColumnSpec(ELEMENTS_4, np.dtype(np.float32), 4),
)

CO_ORBITAL_LAYOUT = COMMON_COLUMNS + (
    ColumnSpec(ELEMENTS_3, np.dtype(np.float32), 3),
    ColumnSpec(ELEMENTS_4, np.dtype(np.float32), 4),
    ColumnSpec(ELEMENTS_2, np.dtype(np.float32), 2),
)

# Named element slots: attribute -> (column, slot)
ORBITING_SLOTS = {
    "semi_major_axis": (ELEMENTS_3, 0),
    "eccentricity": (ELEMENTS_3, 1),
    "inclination": (ELEMENTS_3, 2),
    "longitude_of_ascending_node": (ELEMENTS_4, 0),
    "argument_of_periapsis": (ELEMENTS_4, 1),
    "mean_anomaly_at_epoch": (ELEMENTS_4, 2),
    "mean_motion": (ELEMENTS_4, 3),
}

CO_ORBITAL_SLOTS = {
    "radial_offset": (ELEMENTS_3, 0),
    "eccentricity": (ELEMENTS_3, 1),
    "inclination": (ELEMENTS_3, 2),
    "longitude_of_ascending_node": (ELEMENTS_4, 0),
    "argument_of_periapsis": (ELEMENTS_4, 1),
    "libration_amplitude": (ELEMENTS_4, 2),
    "libration_rate": (ELEMENTS_4, 3),
    "libration_angle": (ELEMENTS_2, 0),
}


def layout_for(is_co_orbital):
    """Column table of the orbiting or co-orbital layout."""
    return CO_ORBITAL_LAYOUT if is_co_orbital else ORBITING_LAYOUT


def slots_for(is_co_orbital):
    return CO_ORBITAL_SLOTS if is_co_orbital else ORBITING_SLOTS


def empty_column(spec, rows):
    """Allocate a zero-filled column of `rows` rows (empty strings for names)."""
    if spec.dtype == np.dtype(object):
        column = np.empty(rows, dtype=object)
        column[:] = ""
        return column
    shape = (rows,) if spec.width == 0 else (rows, spec.width)
    return np.zeros(shape, dtype=spec.dtype)
