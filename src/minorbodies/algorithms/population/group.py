"""
Columnar storage of one asteroid population.

Populations of 10^5 and more minor bodies are stored as a set of parallel
NumPy columns ("structure of arrays") instead of one object per asteroid. All
columns share a single row count and a single allocated capacity; every
mutating operation walks the group's column table, so the columns always grow,
shrink and fill in lockstep.

A group is created in one of two modes that select its element layout (see
`minorbodies.algorithms.population.layout`):

- orbiting: heliocentric (or planetocentric) Keplerian elements
- co-orbital: elements relative to a Lagrange point (Trojans and the like)

Rows arrive either by streaming appends into pre-allocated capacity or by
bulk loading of serialized blobs. Either way they hold raw catalog values
until `AsteroidGroup.transform` has been run over them.
"""

import logging

import numpy as np

from minorbodies import config
from minorbodies.algorithms.core.elements import TWO_PI
from minorbodies.algorithms.population import codec
from minorbodies.algorithms.population.diagnostics import PopulationDiagnostics
from minorbodies.algorithms.population.layout import (
    CATALOG_NUMBERS,
    ELEMENTS_2,
    ELEMENTS_3,
    ELEMENTS_4,
    MAGNITUDES,
    NAMES,
    RENDER_POSITIONS,
    UNNUMBERED,
    empty_column,
    layout_for,
    slots_for,
)
from minorbodies.algorithms.population.transform import (
    TransformSettings,
    row_apoapses,
    transform_co_orbital_rows,
    transform_orbiting_rows,
)
from minorbodies.errors import PreconditionViolation

logger = logging.getLogger(__name__)

_INT32 = np.iinfo(np.int32)


class AsteroidGroup:
    """
    Parallel-column store for a named asteroid population.

    Parameters
    ----------
    registry : SystemRegistry
        Registry resolving the primary and cluster point keys
    primary : str
        Registry key of the body the group orbits
    group_name : str
        Display and lookup name, e.g. "Main Belt"
    is_co_orbital : bool, optional
        Use the co-orbital element layout. Default is False.
    co_orbital_point : str, optional
        Registry key of the Lagrange point the group clusters around.
        Required for, and only allowed with, co-orbital groups.

    Attributes
    ----------
    count : int
        Number of populated rows; the length of every column
    capacity : int
        Number of allocated rows shared by all columns
    transformed_count : int
        Number of leading rows already prepared by `transform`
    max_apoapsis : float
        Largest apoapsis of all transformed rows (0 before any transform)

    Notes
    -----
    Columns returned by the accessors are read-only views truncated to
    `count`. They stay valid until the next mutating call.
    """

    def __init__(self, registry, primary, group_name, is_co_orbital=False, co_orbital_point=None):
        is_co_orbital = bool(is_co_orbital)
        if is_co_orbital and co_orbital_point is None:
            raise PreconditionViolation(f"Co-orbital group '{group_name}' needs a co-orbital point")
        if not is_co_orbital and co_orbital_point is not None:
            raise PreconditionViolation(f"Orbiting group '{group_name}' cannot have a co-orbital point")
        if not registry.has_body(primary):
            raise PreconditionViolation(f"Unknown primary '{primary}' for group '{group_name}'")
        if is_co_orbital and not registry.has_lagrange_point(co_orbital_point):
            raise PreconditionViolation(f"Unknown co-orbital point '{co_orbital_point}' for group '{group_name}'")

        self._registry = registry
        self._primary = primary
        self._co_orbital_point = co_orbital_point
        self._group_name = str(group_name)
        self._is_co_orbital = is_co_orbital
        self._layout = layout_for(is_co_orbital)
        self._slots = slots_for(is_co_orbital)

        self._columns = {}
        self._count = 0
        self._capacity = 0
        self._transformed_count = 0
        self._max_apoapsis = 0.0
        self._diagnostics = None
        self._allocate(0)

    # ------------------------------------------------------------------
    # Identity and sizes
    # ------------------------------------------------------------------

    @property
    def group_name(self):
        return self._group_name

    @property
    def is_co_orbital(self):
        return self._is_co_orbital

    @property
    def primary(self):
        """Registry key of the primary body."""
        return self._primary

    @property
    def co_orbital_point(self):
        """Registry key of the cluster point, None for orbiting groups."""
        return self._co_orbital_point

    @property
    def count(self):
        return self._count

    @property
    def capacity(self):
        return self._capacity

    @property
    def transformed_count(self):
        return self._transformed_count

    @property
    def max_apoapsis(self):
        return self._max_apoapsis

    @property
    def diagnostics(self):
        """Diagnostics of the last debug transform, if any."""
        return self._diagnostics

    @property
    def layout(self):
        return self._layout

    @property
    def column_names(self):
        return tuple(spec.name for spec in self._layout)

    @property
    def element_names(self):
        return tuple(self._slots)

    def __len__(self):
        return self._count

    def __repr__(self):
        mode = "co-orbital" if self._is_co_orbital else "orbiting"
        return (f"AsteroidGroup({self._group_name!r}, {mode}, count={self._count}, "
                f"capacity={self._capacity}, max_apoapsis={self._max_apoapsis:.6g})")

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def column(self, name):
        """
        Read-only view of column `name`, truncated to `count` rows.

        Raises
        ------
        PreconditionViolation
            If the column is not part of this group's layout
        """
        if name not in self._columns:
            raise PreconditionViolation(
                f"Group '{self._group_name}' has no column '{name}' (columns: {self.column_names})"
            )
        view = self._columns[name][:self._count]
        view.flags.writeable = False
        return view

    def element(self, name):
        """
        Read-only view of one named orbital element, e.g. "semi_major_axis".

        Raises
        ------
        PreconditionViolation
            If the element does not belong to this group's layout
        """
        if name not in self._slots:
            mode = "co-orbital" if self._is_co_orbital else "orbiting"
            raise PreconditionViolation(f"'{name}' is not an element of {mode} group '{self._group_name}'")
        column, slot = self._slots[name]
        return self.column(column)[:, slot]

    @property
    def names(self):
        return self.column(NAMES)

    @property
    def catalog_numbers(self):
        return self.column(CATALOG_NUMBERS)

    @property
    def magnitudes(self):
        return self.column(MAGNITUDES)

    @property
    def render_positions(self):
        return self.column(RENDER_POSITIONS)

    @property
    def elements_3(self):
        return self.column(ELEMENTS_3)

    @property
    def elements_4(self):
        return self.column(ELEMENTS_4)

    @property
    def elements_2(self):
        return self.column(ELEMENTS_2)

    def reference_distance(self):
        """Distance added to the stored distance element when computing apoapses."""
        if self._is_co_orbital:
            return self._registry.point_semi_major_axis(self._co_orbital_point)
        return 0.0

    def apoapses(self):
        """Per-row apoapsis distances computed from the stored elements."""
        return row_apoapses(self._columns[ELEMENTS_3], self._count, self.reference_distance())

    # ------------------------------------------------------------------
    # Streaming population
    # ------------------------------------------------------------------

    def _allocate(self, rows):
        self._columns = {spec.name: empty_column(spec, rows) for spec in self._layout}
        self._capacity = rows

    def expand_capacity(self, n):
        """
        Grow every column by `n` unpopulated rows.

        Existing rows are preserved. Appends may only write into capacity
        reserved this way.
        """
        n = int(n)
        if n < 0:
            raise PreconditionViolation(f"Cannot expand capacity by a negative amount ({n})")
        if n == 0:
            return
        for spec in self._layout:
            self._columns[spec.name] = np.concatenate((self._columns[spec.name], empty_column(spec, n)))
        self._capacity += n
        logger.debug(f"Group '{self._group_name}': capacity {self._capacity - n} -> {self._capacity}")

    def _ensure_capacity(self, rows):
        # At least double, so a run of bulk loads copies each row O(1) times
        if rows > self._capacity:
            self.expand_capacity(max(rows - self._capacity, self._capacity))

    @staticmethod
    def _as_values(values, size, label):
        try:
            row = np.asarray(values, dtype=np.float64).ravel()
        except (TypeError, ValueError) as e:
            raise PreconditionViolation(f"{label} must be numeric: {e}") from e
        if row.size != size:
            raise PreconditionViolation(f"{label} must have {size} values, got {row.size}")
        return row

    def _check_row(self, name, magnitude, catalog_number):
        if self._count >= self._capacity:
            raise PreconditionViolation(
                f"Group '{self._group_name}' is full ({self._capacity} rows); call expand_capacity first"
            )
        name = str(name)
        # Fixed-width unicode records drop trailing NULs, so such names would not survive a round trip
        if "\x00" in name:
            raise PreconditionViolation(f"Name {name!r} contains a NUL character")
        try:
            magnitude = float(magnitude)
        except (TypeError, ValueError) as e:
            raise PreconditionViolation(f"magnitude must be numeric: {e}") from e
        try:
            number = int(catalog_number)
        except (TypeError, ValueError, OverflowError) as e:
            raise PreconditionViolation(f"catalog_number must be an integer: {e}") from e
        if number != catalog_number:
            raise PreconditionViolation(f"catalog_number must be an integer, got {catalog_number!r}")
        if not _INT32.min <= number <= _INT32.max:
            raise PreconditionViolation(f"Catalog number {number} does not fit in 32 bits")
        return name, magnitude, number

    def _write_common(self, name, magnitude, catalog_number):
        row = self._count
        self._columns[NAMES][row] = name
        self._columns[CATALOG_NUMBERS][row] = catalog_number
        self._columns[MAGNITUDES][row] = magnitude
        self._columns[RENDER_POSITIONS][row] = 0.0
        return row

    def append_orbiting(self, name, magnitude, elements, catalog_number=UNNUMBERED):
        """
        Write one orbiting row at the cursor and advance it.

        Parameters
        ----------
        name : str
            Object designation
        magnitude : float
            Absolute magnitude H
        elements : array_like, 7 values
            (a, e, i, Ω, ω, M0, n) in catalog units; n = 0 if unknown
        catalog_number : int, optional
            Catalog number, -1 for unnumbered objects

        Raises
        ------
        PreconditionViolation
            On a co-orbital group, when the group is full, or on malformed
            arguments. Nothing is written in that case.
        """
        if self._is_co_orbital:
            raise PreconditionViolation(
                f"Group '{self._group_name}' is co-orbital; use append_co_orbital"
            )
        values = self._as_values(elements, 7, "elements")
        name, magnitude, catalog_number = self._check_row(name, magnitude, catalog_number)

        row = self._write_common(name, magnitude, catalog_number)
        self._columns[ELEMENTS_3][row] = values[:3]
        self._columns[ELEMENTS_4][row] = values[3:]
        self._count += 1

    def append_co_orbital(self, name, magnitude, shared_elements, co_orbital_elements,
                          catalog_number=UNNUMBERED):
        """
        Write one co-orbital row at the cursor and advance it.

        Parameters
        ----------
        name : str
            Object designation
        magnitude : float
            Absolute magnitude H
        shared_elements : array_like, 4 values
            (e, i, Ω, ω)
        co_orbital_elements : array_like, 4 values
            (d, D, f, θ0): radial offset from the cluster point, libration
            amplitude, libration rate and initial libration angle. θ0 is only
            a placeholder until `transform` assigns the working value.
        catalog_number : int, optional
            Catalog number, -1 for unnumbered objects

        Raises
        ------
        PreconditionViolation
            On an orbiting group, when the group is full, or on malformed
            arguments. Nothing is written in that case.
        """
        if not self._is_co_orbital:
            raise PreconditionViolation(
                f"Group '{self._group_name}' is orbiting; use append_orbiting"
            )
        shared = self._as_values(shared_elements, 4, "shared_elements")
        co = self._as_values(co_orbital_elements, 4, "co_orbital_elements")
        name, magnitude, catalog_number = self._check_row(name, magnitude, catalog_number)

        e, i, node, peri = shared
        d, amplitude, rate, theta0 = co
        row = self._write_common(name, magnitude, catalog_number)
        self._columns[ELEMENTS_3][row] = (d, e, i)
        self._columns[ELEMENTS_4][row] = (node, peri, amplitude, rate)
        self._columns[ELEMENTS_2][row] = (theta0, 0.0)
        self._count += 1

    def reset_for_reimport(self):
        """
        Drop every row and all reserved capacity.

        Name, mode and the primary/point keys are kept; the transform
        watermark and `max_apoapsis` start over.
        """
        self._allocate(0)
        self._count = 0
        self._transformed_count = 0
        self._max_apoapsis = 0.0
        self._diagnostics = None
        logger.debug(f"Group '{self._group_name}' reset for reimport")

    # ------------------------------------------------------------------
    # Binary persistence
    # ------------------------------------------------------------------

    def serialize(self):
        """Encode all populated rows as one blob (see `codec`)."""
        return codec.encode_columns(self._layout, self._columns, self._count)

    def deserialize(self, blob):
        """
        Append the rows of `blob` after the current rows.

        Several blobs may be loaded into one group in turn; capacity grows
        geometrically while doing so. The loaded rows are raw until
        `transform` runs.

        Returns
        -------
        int
            Number of rows loaded

        Raises
        ------
        BlobDecodeError
            If the blob does not match this group's layout. The group is not
            modified.
        """
        columns, rows = codec.decode_columns(self._layout, blob)
        start = self._count
        self._ensure_capacity(start + rows)
        for spec in self._layout:
            self._columns[spec.name][start:start + rows] = columns[spec.name]
        self._count = start + rows
        logger.debug(f"Group '{self._group_name}': loaded {rows} rows ({self._count} total)")
        return rows

    # ------------------------------------------------------------------
    # Orbital transform
    # ------------------------------------------------------------------

    def transform(self, settings=None, rng=None, diagnostics=None):
        """
        Prepare all rows added since the last transform.

        Orbiting rows get their semi-major axis scaled, missing mean motions
        derived from the primary's gravitational parameter, and their mean
        anomaly re-phased to the reference epoch. Co-orbital rows get their
        radial offset scaled and a random placeholder libration angle. Both
        update `max_apoapsis`.

        Rows already transformed are never touched again, so calling this
        twice without new rows does nothing.

        Parameters
        ----------
        settings : TransformSettings, optional
            Defaults to `TransformSettings.from_config()`
        rng : numpy.random.Generator, optional
            Source of the placeholder libration angles (co-orbital groups).
            Defaults to a generator seeded with `config.DEFAULT_RANDOM_SEED`.
        diagnostics : PopulationDiagnostics, optional
            Tallies to update. When omitted, a new one is created if
            `settings.debug` is set.

        Returns
        -------
        int
            Number of rows transformed
        """
        if settings is None:
            settings = TransformSettings.from_config()
        start, stop = self._transformed_count, self._count
        if start == stop:
            logger.info(f"Group '{self._group_name}': no untransformed rows, transform skipped")
            return 0

        if self._is_co_orbital:
            point_a = self._registry.point_semi_major_axis(self._co_orbital_point)
            if rng is None:
                rng = np.random.default_rng(config.DEFAULT_RANDOM_SEED)
            phases = rng.uniform(0.0, TWO_PI, size=stop - start)
            row_max = transform_co_orbital_rows(
                self._columns[ELEMENTS_3], self._columns[ELEMENTS_2], start, stop,
                settings.length_scale, point_a, phases,
            )
        else:
            mu = self._registry.gm(self._primary)
            row_max = transform_orbiting_rows(
                self._columns[ELEMENTS_3], self._columns[ELEMENTS_4], start, stop,
                settings.length_scale, mu, settings.epoch_offset_days,
            )

        self._max_apoapsis = max(self._max_apoapsis, float(row_max))
        self._transformed_count = stop

        if diagnostics is None and settings.debug:
            diagnostics = PopulationDiagnostics(self._group_name)
        if diagnostics is not None:
            diagnostics.update_group(self, start, stop)
            diagnostics.log_summary()
            self._diagnostics = diagnostics

        logger.info(f"Group '{self._group_name}': transformed {stop - start} rows, "
                    f"max apoapsis {self._max_apoapsis:.6g}")
        return stop - start
