"""
Population builder: creates, fills and owns asteroid groups.

The builder is the owner of every group it makes. It offers the two ways a
group gets its rows:

- procedural generation, streaming synthetic elements into the group chunk by
  chunk through `expand_capacity` and the append methods;
- bulk loading of persisted blobs through `deserialize`.

Loaded groups always get exactly one transform pass before they are
registered; generated groups too, unless the caller asks for the raw rows
(which is what a catalog compiler persists). A group whose load fails is
never registered, so no half-loaded population reaches the renderer or the
query code.
"""

import logging
from pathlib import Path

import numpy as np
from tqdm import tqdm

from minorbodies import config
from minorbodies.algorithms.core.elements import TWO_PI
from minorbodies.algorithms.population.group import AsteroidGroup
from minorbodies.errors import BlobDecodeError, PopulationError, PreconditionViolation

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25


class PopulationBuilder:
    """
    Registry of named asteroid groups.

    Parameters
    ----------
    registry : SystemRegistry
        Bodies and Lagrange points the groups refer to
    capacity_chunk : int, optional
        Rows reserved at a time while streaming generated rows.
        Defaults to `config.DEFAULT_CAPACITY_CHUNK`.
    """

    def __init__(self, registry, capacity_chunk=None):
        self.registry = registry
        self.capacity_chunk = config.DEFAULT_CAPACITY_CHUNK if capacity_chunk is None else int(capacity_chunk)
        if self.capacity_chunk <= 0:
            raise PreconditionViolation("capacity_chunk must be > 0")
        self._groups = {}

    def __contains__(self, name):
        return name in self._groups

    def __iter__(self):
        return iter(self._groups.values())

    def __len__(self):
        return len(self._groups)

    def group(self, name):
        try:
            return self._groups[name]
        except KeyError:
            raise PreconditionViolation(f"No group named '{name}'") from None

    def _check_new(self, name):
        if name in self._groups:
            raise PreconditionViolation(f"A group named '{name}' already exists")

    def _register(self, group):
        self._check_new(group.group_name)
        self._groups[group.group_name] = group
        return group

    def discard(self, name):
        """Drop group `name` if present; returns the dropped group or None."""
        group = self._groups.pop(name, None)
        if group is not None:
            logger.info(f"Discarded group '{name}' ({group.count} rows)")
        return group

    # ------------------------------------------------------------------
    # Bulk loading
    # ------------------------------------------------------------------

    def load_group(self, name, primary, blobs, is_co_orbital=False, co_orbital_point=None,
                   settings=None, rng=None):
        """
        Create a group from persisted blobs, transform it once and register it.

        Parameters
        ----------
        name : str
            Group name; must not be registered yet
        primary : str
            Registry key of the primary
        blobs : iterable of bytes
            Blobs produced by `AsteroidGroup.serialize`, loaded in order
        is_co_orbital : bool, optional
        co_orbital_point : str, optional
        settings : TransformSettings, optional
        rng : numpy.random.Generator, optional

        Returns
        -------
        AsteroidGroup

        Raises
        ------
        BlobDecodeError
            If any blob fails to decode; no group is registered
        PreconditionViolation
            If the transform cannot resolve the primary or cluster point;
            no group is registered
        """
        self._check_new(name)
        group = AsteroidGroup(self.registry, primary, name, is_co_orbital, co_orbital_point)
        self._fill_from_blobs(group, blobs)
        group.transform(settings=settings, rng=rng)
        return self._register(group)

    def reload_group(self, name, blobs, settings=None, rng=None):
        """
        Replace the rows of a registered group with the rows of `blobs`.

        If loading or transforming fails, the group is discarded before the
        error propagates, so no raw or half-loaded rows stay registered.
        """
        group = self.group(name)
        group.reset_for_reimport()
        try:
            self._fill_from_blobs(group, blobs)
            group.transform(settings=settings, rng=rng)
        except PopulationError:
            self.discard(name)
            raise
        return group

    def _fill_from_blobs(self, group, blobs):
        for index, blob in enumerate(blobs):
            try:
                group.deserialize(blob)
            except BlobDecodeError as e:
                logger.error(f"Loading group '{group.group_name}' failed at blob {index}: {e}")
                raise
        logger.info(f"Loaded {group.count} rows into group '{group.group_name}'")

    def save_group(self, name, path):
        """Write the blob of group `name` to `path` and return the path."""
        path = Path(path)
        path.write_bytes(self.group(name).serialize())
        logger.info(f"Saved group '{name}' to {path}")
        return path

    def load_group_files(self, name, primary, paths, **kwargs):
        """`load_group` with blobs read from files."""
        blobs = [Path(path).read_bytes() for path in paths]
        return self.load_group(name, primary, blobs, **kwargs)

    # ------------------------------------------------------------------
    # Procedural generation
    # ------------------------------------------------------------------

    def _reserve(self, group, remaining):
        if group.count == group.capacity:
            group.expand_capacity(min(self.capacity_chunk, remaining))

    def generate_main_belt(self, name, primary, count, rng=None, a_range=(2.1, 3.3), e_max=0.3,
                           i_sigma=np.radians(8.0), magnitude_range=(11.0, 19.0),
                           settings=None, progress=True, transform=True):
        """
        Stream `count` synthetic Main Belt asteroids into a new orbiting group.

        Semi-major axes and magnitudes are uniform in their ranges,
        eccentricities uniform in [0, e_max), inclinations half-normal with
        width `i_sigma`, angles uniform. Mean motions are left at 0 and derived
        by the transform.

        Returns
        -------
        AsteroidGroup
            The registered group, transformed unless `transform` is False (raw
            groups are what a catalog compiler persists)
        """
        self._check_new(name)
        rng = np.random.default_rng(config.DEFAULT_RANDOM_SEED) if rng is None else rng
        group = AsteroidGroup(self.registry, primary, name)

        a = rng.uniform(a_range[0], a_range[1], count)
        e = rng.uniform(0.0, e_max, count)
        inc = np.abs(rng.normal(0.0, i_sigma, count))
        angles = rng.uniform(0.0, TWO_PI, (count, 3))
        magnitudes = rng.uniform(magnitude_range[0], magnitude_range[1], count)

        for j in tqdm(range(count), desc=f"Generating {name}", disable=not progress):
            self._reserve(group, count - j)
            node, peri, m0 = angles[j]
            group.append_orbiting(f"{name} {j + 1}", magnitudes[j], (a[j], e[j], inc[j], node, peri, m0, 0.0))

        if transform:
            group.transform(settings=settings, rng=rng)
        return self._register(group)

    def generate_trojans(self, name, primary, co_orbital_point, count, rng=None, d_sigma=0.05,
                         e_max=0.15, i_sigma=np.radians(12.0), amplitude_range=(np.radians(5.0), np.radians(35.0)),
                         libration_period_years=150.0, magnitude_range=(9.0, 17.0),
                         settings=None, progress=True, transform=True):
        """
        Stream `count` synthetic Trojans into a new co-orbital group.

        Radial offsets are normal with width `d_sigma` (stored length units),
        libration amplitudes uniform in `amplitude_range`, and the libration
        rate is 2π per `libration_period_years`. The initial libration angle is
        left at 0 for the transform to fill in.

        Returns
        -------
        AsteroidGroup
            The registered group, transformed unless `transform` is False (raw
            groups are what a catalog compiler persists)
        """
        self._check_new(name)
        rng = np.random.default_rng(config.DEFAULT_RANDOM_SEED) if rng is None else rng
        group = AsteroidGroup(self.registry, primary, name, True, co_orbital_point)

        d = rng.normal(0.0, d_sigma, count)
        e = rng.uniform(0.0, e_max, count)
        inc = np.abs(rng.normal(0.0, i_sigma, count))
        angles = rng.uniform(0.0, TWO_PI, (count, 2))
        amplitude = rng.uniform(amplitude_range[0], amplitude_range[1], count)
        rate = TWO_PI / (libration_period_years * DAYS_PER_YEAR)
        magnitudes = rng.uniform(magnitude_range[0], magnitude_range[1], count)

        for j in tqdm(range(count), desc=f"Generating {name}", disable=not progress):
            self._reserve(group, count - j)
            node, peri = angles[j]
            group.append_co_orbital(f"{name} {j + 1}", magnitudes[j], (e[j], inc[j], node, peri),
                                    (d[j], amplitude[j], rate, 0.0))

        if transform:
            group.transform(settings=settings, rng=rng)
        return self._register(group)
