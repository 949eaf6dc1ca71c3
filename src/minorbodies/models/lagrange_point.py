"""
Lagrange point models for co-orbital asteroid clusters.

Co-orbital groups (Trojans, Hildas-like clusters, ...) librate about a
Lagrange point of a primary/secondary pair. The population engine only needs
one number from such a point: its distance from the primary, used as the
reference semi-major axis of every cluster member.

The class hierarchy consists of:
- LagrangePoint (abstract base class)
- CollinearPoint (for L1, L2, L3)
- TriangularPoint (for L4, L5)
- Concrete classes for each point (L1Point, L2Point, etc.)

Positions are computed in the normalized rotating frame of the circular
restricted three-body problem (primary at x = -mu, secondary at x = 1 - mu)
and scaled by the physical primary/secondary separation.
"""

import warnings
from abc import ABC, abstractmethod

import mpmath as mp
import numpy as np

# Set mpmath precision to 50 digits for root finding
mp.mp.dps = 50


class LagrangePoint(ABC):
    """
    Abstract base class for Lagrange points.

    Parameters
    ----------
    mu : float
        Mass parameter of the pair (ratio of secondary to total mass)
    point_index : int
        The Lagrange point index (1-5)
    distance : float
        Primary/secondary separation in simulation length units (AU)
    """

    def __init__(self, mu, point_index, distance=1.0):
        if not 0.0 <= mu <= 0.5:
            raise ValueError(f"Mass parameter must lie in [0, 0.5], not {mu}")
        self.mu = mu
        self.point_index = point_index
        self.distance = distance
        self._position = None

    @property
    def position(self):
        """
        Position of the point in the normalized rotating frame.

        Returns
        -------
        ndarray
            3D vector [x, y, z]
        """
        if self._position is None:
            self._position = self._calculate_position()
        return self._position

    @property
    def semi_major_axis(self):
        """
        Distance of the point from the primary, in simulation length units.

        This is the reference semi-major axis of bodies clustered at the point.
        """
        primary = np.array([-self.mu, 0.0, 0.0], dtype=np.float64)
        return float(np.linalg.norm(self.position - primary) * self.distance)

    @abstractmethod
    def _calculate_position(self):
        """
        Calculate the position of the Lagrange point.

        Returns
        -------
        ndarray
            3D vector [x, y, z] representing the position
        """
        pass

    def __repr__(self):
        return f"{type(self).__name__}(mu={self.mu!r}, distance={self.distance!r})"


class CollinearPoint(LagrangePoint):
    """
    Base class for collinear Lagrange points (L1, L2, L3).

    The collinear points lie on the x-axis connecting the two bodies and are
    found as roots of the effective-potential gradient.
    """

    def __init__(self, mu, point_index, distance=1.0):
        if point_index not in [1, 2, 3]:
            raise ValueError(f"Collinear point index must be 1, 2, or 3, not {point_index}")
        if mu <= 0.0:
            raise ValueError("Collinear points need a secondary with non-zero mass")
        super().__init__(mu, point_index, distance)

    def _dOmega_dx(self, x):
        """
        Derivative of the effective potential with respect to x.

        Parameters
        ----------
        x : float
            x-coordinate in the rotating frame

        Returns
        -------
        float
            Value of dΩ/dx at the given x-coordinate
        """
        mu = self.mu
        r1 = abs(x + mu)
        r2 = abs(x - (1 - mu))
        return x - (1 - mu) * (x + mu) / (r1**3) - mu * (x - (1 - mu)) / (r2**3)

    def _root(self, bracket):
        x = mp.findroot(lambda x: self._dOmega_dx(x), bracket, solver='illinois')
        return np.array([float(x), 0, 0], dtype=np.float64)

    @property
    def _hill_offset(self):
        """Half the Hill radius of the secondary, used to keep brackets off the singularity."""
        return 0.5 * (self.mu / 3.0) ** (1.0 / 3.0)


class L1Point(CollinearPoint):
    """L1, located between the two bodies."""

    def __init__(self, mu, distance=1.0):
        super().__init__(mu, 1, distance)

    def _calculate_position(self):
        return self._root((-self.mu + 0.01, 1 - self.mu - self._hill_offset))


class L2Point(CollinearPoint):
    """L2, located beyond the secondary."""

    def __init__(self, mu, distance=1.0):
        super().__init__(mu, 2, distance)

    def _calculate_position(self):
        return self._root((1 - self.mu + self._hill_offset, 2.0))


class L3Point(CollinearPoint):
    """L3, located beyond the primary, opposite the secondary."""

    def __init__(self, mu, distance=1.0):
        super().__init__(mu, 3, distance)

    def _calculate_position(self):
        return self._root((-2.0, -self.mu - 0.01))


class TriangularPoint(LagrangePoint):
    """
    Base class for triangular Lagrange points (L4, L5).

    The triangular points form equilateral triangles with the two bodies, so
    their distance from the primary equals the separation. They host stable
    Trojan clusters for mass ratios mu < 0.0385.
    """

    def __init__(self, mu, point_index, distance=1.0):
        if point_index not in [4, 5]:
            raise ValueError(f"Triangular point index must be 4 or 5, not {point_index}")
        super().__init__(mu, point_index, distance)

        if mu > 0.0385:
            warnings.warn(f"Triangular points are unstable for mu > 0.0385 (current mu = {mu})")


class L4Point(TriangularPoint):
    """L4, leading the secondary by 60 degrees."""

    def __init__(self, mu, distance=1.0):
        super().__init__(mu, 4, distance)

    def _calculate_position(self):
        x = 1 / 2 - self.mu
        y = np.sqrt(3) / 2
        return np.array([x, y, 0], dtype=np.float64)


class L5Point(TriangularPoint):
    """L5, trailing the secondary by 60 degrees."""

    def __init__(self, mu, distance=1.0):
        super().__init__(mu, 5, distance)

    def _calculate_position(self):
        x = 1 / 2 - self.mu
        y = -np.sqrt(3) / 2
        return np.array([x, y, 0], dtype=np.float64)


_POINT_CLASSES = {
    1: L1Point,
    2: L2Point,
    3: L3Point,
    4: L4Point,
    5: L5Point,
}


def create_lagrange_point(mu, point_index, distance=1.0):
    """
    Create a specific Lagrange point object by index.

    Parameters
    ----------
    mu : float
        Mass parameter of the pair (ratio of secondary to total mass)
    point_index : int
        The Lagrange point index (1-5)
    distance : float, optional
        Primary/secondary separation. Default is 1 (normalized units).

    Returns
    -------
    LagrangePoint
        An instance of the appropriate Lagrange point class

    Raises
    ------
    ValueError
        If an invalid point index is provided
    """
    try:
        cls = _POINT_CLASSES[point_index]
    except KeyError:
        raise ValueError(f"Invalid Lagrange point index: {point_index}. Must be 1-5.") from None
    return cls(mu, distance)


def lagrange_point_for(primary, secondary, point_index):
    """
    Create the Lagrange point of a primary/secondary Body pair.

    The mass parameter is taken from the bodies' gravitational parameters and
    the separation from the secondary's semi-major axis.
    """
    mu = secondary.gm / (primary.gm + secondary.gm)
    return create_lagrange_point(mu, point_index, secondary.semi_major_axis)
