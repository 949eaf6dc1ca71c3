"""
Gravitating body model for minor-body populations.

This module defines the Body class, which represents the massive bodies that
asteroid groups are attached to: the primary a group orbits (usually the Sun)
and the secondary whose Lagrange points host co-orbital clusters (e.g.
Jupiter for the Trojans). The implementation uses Numba's jitclass so bodies
can be handed straight to compiled kernels.

Groups never own a Body. They hold a registry key and read the body's
gravitational parameter when their orbital elements are transformed.
"""

from numba import types
from numba.experimental import jitclass

spec = [
    ('name', types.unicode_type),
    ('gm', types.float64),
    ('radius', types.float64),
    ('semi_major_axis', types.float64),
]


@jitclass(spec)
class Body:
    """
    Gravitating body in simulation units (AU, days).

    Parameters
    ----------
    name : str
        Name of the body
    gm : float
        Gravitational parameter (AU^3 / day^2)
    radius : float
        Physical radius (AU)
    semi_major_axis : float
        Semi-major axis of the body's own orbit about its parent (AU);
        0 for the central star

    Attributes
    ----------
    name : str
    gm : float
    radius : float
    semi_major_axis : float
    """
    def __init__(self, name, gm, radius, semi_major_axis):
        self.name = name
        self.gm = gm
        self.radius = radius
        self.semi_major_axis = semi_major_axis

