"""
Name-keyed registry of the massive bodies and Lagrange points of a system.

Asteroid groups refer to their primary and, for co-orbital groups, to their
cluster point by key. The registry owns nothing on behalf of the groups: the
simulation controls the lifetime of bodies and points, and groups resolve a
key each time they need a scalar parameter.
"""

import logging

from minorbodies.errors import PreconditionViolation

logger = logging.getLogger(__name__)


class SystemRegistry:
    """
    Lookup of Body and LagrangePoint objects by key.

    Examples
    --------
    >>> registry = SystemRegistry()
    >>> registry.add_body(Body("Sun", GM_sun, R_sun, 0.0))
    >>> registry.add_lagrange_point("Jupiter L4", L4Point(mu_jupiter, a_jupiter))
    >>> registry.gm("Sun")
    """

    def __init__(self):
        self._bodies = {}
        self._points = {}

    def add_body(self, body, key=None):
        """Register `body` under `key` (defaults to the body's name) and return the key."""
        key = body.name if key is None else key
        if key in self._bodies:
            raise PreconditionViolation(f"Body '{key}' is already registered")
        self._bodies[key] = body
        logger.debug(f"Registered body '{key}' (gm={body.gm:.6e})")
        return key

    def add_lagrange_point(self, key, point):
        if key in self._points:
            raise PreconditionViolation(f"Lagrange point '{key}' is already registered")
        self._points[key] = point
        logger.debug(f"Registered Lagrange point '{key}' (L{point.point_index})")
        return key

    def remove(self, key):
        """Forget `key`; groups still referring to it fail on their next lookup."""
        self._bodies.pop(key, None)
        self._points.pop(key, None)

    def has_body(self, key):
        return key in self._bodies

    def has_lagrange_point(self, key):
        return key in self._points

    def body(self, key):
        try:
            return self._bodies[key]
        except KeyError:
            raise PreconditionViolation(f"Unknown body '{key}'") from None

    def lagrange_point(self, key):
        try:
            return self._points[key]
        except KeyError:
            raise PreconditionViolation(f"Unknown Lagrange point '{key}'") from None

    def gm(self, key):
        """Gravitational parameter of the body registered under `key`."""
        return float(self.body(key).gm)

    def point_semi_major_axis(self, key):
        """Distance from the primary of the Lagrange point registered under `key`."""
        return float(self.lagrange_point(key).semi_major_axis)
