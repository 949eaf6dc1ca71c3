"""
Physical constants for minor-body population handling.

All values are expressed in the simulation's native units: astronomical units
(AU) for length and days for time, so gravitational parameters are in
AU^3 / day^2 and mean motions come out in radians per day. Values are stored
as numpy float64 for consistency with the numerical kernels.

References
----------
- IAU 2012 Resolution B2 (astronomical unit)
- Gauss, Theoria Motus (Gaussian gravitational constant)
- NASA JPL Solar System Dynamics (https://ssd.jpl.nasa.gov/)
"""

import numpy as np

# Universal constants
#--------------------

#: float: Astronomical unit (m)
AU = np.float64(1.495978707e11)  # m

#: float: Seconds in one day (s)
SECONDS_PER_DAY = np.float64(86400.0)  # s

#: float: Gaussian gravitational constant (rad / day)
#: k^2 is the heliocentric gravitational parameter in AU^3 / day^2
K_GAUSS = np.float64(0.01720209895)

#: float: Full turn in radians
TWO_PI = np.float64(2.0 * np.pi)

# Gravitational parameters (AU^3 / day^2)
#----------------------------------------

#: float: GM of the Sun
GM_sun = K_GAUSS ** 2

#: float: GM of Mars (Sun mass ratio 1 / 3098703.59)
GM_mars = GM_sun / np.float64(3098703.59)

#: float: GM of Jupiter (Sun mass ratio 1 / 1047.348644)
GM_jupiter = GM_sun / np.float64(1047.348644)

#: float: GM of Saturn (Sun mass ratio 1 / 3497.9018)
GM_saturn = GM_sun / np.float64(3497.9018)

#: float: GM of Neptune (Sun mass ratio 1 / 19412.26)
GM_neptune = GM_sun / np.float64(19412.26)

# Heliocentric semi-major axes (AU)
#----------------------------------

a_mars = np.float64(1.523679)  # AU
a_jupiter = np.float64(5.2026)  # AU
a_saturn = np.float64(9.5549)  # AU
a_neptune = np.float64(30.0699)  # AU

# Body radii (AU)
#----------------

R_sun = np.float64(696340e3) / AU
R_mars = np.float64(3396.2e3) / AU
R_jupiter = np.float64(69911e3) / AU
R_saturn = np.float64(58232e3) / AU
R_neptune = np.float64(24622e3) / AU


class Constants:
    """
    Name-based lookup of the body constants defined in this module.

    Examples
    --------
    >>> Constants.get_gm("jupiter")
    >>> Constants.get_semi_major_axis("jupiter")
    """

    _gm = {
        "sun": GM_sun,
        "mars": GM_mars,
        "jupiter": GM_jupiter,
        "saturn": GM_saturn,
        "neptune": GM_neptune,
    }

    _semi_major_axis = {
        "sun": np.float64(0.0),
        "mars": a_mars,
        "jupiter": a_jupiter,
        "saturn": a_saturn,
        "neptune": a_neptune,
    }

    _radius = {
        "sun": R_sun,
        "mars": R_mars,
        "jupiter": R_jupiter,
        "saturn": R_saturn,
        "neptune": R_neptune,
    }

    @staticmethod
    def _lookup(table, body):
        key = body.lower()
        if key not in table:
            raise KeyError(f"Unknown body '{body}'. Known bodies: {sorted(table)}")
        return table[key]

    @classmethod
    def get_gm(cls, body):
        """Gravitational parameter of `body` in AU^3 / day^2."""
        return cls._lookup(cls._gm, body)

    @classmethod
    def get_semi_major_axis(cls, body):
        """Heliocentric semi-major axis of `body` in AU (0 for the Sun)."""
        return cls._lookup(cls._semi_major_axis, body)

    @classmethod
    def get_radius(cls, body):
        return cls._lookup(cls._radius, body)
