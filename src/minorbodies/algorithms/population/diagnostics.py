"""
Optional min/max tallies collected while a group is transformed.

Diagnostics only observe the columns; they never change stored values or the
flow of a transform.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class PopulationDiagnostics:
    """
    Running per-column minimum and maximum of a group's transformed rows.

    Parameters
    ----------
    group_name : str
        Name used in the summary header

    Attributes
    ----------
    rows : int
        Number of rows tallied so far
    tallies : dict
        Column label -> [min, max] over finite values
    non_finite : dict
        Column label -> number of NaN/inf values seen
    """

    def __init__(self, group_name=""):
        self.group_name = group_name
        self.rows = 0
        self.tallies = {}
        self.non_finite = {}

    def update(self, label, values):
        """Fold a batch of values for column `label` into the tallies."""
        values = np.asarray(values, dtype=np.float64)
        finite = np.isfinite(values)
        bad = int(values.size - np.count_nonzero(finite))
        if bad:
            self.non_finite[label] = self.non_finite.get(label, 0) + bad
        if not finite.any():
            return
        lo = float(values[finite].min())
        hi = float(values[finite].max())
        if label in self.tallies:
            current = self.tallies[label]
            current[0] = min(current[0], lo)
            current[1] = max(current[1], hi)
        else:
            self.tallies[label] = [lo, hi]

    def update_group(self, group, start, stop):
        """Tally rows [start, stop) of every element slot and the magnitudes of `group`."""
        self.update("magnitude", group.magnitudes[start:stop])
        for slot in group.element_names:
            self.update(slot, group.element(slot)[start:stop])
        self.update("apoapsis", group.apoapses()[start:stop])
        self.rows += stop - start

    def minimum(self, label):
        return self.tallies[label][0]

    def maximum(self, label):
        return self.tallies[label][1]

    def summary(self):
        """Human-readable table of the tallies."""
        lines = [f"Diagnostics for '{self.group_name}' ({self.rows} rows)"]
        width = max((len(label) for label in self.tallies), default=0)
        for label, (lo, hi) in self.tallies.items():
            line = f"  {label:<{width}}  min={lo:.6g}  max={hi:.6g}"
            if label in self.non_finite:
                line += f"  non-finite={self.non_finite[label]}"
            lines.append(line)
        for label, bad in self.non_finite.items():
            if label not in self.tallies:
                lines.append(f"  {label:<{width}}  non-finite={bad}")
        return "\n".join(lines)

    def log_summary(self, level=logging.DEBUG):
        logger.log(level, self.summary())
