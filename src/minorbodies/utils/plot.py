"""
Plotting functions for asteroid populations.

This module provides quick-look views of a group's stored columns: the
distribution of distance element against eccentricity, and the distribution
of per-row apoapsis distances with the group's tracked maximum.
"""

import matplotlib.pyplot as plt
import numpy as np


def plot_population(group, figsize=(9, 6), show=True):
    """
    Scatter the distance element of every row against its eccentricity.

    Orbiting groups are plotted by semi-major axis, co-orbital groups by
    radial offset from their cluster point.

    Parameters
    ----------
    group : AsteroidGroup
        Group to plot
    figsize : tuple, default=(9, 6)
        Figure size in inches (width, height)
    show : bool, default=True
        Call plt.show() before returning

    Returns
    -------
    tuple
        (fig, ax)
    """
    if group.is_co_orbital:
        distance = group.element("radial_offset")
        xlabel = "Radial offset d [AU]"
    else:
        distance = group.element("semi_major_axis")
        xlabel = "Semi-major axis a [AU]"

    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(distance, group.element("eccentricity"), s=1, alpha=0.5, color='k')
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Eccentricity e")
    ax.set_title(f"{group.group_name} ({group.count} objects)")
    ax.grid(True)

    if show:
        plt.show()
    return fig, ax


def plot_apoapsis_histogram(group, bins=50, figsize=(9, 6), show=True):
    """
    Histogram of per-row apoapsis distances, with the group's max_apoapsis marked.

    Parameters
    ----------
    group : AsteroidGroup
        Transformed group to plot
    bins : int, default=50
        Number of histogram bins
    figsize : tuple, default=(9, 6)
        Figure size in inches (width, height)
    show : bool, default=True
        Call plt.show() before returning

    Returns
    -------
    tuple
        (fig, ax)
    """
    apoapses = group.apoapses()
    apoapses = apoapses[np.isfinite(apoapses)]

    fig, ax = plt.subplots(figsize=figsize)
    ax.hist(apoapses, bins=bins, color='gray', edgecolor='k')
    ax.axvline(group.max_apoapsis, color='red', linestyle='--', label='max apoapsis')
    ax.set_xlabel("Apoapsis [AU]")
    ax.set_ylabel("Objects")
    ax.set_title(f"Apoapsis distribution: {group.group_name}")
    ax.legend()

    if show:
        plt.show()
    return fig, ax
