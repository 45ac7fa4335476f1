"""
Plotting utilities for recombination curves.

This module defines :meth:`ISCalcCorrelated.plot_recombination`, which draws
the recombination survival fraction as a function of dE/dx for one or more
electric field values, using the calculator's active model and corrections.
"""

import matplotlib.pyplot as plt
plt.rcParams.update({
    "axes.linewidth": 1.2,
    "axes.labelsize": 16,
    "xtick.labelsize": 14,
    "ytick.labelsize": 14,
    "xtick.major.width": 1.2,
    "ytick.major.width": 1.2,
    "legend.fontsize": 12
})
import numpy as np
from typing import Optional, Sequence

from .core import ISCalcCorrelated


def plot_recombination(self,
                       *,
                       dedx: Optional[Sequence[float]] = None,
                       efields: Sequence[float] = (0.05, 0.2, 0.5, 1.0),
                       ax: Optional[plt.Axes] = None,
                       show: Optional[bool] = True):
    """
    Plot the survival fraction R(dE/dx) for several fields.

    :param dedx: dE/dx grid [MeV/cm]. Defaults to 60 log-spaced points in [1, 100].
    :type dedx: Optional[Sequence[float]]
    :param efields: Field values [kV/cm], one curve each.
    :type efields: Sequence[float]
    :param ax: Matplotlib Axes object to draw on. If None, a new figure is created.
    :type ax: Optional[matplotlib.axes.Axes]
    :param show: If True, displays the plot. Set False when embedding or scripting.
    :type show: Optional[bool]

    :returns: The Axes used for drawing.
    :rtype: matplotlib.axes.Axes

    :raises ValueError: If ``efields`` is empty.
    """
    if len(efields) == 0:
        raise ValueError("At least one field value is required.")

    dedx = np.logspace(0, 2, 60) if dedx is None else np.maximum(np.asarray(dedx, dtype=float), 1.0)

    created_fig = False
    if ax is None:
        _, ax = plt.subplots()
        created_fig = True

    for efield in efields:
        recomb = self.recombination(dedx, np.full_like(dedx, efield))
        ax.plot(dedx, recomb, label=f"E = {efield:g} kV/cm", linewidth=2)

    larql = " + LArQL" if self.params.larql is not None else ""
    ax.set_xlabel("dE/dx [MeV/cm]", fontsize=14)
    ax.set_ylabel("Recombination survival fraction", fontsize=14)
    ax.set_title(f"Model: {self.params.model.value}{larql}", fontsize=16)
    ax.set_xscale("log")
    ax.grid(True, linestyle='--', alpha=0.5)
    ax.legend()

    if show and created_fig:
        plt.tight_layout()
        plt.show()

    return ax


ISCalcCorrelated.plot_recombination = plot_recombination
