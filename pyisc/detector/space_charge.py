"""
Space-charge models providing electric field distortions.

A space-charge model answers one question: what relative offset
(δx, δy, δz) does the drift field have at a given point? Three models are
provided:

- :class:`SpaceChargeModel`: disabled, always returns zero offsets.
- :class:`UniformSpaceCharge`: the same offsets everywhere.
- :class:`TabulatedSpaceCharge`: offsets interpolated from a regular 3D map,
  zero outside the mapped volume.

Example::

    x = y = z = np.linspace(0, 100, 11)
    dx = np.full((11, 11, 11), 0.02)
    sce = TabulatedSpaceCharge(x, y, z, dx, np.zeros_like(dx), np.zeros_like(dx))
    sce.get_efield_offsets((50.0, 50.0, 50.0))   # (0.02, 0.0, 0.0)
"""

from typing import Sequence, Tuple

import numpy as np
from scipy.interpolate import RegularGridInterpolator


class SpaceChargeModel:
    """Base model: no field distortion."""

    enable_sim_efield_sce: bool = False

    def get_efield_offsets(self, position: Sequence[float]) -> Tuple[float, float, float]:
        return 0.0, 0.0, 0.0

    def get_efield_offsets_array(self, positions: np.ndarray) -> np.ndarray:
        positions = np.atleast_2d(np.asarray(positions, dtype=float))
        return np.zeros((len(positions), 3))


class UniformSpaceCharge(SpaceChargeModel):
    """Constant field offsets over the whole volume."""

    def __init__(self, offsets: Sequence[float], enabled: bool = True) -> None:
        offsets = tuple(float(v) for v in offsets)
        if len(offsets) != 3:
            raise ValueError("offsets must have three components (dx, dy, dz).")
        self.offsets = offsets
        self.enable_sim_efield_sce = enabled

    def __repr__(self):
        return f"<UniformSpaceCharge offsets={self.offsets}, enabled={self.enable_sim_efield_sce}>"

    def get_efield_offsets(self, position):
        return self.offsets

    def get_efield_offsets_array(self, positions):
        positions = np.atleast_2d(np.asarray(positions, dtype=float))
        return np.tile(np.asarray(self.offsets), (len(positions), 1))


class TabulatedSpaceCharge(SpaceChargeModel):
    """
    Field offsets interpolated on a regular (x, y, z) grid.

    Each offset component is a 3D array of shape (len(x), len(y), len(z)).
    Trilinear interpolation is used inside the grid; queries outside it
    return zero offsets.
    """

    def __init__(self, x, y, z, dx, dy, dz, enabled: bool = True) -> None:
        axes = tuple(np.asarray(a, dtype=float) for a in (x, y, z))
        shape = tuple(len(a) for a in axes)
        components = []
        for name, values in zip(("dx", "dy", "dz"), (dx, dy, dz)):
            values = np.asarray(values, dtype=float)
            if values.shape != shape:
                raise ValueError(
                    f"Offset map '{name}' has shape {values.shape}, expected {shape}."
                )
            components.append(values)

        self.enable_sim_efield_sce = enabled
        self.bounds = tuple((a.min(), a.max()) for a in axes)
        self._interpolators = [
            RegularGridInterpolator(axes, values, method="linear", bounds_error=False, fill_value=0.0)
            for values in components
        ]

    def __repr__(self):
        return f"<TabulatedSpaceCharge bounds={self.bounds}, enabled={self.enable_sim_efield_sce}>"

    def get_efield_offsets(self, position):
        dx, dy, dz = self.get_efield_offsets_array(np.asarray(position, dtype=float).reshape(1, 3))[0]
        return float(dx), float(dy), float(dz)

    def get_efield_offsets_array(self, positions):
        positions = np.atleast_2d(np.asarray(positions, dtype=float))
        return np.column_stack([interp(positions) for interp in self._interpolators])
