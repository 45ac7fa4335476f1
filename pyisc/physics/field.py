"""
Effective electric field at the location of an energy deposit.

The nominal drift field of the detector can be distorted by space charge.
A space-charge model reports the distortion as relative offsets
(δx, δy, δz) of the field vector, with the drift direction along x, so the
local field magnitude becomes E·|(1 + δx, δy, δz)|.
"""

import numpy as np


def effective_field(efield: float, position, space_charge=None) -> float:
    """
    Resolve the field magnitude at ``position``.

    :param efield: Nominal drift field [kV/cm].
    :param position: Deposit midpoint (x, y, z) [cm].
    :param space_charge: Object exposing ``enable_sim_efield_sce`` and
        ``get_efield_offsets(position)``. If None or disabled, the nominal
        field is returned unchanged.
    :returns: Local field magnitude [kV/cm].
    """
    if space_charge is None or not space_charge.enable_sim_efield_sce:
        return efield
    dx, dy, dz = space_charge.get_efield_offsets(position)
    return efield * float(np.sqrt((1.0 + dx) ** 2 + dy ** 2 + dz ** 2))


def effective_fields(efield: float, positions: np.ndarray, space_charge=None) -> np.ndarray:
    """
    Vectorized :func:`effective_field` over an (N, 3) array of positions.

    Models providing ``get_efield_offsets_array`` are queried once for all
    points; any other model is queried point by point.
    """
    positions = np.atleast_2d(np.asarray(positions, dtype=float))
    if space_charge is None or not space_charge.enable_sim_efield_sce:
        return np.full(len(positions), float(efield))

    if hasattr(space_charge, "get_efield_offsets_array"):
        offsets = np.asarray(space_charge.get_efield_offsets_array(positions), dtype=float)
    else:
        offsets = np.array([space_charge.get_efield_offsets(p) for p in positions], dtype=float)
    offsets = offsets.reshape(len(positions), 3)

    norm = np.sqrt((1.0 + offsets[:, 0]) ** 2 + offsets[:, 1] ** 2 + offsets[:, 2] ** 2)
    return efield * norm
