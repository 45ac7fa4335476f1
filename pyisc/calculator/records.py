"""
Input and output records of the ionization/scintillation calculation.

- :class:`SimEnergyDeposit`: a single simulated energy deposition step.
- :class:`ISCalcData`: electrons, photons and yield ratio produced by one deposit.
"""

from dataclasses import asdict, dataclass
from typing import Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class SimEnergyDeposit:
    """
    Energy deposited along one simulation step.

    :ivar energy: Deposited energy [MeV].
    :ivar step_length: Step length [cm]. Non-positive values mark a point-like deposit.
    :ivar pdg_code: PDG code of the depositing particle.
    :ivar midpoint: Step midpoint (x, y, z) [cm].
    """

    energy: float
    step_length: float
    pdg_code: int = 11
    midpoint: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    @classmethod
    def from_endpoints(
        cls,
        energy: float,
        start: Sequence[float],
        end: Sequence[float],
        pdg_code: int = 11,
    ) -> "SimEnergyDeposit":
        """
        Build a deposit from the step start and end points.

        :param energy: Deposited energy [MeV].
        :param start: Step start (x, y, z) [cm].
        :param end: Step end (x, y, z) [cm].
        :param pdg_code: PDG code of the depositing particle.
        :returns: Deposit with midpoint and step length derived from the end points.
        """
        start = np.asarray(start, dtype=float)
        end = np.asarray(end, dtype=float)
        midpoint = tuple(float(v) for v in 0.5 * (start + end))
        return cls(
            energy=float(energy),
            step_length=float(np.linalg.norm(end - start)),
            pdg_code=int(pdg_code),
            midpoint=midpoint,
        )


@dataclass(frozen=True)
class ISCalcData:
    """
    Result of the calculation for one deposit.

    :ivar energy_deposit: Deposited energy [MeV].
    :ivar num_electrons: Ionization electrons surviving recombination.
    :ivar num_photons: Scintillation photons (after prescale).
    :ivar scint_yield_ratio: Fast-to-total scintillation light ratio.
    """

    energy_deposit: float
    num_electrons: float
    num_photons: float
    scint_yield_ratio: float

    def as_dict(self) -> dict:
        return asdict(self)
