"""
pyISC: correlated ionization and scintillation yields in liquid argon.

pyISC computes, for each energy deposit in a liquid argon volume, how many
ionization electrons survive recombination and how many scintillation photons
are emitted. It supports:

- Modified box and Birks recombination models
- The LArQL correction for low electric fields
- Space-charge field distortions, uniform or from an interpolated 3D map
- Particle-dependent fast/slow scintillation yield ratios
- Vectorized batch computation into pandas DataFrames

Main subpackages
----------------

- :mod:`pyisc.calculator`: Parameter set, calculator, batch engine and plots.
- :mod:`pyisc.physics`: Recombination formulas, field resolver, yield ratios.
- :mod:`pyisc.detector`: Detector properties and space-charge models.
- :mod:`pyisc.io`: Loading of parameter sets, including bundled argon defaults.
- :mod:`pyisc.utils`: Thread pool sizing.
"""

from .calculator import ISCalcCorrelated, ISCalcParameters, ISCalcData, SimEnergyDeposit
from .detector import DetectorPropertiesData
from .physics import (
    BirksCoefficients,
    LarqlCoefficients,
    ModBoxCoefficients,
    RecombinationModel,
    ScintYieldRatios,
)

__all__ = [
    "ISCalcCorrelated",
    "ISCalcParameters",
    "ISCalcData",
    "SimEnergyDeposit",
    "DetectorPropertiesData",
    "BirksCoefficients",
    "LarqlCoefficients",
    "ModBoxCoefficients",
    "RecombinationModel",
    "ScintYieldRatios",
]
