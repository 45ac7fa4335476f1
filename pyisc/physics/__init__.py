"""
Physics models and computational core for pyISC.

This subpackage contains the formulas used to split an energy deposit into
ionization electrons and scintillation photons.

Modules
-------

- :mod:`recombination`:
  Modified box and Birks recombination models, the LArQL low-field correction,
  and the coefficient containers that tag the active model.

- :mod:`field`:
  Resolves the effective electric field at a deposit, including the
  space-charge distortion.

- :mod:`yield_ratio`:
  Maps PDG codes to particle species and to the fast/total scintillation
  light ratio.
"""

from .recombination import (
    BirksCoefficients,
    LarqlCoefficients,
    ModBoxCoefficients,
    RecombinationModel,
    recombination_fraction,
)
from .field import effective_field
from .yield_ratio import ParticleSpecies, ScintYieldRatios, classify_pdg

__all__ = [
    "BirksCoefficients",
    "LarqlCoefficients",
    "ModBoxCoefficients",
    "RecombinationModel",
    "recombination_fraction",
    "effective_field",
    "ParticleSpecies",
    "ScintYieldRatios",
    "classify_pdg",
]
