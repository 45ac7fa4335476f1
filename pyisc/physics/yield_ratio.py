"""
Scintillation yield ratio by particle species.

The yield ratio is the fraction of fast (singlet) light over the total
scintillation light. It depends on the ionization density of the incident
particle, so heavier or slower particles are assigned their own ratio when
``by_particle_type`` is enabled.

Particles are identified by PDG code and grouped into a closed set of
:class:`ParticleSpecies`; any code outside the table is treated as
electromagnetic (e±, γ).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ParticleSpecies(Enum):
    PROTON = "proton"
    MUON = "muon"
    PION = "pion"
    KAON = "kaon"
    ALPHA = "alpha"
    ELECTROMAGNETIC = "electromagnetic"


_PDG_SPECIES: Dict[int, ParticleSpecies] = {
    2212: ParticleSpecies.PROTON,
    13: ParticleSpecies.MUON,
    -13: ParticleSpecies.MUON,
    211: ParticleSpecies.PION,
    -211: ParticleSpecies.PION,
    321: ParticleSpecies.KAON,
    -321: ParticleSpecies.KAON,
    1000020040: ParticleSpecies.ALPHA,
    11: ParticleSpecies.ELECTROMAGNETIC,
    -11: ParticleSpecies.ELECTROMAGNETIC,
    22: ParticleSpecies.ELECTROMAGNETIC,
}


def classify_pdg(pdg_code: int) -> ParticleSpecies:
    """
    Map a PDG code to its :class:`ParticleSpecies`.

    :param pdg_code: PDG particle identifier.
    :returns: Species; unknown codes fall back to ``ELECTROMAGNETIC``.
    """
    return _PDG_SPECIES.get(int(pdg_code), ParticleSpecies.ELECTROMAGNETIC)


@dataclass(frozen=True)
class ScintYieldRatios:
    """
    Fast-to-total scintillation light ratios.

    :ivar by_particle_type: If False, :attr:`default` is used for every particle.
    :ivar default: Ratio used when ``by_particle_type`` is disabled.
    :ivar proton: Ratio for protons.
    :ivar muon: Ratio for μ±.
    :ivar pion: Ratio for π±.
    :ivar kaon: Ratio for K±.
    :ivar alpha: Ratio for α particles.
    :ivar electron: Ratio for e±, γ and any unlisted particle.
    """

    by_particle_type: bool = False
    default: float = 0.3
    proton: float = 0.29
    muon: float = 0.23
    pion: float = 0.23
    kaon: float = 0.23
    alpha: float = 0.56
    electron: float = 0.27

    def for_species(self, species: ParticleSpecies) -> float:
        if species is ParticleSpecies.ELECTROMAGNETIC:
            return self.electron
        return getattr(self, species.value)

    def ratio_for(self, pdg_code: int) -> float:
        """
        Yield ratio for a particle.

        :param pdg_code: PDG particle identifier.
        :returns: Configured ratio; never raises for unknown codes.
        """
        if not self.by_particle_type:
            return self.default
        return self.for_species(classify_pdg(pdg_code))
