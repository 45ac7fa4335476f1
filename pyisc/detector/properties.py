"""
Bulk detector state used by the ionization/scintillation calculation.

:class:`DetectorPropertiesData` is a value object holding the nominal drift
field and the argon temperature. The liquid density follows the linear
parametrization used by LArSoft's standard detector properties,
ρ(T) = -0.00615·T + 1.928 g/cm³, unless an explicit value is supplied.
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectorPropertiesData:
    """
    Nominal detector conditions.

    :ivar efield: Nominal drift field [kV/cm].
    :ivar temperature: Liquid argon temperature [K].
    :ivar density_override: Fixed density [g/cm³]; bypasses the temperature parametrization.
    """

    efield: float = 0.5
    temperature: float = 87.0
    density_override: Optional[float] = None

    def __post_init__(self):
        if self.temperature <= 0:
            raise ValueError("temperature must be positive.")
        if self.density_override is not None and self.density_override <= 0:
            raise ValueError("density_override must be positive.")
        if self.efield <= 0:
            logger.warning(
                f"Non-positive drift field ({self.efield} kV/cm): "
                "recombination is undefined for non-positive fields."
            )

    def density(self, temperature: Optional[float] = None) -> float:
        """
        Liquid argon density.

        :param temperature: Temperature [K]. Defaults to :attr:`temperature`.
        :returns: Density [g/cm³].
        """
        if self.density_override is not None:
            return self.density_override
        t = self.temperature if temperature is None else temperature
        return -0.00615 * t + 1.928
