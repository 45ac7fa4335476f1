"""
Detector collaborators for pyISC.

Modules
-------

- :mod:`properties`:
  :class:`~pyisc.detector.properties.DetectorPropertiesData`, the nominal
  drift field, temperature and argon density.

- :mod:`space_charge`:
  Space-charge models returning electric field offsets at a position,
  including an interpolated map (:class:`~pyisc.detector.space_charge.TabulatedSpaceCharge`).
"""

from .properties import DetectorPropertiesData
from .space_charge import SpaceChargeModel, UniformSpaceCharge, TabulatedSpaceCharge

__all__ = [
    "DetectorPropertiesData",
    "SpaceChargeModel",
    "UniformSpaceCharge",
    "TabulatedSpaceCharge",
]
