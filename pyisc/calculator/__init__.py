"""
Correlated ionization/scintillation calculator.

This subpackage turns energy deposits in liquid argon into ionization
electrons and scintillation photons, with charge and light anticorrelated
through electron-ion recombination.

Modules
-------

- :mod:`core`:
  Defines :class:`~pyisc.calculator.core.ISCalcParameters` and
  :class:`~pyisc.calculator.core.ISCalcCorrelated`, whose
  :meth:`~pyisc.calculator.core.ISCalcCorrelated.calc_ion_and_scint` handles
  a single deposit.

- :mod:`records`:
  Input (:class:`~pyisc.calculator.records.SimEnergyDeposit`) and output
  (:class:`~pyisc.calculator.records.ISCalcData`) records.

- :mod:`compute`:
  Adds :meth:`~pyisc.calculator.core.ISCalcCorrelated.compute`, the batch
  engine returning a pandas DataFrame.

- :mod:`plot`:
  Adds :meth:`~pyisc.calculator.core.ISCalcCorrelated.plot_recombination`.

Usage
-----

.. code-block:: python

    from pyisc.calculator import ISCalcCorrelated, ISCalcParameters, SimEnergyDeposit

    calc = ISCalcCorrelated(ISCalcParameters.default())
    calc.summary()
    calc.calc_ion_and_scint(SimEnergyDeposit(energy=1.0, step_length=0.3, pdg_code=13))
    table = calc.compute(deposits, parallel=True)
    calc.plot_recombination()
"""

from .core import ISCalcCorrelated, ISCalcParameters
from .records import ISCalcData, SimEnergyDeposit
from . import compute  # noqa
from . import plot  # noqa

__all__ = ["ISCalcCorrelated", "ISCalcParameters", "ISCalcData", "SimEnergyDeposit"]
