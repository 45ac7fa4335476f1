"""
Utility submodule for pyISC.

Modules
-------

- :mod:`parallel`:
  Defines :func:`~pyisc.utils.parallel.chunk_bounds` and
  :func:`~pyisc.utils.parallel.optimal_worker_count`, used to split a batch and
  size the thread pool of :meth:`~pyisc.calculator.core.ISCalcCorrelated.compute`.
"""
