"""
I/O submodule for pyISC.

Modules
-------

- :mod:`data_registry`:
  Locates and loads parameter sets, including the bundled liquid argon
  defaults. See :func:`~pyisc.io.data_registry.load_default_parameters`
  and :func:`~pyisc.io.data_registry.load_parameters`.
"""

from .data_registry import load_default_parameters, load_parameters

__all__ = ["load_default_parameters", "load_parameters"]
