"""
Discovery and loading of recombination and scintillation parameter sets.

This module provides functions to:

- Load the bundled liquid argon defaults (`argon_defaults.json`)
- Load a user parameter file with the same LArSoft-style keys

Bundled files are resolved with :mod:`importlib.resources`, falling back to a
path relative to this module during development.
"""

import os
import json
from pathlib import Path
from typing import Dict, Union

DEFAULT_PARAMETER_FILE = "argon_defaults.json"


def get_default_parameter_path(filename: str = DEFAULT_PARAMETER_FILE) -> str:
    """
    Locate a bundled parameter file.

    :param filename: Name of the JSON file inside ``pyisc.data``.
    :type filename: str

    :returns: Absolute path to the file.
    :rtype: str

    :raises FileNotFoundError: If the file is neither installed nor available locally.
    """
    try:
        from importlib.resources import files
        path = files("pyisc.data").joinpath(filename)
        if path.is_file():
            return str(path)
    except ModuleNotFoundError:
        pass

    local = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "data", filename))
    if os.path.exists(local):
        return local

    raise FileNotFoundError(f"Cannot find parameter file '{filename}'")


def load_parameters(path: Union[str, Path]) -> Dict[str, object]:
    """
    Load a parameter set from a JSON file.

    :param path: Path to the JSON file.
    :type path: str or Path

    :returns: Mapping of LArSoft-style parameter names to values.
    :rtype: dict

    :raises FileNotFoundError: If the file does not exist.
    :raises ValueError: If the file does not contain a JSON object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r") as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError(f"Parameter file {path} must contain a JSON object.")
    return config


def load_default_parameters() -> Dict[str, object]:
    """
    Load the bundled liquid argon parameter set.

    :returns: Mapping of LArSoft-style parameter names to values.
    :rtype: dict
    """
    return load_parameters(get_default_parameter_path())
