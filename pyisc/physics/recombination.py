"""
Electron-ion recombination models for liquid argon.

This module implements the two empirical base models used to compute the
fraction of ionization electrons surviving recombination:

- Modified box model (ArgoNeuT, JINST 8 (2013) P08005)
- Birks model (ICARUS, NIM A 523 (2004) 275)

and the LArQL additive correction for low electric fields, built from an
escaping electron fraction χ₀(dE/dx) and a field correction f_corr(E, dE/dx).

The coefficient containers double as tags for the active model:
:class:`ModBoxCoefficients` and :class:`BirksCoefficients` each carry their
:class:`RecombinationModel`, so a parameter set always holds exactly one model.

All functions accept floats or numpy arrays. Field values are in kV/cm and
dE/dx in MeV/cm; density-dependent coefficients must already be divided by
the argon density (see :meth:`ModBoxCoefficients.per_density`).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Optional, Union

import numpy as np

#: Lower bound applied to dE/dx [MeV/cm] before evaluating any model.
MIN_DEDX = 1.0


class RecombinationModel(str, Enum):
    """Identifier of the base recombination formula."""

    MODIFIED_BOX = "modified-box"
    BIRKS = "birks"


@dataclass(frozen=True)
class ModBoxCoefficients:
    """
    Modified box model coefficients.

    :ivar A: Dimensionless α parameter.
    :ivar B: β parameter in (kV/cm)(g/cm²)/MeV, or kV/MeV once divided by density.
    """

    model: ClassVar[RecombinationModel] = RecombinationModel.MODIFIED_BOX

    A: float = 0.930
    B: float = 0.212

    def __post_init__(self):
        if self.A <= 0 or self.B <= 0:
            raise ValueError("Modified box coefficients A and B must be positive.")

    def per_density(self, density: float) -> "ModBoxCoefficients":
        """Return a copy with B divided by the medium density [g/cm³]."""
        return replace(self, B=self.B / density)


@dataclass(frozen=True)
class BirksCoefficients:
    """
    Birks model coefficients.

    :ivar A: Dimensionless normalization A_B.
    :ivar k: k_B parameter in (kV/cm)(g/cm²)/MeV, or kV/MeV once divided by density.
    """

    model: ClassVar[RecombinationModel] = RecombinationModel.BIRKS

    A: float = 0.800
    k: float = 0.0486

    def __post_init__(self):
        if self.A <= 0 or self.k <= 0:
            raise ValueError("Birks coefficients A and k must be positive.")

    def per_density(self, density: float) -> "BirksCoefficients":
        """Return a copy with k divided by the medium density [g/cm³]."""
        return replace(self, k=self.k / density)


RecombinationCoefficients = Union[ModBoxCoefficients, BirksCoefficients]


@dataclass(frozen=True)
class LarqlCoefficients:
    """
    LArQL low-field correction coefficients.

    χ₀ parameters describe the escaping electron fraction as a function of
    dE/dx, α and β the field dependence of the correction.
    """

    chi0_A: float = 0.00338427
    chi0_B: float = -6.57037
    chi0_C: float = 1.88418
    chi0_D: float = 0.000129379
    alpha: float = 0.0372
    beta: float = 0.0124


def floor_dedx(energy, step_length):
    """
    Compute dE/dx for a step and apply the :data:`MIN_DEDX` floor.

    Steps with non-positive length carry no meaningful dE/dx; they get 0
    before flooring, so every model receives dE/dx >= 1.

    :param energy: Deposited energy [MeV].
    :param step_length: Step length [cm].
    :returns: Floored dE/dx [MeV/cm].
    """
    energy = np.asarray(energy, dtype=float)
    step_length = np.asarray(step_length, dtype=float)
    positive = step_length > 0
    safe_step = np.where(positive, step_length, 1.0)
    dedx = np.where(positive, energy / safe_step, 0.0)
    return np.maximum(dedx, MIN_DEDX)


def modified_box_recombination(dEdx, efield, A: float, B: float):
    """
    Modified box survival fraction ln(A + ξ) / ξ with ξ = B·dE/dx / E.

    :param dEdx: Ionization density [MeV/cm].
    :param efield: Electric field [kV/cm].
    :param A: α coefficient.
    :param B: β coefficient divided by density [kV/MeV].
    :returns: Fraction of electrons escaping recombination.
    """
    xi = B * np.asarray(dEdx, dtype=float) / np.asarray(efield, dtype=float)
    return np.log(A + xi) / xi


def birks_recombination(dEdx, efield, A: float, k: float):
    """
    Birks survival fraction A / (1 + k·dE/dx / E).

    :param dEdx: Ionization density [MeV/cm].
    :param efield: Electric field [kV/cm].
    :param A: Normalization coefficient.
    :param k: Birks constant divided by density [kV/MeV].
    :returns: Fraction of electrons escaping recombination.
    """
    return A / (1.0 + np.asarray(dEdx, dtype=float) * k / np.asarray(efield, dtype=float))


def escaping_electron_fraction(dEdx, chi0_A: float, chi0_B: float, chi0_C: float, chi0_D: float):
    """LArQL χ₀: fraction of electrons escaping recombination at zero field."""
    return chi0_A / (chi0_B + np.exp(chi0_C + chi0_D * np.asarray(dEdx, dtype=float)))


def larql_field_correction(efield, dEdx, alpha: float, beta: float):
    """LArQL f_corr: suppresses the escaping term as the field grows."""
    dEdx = np.asarray(dEdx, dtype=float)
    return np.exp(-np.asarray(efield, dtype=float) / (alpha * np.log(dEdx) + beta))


def larql_correction(dEdx, efield, larql: LarqlCoefficients):
    """
    Additive LArQL term χ₀(dE/dx)·f_corr(E, dE/dx).

    :param dEdx: Floored ionization density [MeV/cm], must be positive.
    :param efield: Electric field [kV/cm].
    :param larql: Correction coefficients.
    """
    chi0 = escaping_electron_fraction(dEdx, larql.chi0_A, larql.chi0_B, larql.chi0_C, larql.chi0_D)
    return chi0 * larql_field_correction(efield, dEdx, larql.alpha, larql.beta)


def recombination_fraction(
    dEdx,
    efield,
    step_length,
    coefficients: RecombinationCoefficients,
    larql: Optional[LarqlCoefficients] = None,
):
    """
    Compute the recombination survival fraction for the active model.

    The modified box model yields 0 for point-like deposits (step length <= 0);
    the Birks model is always evaluated. When ``larql`` is given the LArQL
    term is added on top. The result is not clamped to [0, 1].

    :param dEdx: Floored ionization density [MeV/cm].
    :param efield: Effective electric field [kV/cm].
    :param step_length: Step length [cm].
    :param coefficients: Density-scaled coefficients of the active base model.
    :param larql: Optional LArQL coefficients.
    :returns: Survival fraction (float for scalar input, array otherwise).

    :raises TypeError: If ``coefficients`` is not a known model variant.
    """
    model = getattr(coefficients, "model", None)
    if model is RecombinationModel.MODIFIED_BOX:
        box = modified_box_recombination(dEdx, efield, coefficients.A, coefficients.B)
        recomb = np.where(np.asarray(step_length) > 0, box, 0.0)
    elif model is RecombinationModel.BIRKS:
        recomb = birks_recombination(dEdx, efield, coefficients.A, coefficients.k)
    else:
        raise TypeError(f"Unsupported recombination coefficients: {coefficients!r}")

    if larql is not None:
        recomb = recomb + larql_correction(dEdx, efield, larql)

    if np.ndim(recomb) == 0:
        return float(recomb)
    return recomb
