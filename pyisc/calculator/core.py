"""
Correlated ionization and scintillation calculator.

This module defines:

- :class:`ISCalcParameters`: immutable constants of the recombination model,
  work functions and scintillation settings
- :class:`ISCalcCorrelated`: the calculator that splits an energy deposit into
  ionization electrons and scintillation photons

The split follows simple microphysics: the deposited energy produces
N_q = E / W_ph quanta (ions + excitons). A fraction R of the ionization
electrons, E / W_ion, escapes recombination; every other quantum ends up as a
scintillation photon. This makes charge and light anticorrelated.

Example::

    from pyisc import ISCalcCorrelated, ISCalcParameters, SimEnergyDeposit
    from pyisc.detector import DetectorPropertiesData

    calc = ISCalcCorrelated(ISCalcParameters.default(), DetectorPropertiesData(efield=0.5))
    result = calc.calc_ion_and_scint(SimEnergyDeposit(energy=1.0, step_length=0.3, pdg_code=13))
    result.num_electrons, result.num_photons
"""

import logging
import warnings
from dataclasses import asdict, dataclass, field
from typing import Optional

from tabulate import tabulate

from pyisc.calculator.records import ISCalcData, SimEnergyDeposit
from pyisc.detector.properties import DetectorPropertiesData
from pyisc.io.data_registry import load_default_parameters
from pyisc.physics.field import effective_field
from pyisc.physics.recombination import (
    BirksCoefficients,
    LarqlCoefficients,
    ModBoxCoefficients,
    RecombinationCoefficients,
    RecombinationModel,
    floor_dedx,
    recombination_fraction,
)
from pyisc.physics.yield_ratio import ScintYieldRatios

logger = logging.getLogger(__name__)

# Service keys per species, in ScintYieldRatios field order
_SERVICE_YIELD_KEYS = {
    "proton": "ProtonScintYieldRatio",
    "muon": "MuonScintYieldRatio",
    "pion": "PionScintYieldRatio",
    "kaon": "KaonScintYieldRatio",
    "alpha": "AlphaScintYieldRatio",
    "electron": "ElectronScintYieldRatio",
}

_SERVICE_LARQL_KEYS = {
    "chi0_A": "LarqlChi0A",
    "chi0_B": "LarqlChi0B",
    "chi0_C": "LarqlChi0C",
    "chi0_D": "LarqlChi0D",
    "alpha": "LarqlAlpha",
    "beta": "LarqlBeta",
}

_SERVICE_KEYS = {
    "ModBoxA", "ModBoxB", "RecombA", "Recombk", "UseModBoxRecomb", "UseModLarqlRecomb",
    "GeVToElectrons", "ScintPreScale", "ScintByParticleType", "ScintYieldRatio",
    *_SERVICE_YIELD_KEYS.values(), *_SERVICE_LARQL_KEYS.values(),
}


def _check_keys(target, config: dict):
    extra_keys = set(config.keys()) - set(target.__dataclass_fields__.keys())
    if extra_keys:
        raise ValueError(
            f"Unrecognized keys in {target.__name__} config: {sorted(extra_keys)}"
        )


def _recombination_from_dict(config: dict) -> RecombinationCoefficients:
    config = dict(config)
    model = RecombinationModel(config.pop("model", RecombinationModel.MODIFIED_BOX))
    target = ModBoxCoefficients if model is RecombinationModel.MODIFIED_BOX else BirksCoefficients
    _check_keys(target, config)
    return target(**config)


@dataclass(frozen=True)
class ISCalcParameters:
    """
    Configuration container for the correlated calculation.

    :ivar recombination: Coefficients of the active base model, either
        :class:`ModBoxCoefficients` or :class:`BirksCoefficients`. Density-dependent
        terms are in (kV/cm)(g/cm²)/MeV.
    :ivar larql: LArQL low-field correction coefficients, or None to disable it.
    :ivar gev_to_electrons: Ionization electrons per GeV deposited.
    :ivar w_ph: Ion + excitation work function [MeV].
    :ivar scint_prescale: Scale factor applied to the photon count.
    :ivar scint_yield: Fast-to-total scintillation ratios.
    """

    recombination: RecombinationCoefficients = field(default_factory=ModBoxCoefficients)
    larql: Optional[LarqlCoefficients] = None
    gev_to_electrons: float = 4.237e7
    w_ph: float = 19.5e-6
    scint_prescale: float = 1.0
    scint_yield: ScintYieldRatios = field(default_factory=ScintYieldRatios)

    def __post_init__(self):
        if not isinstance(self.recombination, (ModBoxCoefficients, BirksCoefficients)):
            raise TypeError(
                "recombination must be ModBoxCoefficients or BirksCoefficients, "
                f"got {type(self.recombination).__name__}."
            )
        if self.larql is not None and not isinstance(self.larql, LarqlCoefficients):
            raise TypeError("larql must be LarqlCoefficients or None.")
        if self.gev_to_electrons <= 0:
            raise ValueError("gev_to_electrons must be positive.")
        if self.w_ph <= 0:
            raise ValueError("w_ph must be positive.")
        if self.scint_prescale <= 0:
            raise ValueError("scint_prescale must be positive.")

    @property
    def model(self) -> RecombinationModel:
        return self.recombination.model

    @property
    def w_ion(self) -> float:
        """Ionization work function [MeV]."""
        return 1.0 / self.gev_to_electrons * 1e3

    @classmethod
    def from_dict(cls, config: dict) -> "ISCalcParameters":
        """
        Create an ISCalcParameters instance from a dictionary.

        Nested structures may be given as dictionaries; ``recombination`` takes
        an optional ``model`` key ('modified-box' or 'birks').

        :param config: Dictionary of configuration fields.
        :type config: dict

        :returns: Populated ISCalcParameters instance.
        :rtype: ISCalcParameters

        :raises ValueError: If unknown keys are present in the dictionary or in
            one of its nested structures.
        """
        _check_keys(cls, config)

        config = dict(config)
        if isinstance(config.get("recombination"), dict):
            config["recombination"] = _recombination_from_dict(config["recombination"])
        if isinstance(config.get("larql"), dict):
            _check_keys(LarqlCoefficients, config["larql"])
            config["larql"] = LarqlCoefficients(**config["larql"])
        if isinstance(config.get("scint_yield"), dict):
            _check_keys(ScintYieldRatios, config["scint_yield"])
            config["scint_yield"] = ScintYieldRatios(**config["scint_yield"])
        return cls(**config)

    @classmethod
    def from_service_config(cls, config: dict) -> "ISCalcParameters":
        """
        Create an ISCalcParameters instance from LArSoft-style parameter names.

        ``UseModBoxRecomb`` selects the modified box model (else Birks) and
        ``UseModLarqlRecomb`` enables the LArQL correction. Missing keys keep
        their defaults; unknown keys are ignored with a warning.

        :param config: Flat dictionary such as ``argon_defaults.json``.
        :type config: dict

        :returns: Populated ISCalcParameters instance.
        :rtype: ISCalcParameters
        """
        unknown = set(config.keys()) - _SERVICE_KEYS
        if unknown:
            warnings.warn(f"Ignoring unrecognized service parameters: {sorted(unknown)}")

        if config.get("UseModBoxRecomb", True):
            defaults = ModBoxCoefficients()
            recombination = ModBoxCoefficients(
                A=config.get("ModBoxA", defaults.A), B=config.get("ModBoxB", defaults.B)
            )
        else:
            defaults = BirksCoefficients()
            recombination = BirksCoefficients(
                A=config.get("RecombA", defaults.A), k=config.get("Recombk", defaults.k)
            )

        larql = None
        if config.get("UseModLarqlRecomb", False):
            base = asdict(LarqlCoefficients())
            larql = LarqlCoefficients(
                **{name: config.get(key, base[name]) for name, key in _SERVICE_LARQL_KEYS.items()}
            )

        yield_defaults = asdict(ScintYieldRatios())
        scint_yield = ScintYieldRatios(
            by_particle_type=bool(config.get("ScintByParticleType", False)),
            default=config.get("ScintYieldRatio", yield_defaults["default"]),
            **{name: config.get(key, yield_defaults[name]) for name, key in _SERVICE_YIELD_KEYS.items()},
        )

        return cls(
            recombination=recombination,
            larql=larql,
            gev_to_electrons=config.get("GeVToElectrons", 4.237e7),
            scint_prescale=config.get("ScintPreScale", 1.0),
            scint_yield=scint_yield,
        )

    @classmethod
    def default(cls) -> "ISCalcParameters":
        """Parameters from the bundled liquid argon defaults."""
        return cls.from_service_config(load_default_parameters())


class ISCalcCorrelated:
    """
    Anticorrelated electron/photon yield calculator.

    Density-dependent recombination coefficients are divided by the argon
    density once, at construction. The instance holds no per-call state, so a
    single calculator can be shared between threads as long as the detector
    and space-charge collaborators can be read concurrently.
    """

    def __init__(
        self,
        parameters: Optional[ISCalcParameters] = None,
        detector_properties: Optional[DetectorPropertiesData] = None,
        space_charge=None,
    ) -> None:
        """
        Initialize the calculator.

        :param parameters: Model constants. If None, the bundled argon defaults are used.
        :type parameters: Optional[ISCalcParameters]
        :param detector_properties: Nominal field and argon conditions. Defaults to
            :class:`~pyisc.detector.properties.DetectorPropertiesData` defaults.
        :type detector_properties: Optional[DetectorPropertiesData]
        :param space_charge: Field distortion model, or None for no distortion.

        :raises TypeError: If ``parameters`` is not an ISCalcParameters instance.
        """
        parameters = parameters if parameters is not None else ISCalcParameters.default()
        if not isinstance(parameters, ISCalcParameters):
            raise TypeError("parameters must be an instance of ISCalcParameters.")

        self._params = parameters
        self._detector_properties = detector_properties or DetectorPropertiesData()
        self._space_charge = space_charge

        # Coefficients are in g/(MeV cm²) but dE/dx is in MeV/cm
        self._density = self._detector_properties.density(self._detector_properties.temperature)
        self._recombination = parameters.recombination.per_density(self._density)
        self._larql = parameters.larql
        self._w_ion = parameters.w_ion
        self._w_ph = parameters.w_ph
        self._scint_prescale = parameters.scint_prescale

        logger.info(
            f"ISCalcCorrelated initialized: model={parameters.model.value}, "
            f"LArQL={'on' if self._larql is not None else 'off'}, density={self._density:.4f} g/cm3"
        )

    def __repr__(self):
        return (f"<ISCalcCorrelated model={self.params.model.value}, "
                f"larql={self._larql is not None}, density={self._density:.4f}>")

    @property
    def params(self) -> ISCalcParameters:
        return self._params

    @property
    def detector_properties(self) -> DetectorPropertiesData:
        return self._detector_properties

    @property
    def space_charge(self):
        return self._space_charge

    @property
    def density(self) -> float:
        """Argon density [g/cm³] used to scale the recombination coefficients."""
        return self._density

    @property
    def recombination_coefficients(self) -> RecombinationCoefficients:
        """Density-scaled coefficients used at evaluation time."""
        return self._recombination

    @property
    def w_ion(self) -> float:
        return self._w_ion

    @property
    def w_ph(self) -> float:
        return self._w_ph

    def efield_at_step(self, efield: float, edep: SimEnergyDeposit) -> float:
        """
        Field magnitude at the deposit midpoint.

        :param efield: Nominal drift field [kV/cm].
        :param edep: Energy deposit.
        :returns: Effective field [kV/cm].
        """
        return effective_field(efield, edep.midpoint, self._space_charge)

    def recombination(self, dEdx, efield, step_length=1.0):
        """
        Survival fraction for floored dE/dx and effective field.

        :param dEdx: Floored ionization density [MeV/cm].
        :param efield: Effective field [kV/cm].
        :param step_length: Step length [cm]; only its sign matters.
        """
        return recombination_fraction(dEdx, efield, step_length, self._recombination, self._larql)

    def scint_yield_ratio(self, edep: SimEnergyDeposit) -> float:
        """Fast-to-total scintillation ratio for the depositing particle."""
        return self._params.scint_yield.ratio_for(edep.pdg_code)

    def calc_ion_and_scint(
        self,
        edep: SimEnergyDeposit,
        detector_properties: Optional[DetectorPropertiesData] = None,
    ) -> ISCalcData:
        """
        Compute ionization electrons and scintillation photons for one deposit.

        :param edep: Energy deposit.
        :type edep: SimEnergyDeposit
        :param detector_properties: Detector state for this call. Defaults to the
            properties bound at construction; only its field is used.
        :type detector_properties: Optional[DetectorPropertiesData]

        :returns: Electrons, photons and yield ratio.
        :rtype: ISCalcData
        """
        detprop = detector_properties or self._detector_properties
        energy_deposit = float(edep.energy)

        # total quanta (ions + excitons)
        num_quanta = energy_deposit / self._w_ph

        dEdx = float(floor_dedx(energy_deposit, edep.step_length))
        efield = self.efield_at_step(detprop.efield, edep)
        recomb = self.recombination(dEdx, efield, edep.step_length)

        num_electrons = (energy_deposit / self._w_ion) * recomb
        num_photons = (num_quanta - num_electrons) * self._scint_prescale

        logger.debug(
            f"Electrons produced for {energy_deposit} MeV deposited with {recomb} "
            f"recombination: {num_electrons}; photons: {num_photons}"
        )

        return ISCalcData(
            energy_deposit=energy_deposit,
            num_electrons=num_electrons,
            num_photons=num_photons,
            scint_yield_ratio=self.scint_yield_ratio(edep),
        )

    def summary(self, verbose: bool = False):
        """
        Print a summary of the calculator configuration.

        :param verbose: If True, also list LArQL coefficients and yield ratios.
        :type verbose: bool, optional
        """
        rec = self._params.recombination
        rec_values = asdict(rec)

        main_parameters = [("Recombination model", rec.model.value)]
        main_parameters += [(f"{name} (raw)", value) for name, value in rec_values.items()]
        main_parameters += [
            ("LArQL correction", "enabled" if self._larql is not None else "disabled"),
            ("Drift field [kV/cm]", self._detector_properties.efield),
            ("Density [g/cm³]", round(self._density, 4)),
            ("W_ion [eV]", round(self._w_ion * 1e6, 3)),
            ("W_ph [eV]", round(self._w_ph * 1e6, 3)),
            ("Scint. prescale", self._scint_prescale),
            ("Space charge", "enabled" if getattr(self._space_charge, "enable_sim_efield_sce", False) else "disabled"),
        ]

        print("\nISCalcCorrelated Configuration\n")
        print(tabulate(main_parameters, headers=["Parameter", "Value"], tablefmt="fancy_grid"))

        if verbose:
            if self._larql is not None:
                print()
                print(tabulate(list(asdict(self._larql).items()), headers=["LArQL", "Value"], tablefmt="fancy_grid"))
            print()
            print(tabulate(list(asdict(self._params.scint_yield).items()),
                           headers=["Scint. yield ratio", "Value"], tablefmt="fancy_grid"))
