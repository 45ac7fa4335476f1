import logging
import numpy as np
import pytest
from concurrent.futures import ThreadPoolExecutor
from dataclasses import FrozenInstanceError
from types import SimpleNamespace

from pyisc.calculator.core import ISCalcCorrelated, ISCalcParameters
from pyisc.calculator.records import ISCalcData, SimEnergyDeposit
from pyisc.detector.properties import DetectorPropertiesData
from pyisc.detector.space_charge import UniformSpaceCharge
from pyisc.physics.recombination import (
    BirksCoefficients,
    LarqlCoefficients,
    ModBoxCoefficients,
    RecombinationModel,
)
from pyisc.physics.yield_ratio import ScintYieldRatios

def make_calc(recombination=None, larql=None, efield=0.5, space_charge=None, **kwargs):
    params = ISCalcParameters(
        recombination=recombination or ModBoxCoefficients(0.930, 0.212),
        larql=larql,
        **kwargs,
    )
    detprop = DetectorPropertiesData(efield=efield, density_override=1.0)
    return ISCalcCorrelated(params, detprop, space_charge)

# --- ISCalcParameters ---

def test_parameters_defaults():
    p = ISCalcParameters()
    assert p.model is RecombinationModel.MODIFIED_BOX
    assert p.larql is None
    np.testing.assert_allclose(p.w_ion, 23.6e-6, rtol=1e-3)
    assert p.w_ph == 19.5e-6

@pytest.mark.parametrize("field_name", ["gev_to_electrons", "w_ph", "scint_prescale"])
def test_parameters_reject_non_positive(field_name):
    with pytest.raises(ValueError, match=f"{field_name} must be positive"):
        ISCalcParameters(**{field_name: 0.0})

def test_parameters_reject_unknown_recombination():
    with pytest.raises(TypeError, match="recombination must be"):
        ISCalcParameters(recombination=SimpleNamespace(A=1.0, B=1.0))

def test_parameters_reject_bad_larql():
    with pytest.raises(TypeError, match="larql must be"):
        ISCalcParameters(larql={"alpha": 1.0})

def test_parameters_are_immutable():
    p = ISCalcParameters()
    with pytest.raises(FrozenInstanceError):
        p.scint_prescale = 2.0

def test_from_dict_nested():
    p = ISCalcParameters.from_dict({
        "recombination": {"model": "birks", "A": 0.8, "k": 0.05},
        "larql": {"alpha": 0.04},
        "scint_yield": {"by_particle_type": True, "proton": 0.5},
        "scint_prescale": 0.5,
    })
    assert p.recombination == BirksCoefficients(0.8, 0.05)
    assert p.larql.alpha == 0.04
    assert p.scint_yield.proton == 0.5
    assert p.scint_prescale == 0.5

def test_from_dict_defaults_to_modbox():
    p = ISCalcParameters.from_dict({"recombination": {"A": 0.9, "B": 0.2}})
    assert p.recombination == ModBoxCoefficients(0.9, 0.2)

def test_from_dict_unknown_key():
    with pytest.raises(ValueError, match="Unrecognized keys"):
        ISCalcParameters.from_dict({"w_ph": 19.5e-6, "extra": 1})

@pytest.mark.parametrize("config, target", [
    ({"recombination": {"A": 0.9, "bogus": 1.0}}, "ModBoxCoefficients"),
    ({"recombination": {"model": "birks", "A": 0.8, "B": 0.2}}, "BirksCoefficients"),
    ({"larql": {"gamma": 1.0}}, "LarqlCoefficients"),
    ({"scint_yield": {"neutron": 0.3}}, "ScintYieldRatios"),
])
def test_from_dict_unknown_nested_key(config, target):
    with pytest.raises(ValueError, match=f"Unrecognized keys in {target} config"):
        ISCalcParameters.from_dict(config)

def test_from_service_config_birks_with_larql():
    p = ISCalcParameters.from_service_config({
        "UseModBoxRecomb": False,
        "RecombA": 0.81,
        "Recombk": 0.05,
        "UseModLarqlRecomb": True,
        "LarqlBeta": 0.02,
        "ScintByParticleType": True,
        "MuonScintYieldRatio": 0.11,
    })
    assert p.recombination == BirksCoefficients(0.81, 0.05)
    assert p.larql.beta == 0.02
    assert p.larql.alpha == LarqlCoefficients().alpha
    assert p.scint_yield.by_particle_type is True
    assert p.scint_yield.muon == 0.11

def test_from_service_config_larql_disabled():
    p = ISCalcParameters.from_service_config({"UseModLarqlRecomb": False, "LarqlAlpha": 5.0})
    assert p.larql is None

def test_from_service_config_warns_on_unknown():
    with pytest.warns(UserWarning, match="Ignoring unrecognized service parameters"):
        ISCalcParameters.from_service_config({"ModBoxA": 0.93, "DriftVelocity": 1.6})

def test_default_parameters_from_bundled_file():
    p = ISCalcParameters.default()
    assert p.recombination == ModBoxCoefficients(0.930, 0.212)
    assert p.larql is None
    assert p.scint_yield == ScintYieldRatios()

# --- ISCalcCorrelated construction ---

def test_calculator_rejects_wrong_parameters():
    with pytest.raises(TypeError, match="instance of ISCalcParameters"):
        ISCalcCorrelated(parameters={"w_ph": 1.0})

def test_calculator_divides_by_density():
    detprop = DetectorPropertiesData(temperature=87.0)
    calc = ISCalcCorrelated(ISCalcParameters(), detprop)
    density = detprop.density()
    np.testing.assert_allclose(calc.density, density)
    np.testing.assert_allclose(calc.recombination_coefficients.B, 0.212 / density)
    assert calc.params.recombination.B == 0.212

def test_calculator_uses_bundled_defaults(caplog):
    caplog.set_level(logging.INFO)
    calc = ISCalcCorrelated()
    assert calc.params.model is RecombinationModel.MODIFIED_BOX
    assert "ISCalcCorrelated initialized" in caplog.text
    assert "<ISCalcCorrelated" in repr(calc)

# --- calc_ion_and_scint ---

def test_reference_scenario():
    calc = make_calc()
    result = calc.calc_ion_and_scint(SimEnergyDeposit(energy=1.0, step_length=0.3, pdg_code=13))
    xi = 0.212 * (1.0 / 0.3) / 0.5
    recomb = np.log(0.930 + xi) / xi
    expected_electrons = 1.0 / calc.w_ion * recomb
    assert isinstance(result, ISCalcData)
    np.testing.assert_allclose(result.num_electrons, expected_electrons)
    assert 25000 < result.num_electrons < 27000
    np.testing.assert_allclose(result.num_photons, 1.0 / 19.5e-6 - expected_electrons)
    assert result.energy_deposit == 1.0

@pytest.mark.parametrize("step", [0.0, -0.1])
def test_modbox_point_deposit_has_no_electrons(step):
    calc = make_calc()
    result = calc.calc_ion_and_scint(SimEnergyDeposit(energy=0.5, step_length=step))
    assert result.num_electrons == 0.0
    np.testing.assert_allclose(result.num_photons, 0.5 / 19.5e-6)

def test_birks_point_deposit_uses_floor():
    calc = make_calc(recombination=BirksCoefficients(0.8, 0.0486))
    result = calc.calc_ion_and_scint(SimEnergyDeposit(energy=0.5, step_length=0.0))
    recomb = 0.8 / (1 + 1.0 * 0.0486 / 0.5)
    np.testing.assert_allclose(result.num_electrons, 0.5 / calc.w_ion * recomb)

@pytest.mark.parametrize("recombination", [ModBoxCoefficients(0.93, 0.212), BirksCoefficients(0.8, 0.0486)])
@pytest.mark.parametrize("energy, step", [(0.0, 0.1), (0.001, 0.03), (1.0, 0.3), (50.0, 0.1), (2.0, 0.0)])
def test_quanta_conservation_and_bounds(recombination, energy, step):
    calc = make_calc(recombination=recombination, scint_prescale=0.5)
    result = calc.calc_ion_and_scint(SimEnergyDeposit(energy=energy, step_length=step))
    assert result.num_electrons >= 0.0
    assert result.num_electrons <= energy / calc.w_ion + 1e-9
    np.testing.assert_allclose(
        result.num_photons / 0.5 + result.num_electrons, energy / calc.w_ph, rtol=1e-12, atol=1e-9
    )

def test_larql_increases_electrons_at_low_field():
    edep = SimEnergyDeposit(energy=1.0, step_length=0.3)
    plain = make_calc(efield=0.01).calc_ion_and_scint(edep)
    corrected = make_calc(efield=0.01, larql=LarqlCoefficients()).calc_ion_and_scint(edep)
    assert corrected.num_electrons > plain.num_electrons
    assert corrected.num_photons < plain.num_photons

def test_per_call_detector_properties_override_field():
    calc = make_calc(efield=0.5)
    edep = SimEnergyDeposit(energy=1.0, step_length=0.3)
    low = calc.calc_ion_and_scint(edep, DetectorPropertiesData(efield=0.1, density_override=1.0))
    nominal = calc.calc_ion_and_scint(edep)
    assert low.num_electrons < nominal.num_electrons

def test_space_charge_changes_field():
    edep = SimEnergyDeposit(energy=1.0, step_length=0.3, midpoint=(10.0, 0.0, 0.0))
    calc = make_calc(space_charge=UniformSpaceCharge((0.2, 0.0, 0.0)))
    np.testing.assert_allclose(calc.efield_at_step(0.5, edep), 0.6)
    boosted = calc.calc_ion_and_scint(edep)
    nominal = make_calc().calc_ion_and_scint(edep)
    assert boosted.num_electrons > nominal.num_electrons

def test_yield_ratio_attached_to_result():
    ratios = ScintYieldRatios(by_particle_type=True, alpha=0.7)
    calc = make_calc(scint_yield=ratios)
    result = calc.calc_ion_and_scint(SimEnergyDeposit(energy=5.0, step_length=0.01, pdg_code=1000020040))
    assert result.scint_yield_ratio == 0.7

def test_calculation_is_repeatable():
    calc = make_calc(larql=LarqlCoefficients())
    edep = SimEnergyDeposit(energy=0.7, step_length=0.2, pdg_code=2212)
    assert calc.calc_ion_and_scint(edep) == calc.calc_ion_and_scint(edep)

def test_shared_calculator_across_threads():
    calc = make_calc(larql=LarqlCoefficients(), space_charge=UniformSpaceCharge((0.1, 0.02, 0.0)))
    deposits = [
        SimEnergyDeposit(energy=0.1 * (i + 1), step_length=0.05 * (i % 7), pdg_code=pdg)
        for i, pdg in enumerate([11, 13, 2212, 211, 1000020040, 22] * 10)
    ]
    serial = [calc.calc_ion_and_scint(edep) for edep in deposits]
    with ThreadPoolExecutor(max_workers=4) as executor:
        threaded = list(executor.map(calc.calc_ion_and_scint, deposits))
    assert threaded == serial

def test_debug_log_emitted(caplog):
    caplog.set_level(logging.DEBUG, logger="pyisc.calculator.core")
    make_calc().calc_ion_and_scint(SimEnergyDeposit(energy=1.0, step_length=0.3))
    assert "Electrons produced for 1.0 MeV" in caplog.text

# --- summary ---

def test_summary_output(capsys):
    calc = make_calc(larql=LarqlCoefficients())
    calc.summary(verbose=True)
    out = capsys.readouterr().out
    assert "ISCalcCorrelated Configuration" in out
    assert "modified-box" in out
    assert "LArQL" in out
    assert "Scint. yield ratio" in out

# --- records ---

def test_deposit_from_endpoints():
    edep = SimEnergyDeposit.from_endpoints(2.0, (0.0, 0.0, 0.0), (3.0, 4.0, 0.0), pdg_code=13)
    assert edep.step_length == 5.0
    assert edep.midpoint == (1.5, 2.0, 0.0)
    assert edep.pdg_code == 13

def test_result_as_dict():
    data = ISCalcData(1.0, 2.0, 3.0, 0.3)
    assert data.as_dict() == {
        "energy_deposit": 1.0, "num_electrons": 2.0, "num_photons": 3.0, "scint_yield_ratio": 0.3,
    }
