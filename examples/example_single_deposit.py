from pyisc import ISCalcCorrelated, ISCalcParameters, SimEnergyDeposit, LarqlCoefficients
from pyisc.detector import DetectorPropertiesData, UniformSpaceCharge

# Nominal ProtoDUNE-like conditions
detprop = DetectorPropertiesData(efield=0.5, temperature=87.0)

# Bundled argon defaults (modified box, no LArQL)
calc = ISCalcCorrelated(ISCalcParameters.default(), detprop)
calc.summary(verbose=True)

# A 1 MeV muon step of 3 mm
edep = SimEnergyDeposit(energy=1.0, step_length=0.3, pdg_code=13, midpoint=(100.0, 0.0, 250.0))
result = calc.calc_ion_and_scint(edep)
print(f"\nModified box: {result.num_electrons:.0f} electrons, {result.num_photons:.0f} photons")

# Same deposit at low field, with and without the LArQL correction
low_field = DetectorPropertiesData(efield=0.05)
plain = ISCalcCorrelated(ISCalcParameters(), low_field).calc_ion_and_scint(edep)
larql = ISCalcCorrelated(ISCalcParameters(larql=LarqlCoefficients()), low_field).calc_ion_and_scint(edep)
print(f"0.05 kV/cm: {plain.num_electrons:.0f} electrons (box) vs {larql.num_electrons:.0f} (box + LArQL)")

# Space charge raising the local field by 5 %
sce_calc = ISCalcCorrelated(ISCalcParameters(), detprop, UniformSpaceCharge((0.05, 0.0, 0.0)))
print(f"With space charge: {sce_calc.calc_ion_and_scint(edep).num_electrons:.0f} electrons")
