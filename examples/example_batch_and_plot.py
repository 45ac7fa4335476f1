import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from pyisc import ISCalcCorrelated, ISCalcParameters
from pyisc.detector import DetectorPropertiesData, TabulatedSpaceCharge
from pyisc.io import load_default_parameters

# Enable LArQL and per-particle yield ratios on top of the bundled defaults
config = load_default_parameters()
config.update({"UseModLarqlRecomb": True, "ScintByParticleType": True})
params = ISCalcParameters.from_service_config(config)

# Toy space-charge map: field offset growing towards the cathode (x = 0)
x = np.linspace(0.0, 360.0, 19)
y = np.linspace(-300.0, 300.0, 13)
z = np.linspace(0.0, 700.0, 15)
X, _, _ = np.meshgrid(x, y, z, indexing="ij")
dx = 0.04 * (1.0 - X / x.max())
sce = TabulatedSpaceCharge(x, y, z, dx, np.zeros_like(dx), np.zeros_like(dx))

calc = ISCalcCorrelated(params, DetectorPropertiesData(efield=0.5), sce)

# Random deposits from a mix of particles
rng = np.random.default_rng(0)
n = 50000
deposits = pd.DataFrame({
    "energy": rng.exponential(0.5, n),
    "step_length": rng.uniform(0.01, 0.5, n),
    "pdg_code": rng.choice([11, 13, 2212, 211, 1000020040], n),
    "x": rng.uniform(0.0, 360.0, n),
    "y": rng.uniform(-300.0, 300.0, n),
    "z": rng.uniform(0.0, 700.0, n),
})

table = calc.compute(deposits, parallel=True, show_progress=True)
print(table.describe())

# Recombination curves and charge-light anticorrelation
fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
calc.plot_recombination(ax=ax1, show=False)
ax2.scatter(table["num_electrons"] / table["energy_deposit"],
            table["num_photons"] / table["energy_deposit"], s=2, alpha=0.3)
ax2.set_xlabel("Electrons / MeV")
ax2.set_ylabel("Photons / MeV")
plt.tight_layout()
plt.show()
