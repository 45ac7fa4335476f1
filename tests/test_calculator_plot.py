import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pytest

from pyisc.calculator.core import ISCalcCorrelated, ISCalcParameters
from pyisc.detector.properties import DetectorPropertiesData
from pyisc.physics.recombination import LarqlCoefficients

@pytest.fixture
def calc():
    return ISCalcCorrelated(ISCalcParameters(larql=LarqlCoefficients()), DetectorPropertiesData())

def test_plot_recombination_default_grid(calc):
    ax = calc.plot_recombination(show=False)
    assert len(ax.get_lines()) == 4
    assert "LArQL" in ax.get_title()
    plt.close("all")

def test_plot_recombination_on_given_axes(calc):
    _, ax = plt.subplots()
    out = calc.plot_recombination(dedx=[0.5, 2.0, 10.0], efields=[0.5], ax=ax)
    assert out is ax
    line = ax.get_lines()[0]
    np.testing.assert_allclose(line.get_xdata(), [1.0, 2.0, 10.0])
    np.testing.assert_allclose(line.get_ydata(), calc.recombination(np.array([1.0, 2.0, 10.0]), 0.5))
    plt.close("all")

@pytest.mark.filterwarnings("ignore:.*non-interactive.*")
def test_plot_recombination_show(calc):
    calc.plot_recombination(efields=[0.5])
    plt.close("all")

def test_plot_recombination_requires_fields(calc):
    with pytest.raises(ValueError, match="At least one field value"):
        calc.plot_recombination(efields=[])
