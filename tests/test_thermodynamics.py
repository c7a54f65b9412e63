"""
Chemical potentials and fugacities for both chemistry parametrizations.
"""
import math
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from freezeout.particles import ParticleType
from freezeout.sampler import EmissionSampler
from freezeout.config import ModelConfig
from freezeout.thermodynamics import Chemistry, Thermodynamics

PROTON = ParticleType("Proton", 2212, 0.93827, spin=0.5, i3=0.5, number_q=3)
KAON = ParticleType("Kaon+", 321, 0.49368, spin=0.0, i3=0.5, number_q=1, number_as=1)
LAMBDA = ParticleType("Lambda", 3122, 1.11568, spin=0.5, number_q=2, number_s=1)
D0 = ParticleType("D0", 421, 1.86484, spin=0.0, i3=-0.5, number_aq=1, number_c=1)


def test_chemical_potential_mode():
    thermo = Thermodynamics(temperature=0.1656, mu_b=0.0285, mu_i=-0.0009, mu_s=0.0069, mu_c=0.002)
    assert thermo.chemistry is Chemistry.CHEMICAL_POTENTIAL
    assert thermo.chemical_potential(PROTON) == pytest.approx(0.0285 + 0.5 * -0.0009)
    assert thermo.chemical_potential(KAON) == pytest.approx(0.5 * -0.0009 + 0.0069)
    assert thermo.chemical_potential(LAMBDA) == pytest.approx(0.0285 - 0.0069)
    assert thermo.chemical_potential(D0) == pytest.approx(-0.5 * -0.0009 + 0.002)


def test_gamma_lambda_mode():
    T = 0.156
    thermo = Thermodynamics(
        temperature=T, chemistry=Chemistry.GAMMA_LAMBDA,
        lambda_q=1.06, lambda_i=0.99, lambda_s=1.02, lambda_c=1.0,
    )
    expected = T * (math.log(1.06) + 0.5 * math.log(0.99) - math.log(1.02))
    assert thermo.chemical_potential(KAON) == pytest.approx(expected)
    assert thermo.chemical_potential(PROTON) == pytest.approx(T * (3 * math.log(1.06) + 0.5 * math.log(0.99)))


def test_fugacity_includes_light_quark_gamma():
    thermo = Thermodynamics(temperature=0.15, mu_b=0.03, gamma_q=0.8, gamma_s=0.6)
    mu = thermo.chemical_potential(LAMBDA)
    assert thermo.fugacity(LAMBDA) == pytest.approx(0.8 ** 2 * 0.6 * math.exp(mu / 0.15))

    # the emission weight uses the strangeness factor alone
    config = ModelConfig(radius=1.0, expansion_rate=0.0, hypersurface_slope=0.0,
                         freeze_out_time0=0.0, gamma_s=0.6, thermo=thermo)
    upsilon = EmissionSampler(config).upsilon(LAMBDA)
    assert upsilon == pytest.approx(0.6 * math.exp(mu / 0.15))
    assert thermo.fugacity(LAMBDA) != pytest.approx(upsilon)


def test_fugacity_saturates_instead_of_overflowing():
    thermo = Thermodynamics(temperature=0.15, mu_s=200.0)
    assert thermo.fugacity(KAON) == math.inf
    assert Thermodynamics(temperature=0.15, mu_s=200.0, gamma_s=0.0).fugacity(KAON) == 0.0


@pytest.mark.parametrize("temperature", [0.0, -0.1])
def test_non_positive_temperature_rejected(temperature):
    with pytest.raises(ValueError):
        Thermodynamics(temperature=temperature)


def test_non_positive_lambda_rejected():
    with pytest.raises(ValueError):
        Thermodynamics(temperature=0.15, chemistry=Chemistry.GAMMA_LAMBDA, lambda_s=0.0)
