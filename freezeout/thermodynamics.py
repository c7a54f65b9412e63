"""
Thermodynamic state at freeze-out.

Two mutually exclusive chemistry parametrizations are supported:

* ``chemical_potential``: mu = B*mu_B + I3*mu_I3 + S*mu_S + C*mu_C
* ``gamma_lambda``: mu = T * ln(lambda_Q^(Nq-Naq) * lambda_I3^I3 * lambda_S^(Ns-Nas) * lambda_C^(Nc-Nac))

Temperatures and chemical potentials in GeV.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum

from .particles import ParticleType


def safe_exp(x: float) -> float:
    """math.exp that saturates to inf instead of raising OverflowError."""
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


class Chemistry(str, Enum):
    CHEMICAL_POTENTIAL = "chemical_potential"
    GAMMA_LAMBDA = "gamma_lambda"


@dataclass(frozen=True)
class Thermodynamics:
    temperature: float
    chemistry: Chemistry = Chemistry.CHEMICAL_POTENTIAL
    mu_b: float = 0.0
    mu_i: float = 0.0
    mu_s: float = 0.0
    mu_c: float = 0.0
    lambda_q: float = 1.0
    lambda_i: float = 1.0
    lambda_s: float = 1.0
    lambda_c: float = 1.0
    gamma_q: float = 1.0
    gamma_s: float = 1.0
    gamma_c: float = 1.0

    def __post_init__(self):
        if self.temperature <= 0.0:
            raise ValueError(f"Temperature must be positive, got {self.temperature}")
        if self.chemistry is Chemistry.GAMMA_LAMBDA:
            for name in ("lambda_q", "lambda_i", "lambda_s", "lambda_c"):
                if getattr(self, name) <= 0.0:
                    raise ValueError(f"Fugacity {name} must be positive, got {getattr(self, name)}")

    def chemical_potential(self, particle: ParticleType) -> float:
        if self.chemistry is Chemistry.CHEMICAL_POTENTIAL:
            return (
                particle.baryon_number * self.mu_b
                + particle.i3 * self.mu_i
                + particle.strangeness * self.mu_s
                + particle.charm * self.mu_c
            )
        log_lambda = (
            (particle.number_q - particle.number_aq) * math.log(self.lambda_q)
            + particle.i3 * math.log(self.lambda_i)
            + (particle.number_s - particle.number_as) * math.log(self.lambda_s)
            + (particle.number_c - particle.number_ac) * math.log(self.lambda_c)
        )
        return self.temperature * log_lambda

    def fugacity(self, particle: ParticleType) -> float:
        """
        gamma_Q^(Nq+Naq) * gamma_S^(Ns+Nas) * exp(mu/T).

        Carries the light-quark gamma factor, unlike the strangeness-only factor
        used in the emission weight.
        """
        gamma = (
            self.gamma_q ** (particle.number_q + particle.number_aq)
            * self.gamma_s ** (particle.number_s + particle.number_as)
        )
        # 0 * inf would give nan
        if gamma == 0.0:
            return 0.0
        return gamma * safe_exp(self.chemical_potential(particle) / self.temperature)
