"""
Cooper-Frye emission kernel for the single-freeze-out (SR) model.

The freeze-out hypersurface is a sphere of radius R with freeze-out time
t = T0 + A*r and a Hubble-like radial flow u^mu with rapidity H*r. Each call to
EmissionSampler.evaluate draws one point of the (R, Phi, Theta, Zet, PhiP, ThetaP)
box and returns the emission point, the on-shell four-momentum and the
differential particle number at that point.
"""

from __future__ import annotations
import math
from typing import List, Optional, Tuple

import numpy as np

from .config import ModelConfig
from .kinematics import FourVector, PhaseSpacePoint
from .particles import ParticleType
from .thermodynamics import safe_exp

TWO_PI3 = (2.0 * math.pi) ** 3


def momentum_substitution(zet: float) -> Tuple[float, float]:
    """Map zet in [0, 1) to p in [0, inf); returns (p, dp/dzet)."""
    return zet / (1.0 - zet), 1.0 / ((1.0 - zet) * (1.0 - zet))


def angular_correlation(theta: float, phi: float, theta_p: float, phi_p: float) -> float:
    """Cosine of the angle between the position and momentum directions."""
    return math.cos(theta) * math.cos(theta_p) + math.sin(theta) * math.sin(theta_p) * math.cos(phi - phi_p)


def flow_energy(energy: float, momentum: float, kappa: float, expansion_rate: float, r: float) -> float:
    """
    u.p for the radial Hubble flow: particle energy in the local fluid rest frame.

    Saturates to inf (or nan) for flow rapidities beyond the float range.
    """
    rho = np.float64(expansion_rate * r)
    with np.errstate(over="ignore", invalid="ignore"):
        return float((energy - momentum * np.tanh(rho) * kappa) * np.cosh(rho))


def flux_factor(r: float, theta: float, energy: float, momentum: float, kappa: float, slope: float) -> float:
    """d(Sigma).p including the r^2 sin(theta) Jacobian; inward flux clamped to zero."""
    d_sigma = r * r * math.sin(theta) * (energy - momentum * slope * kappa)
    # no emission back into the fluid
    if d_sigma < 0.0:
        d_sigma = 0.0
    return d_sigma


def occupation_number(u_dot_p: float, temperature: float, upsilon: float,
                      degeneracy: float, statistics: float) -> float:
    """
    (g / (2 pi)^3) / (exp(u.p / T) / Upsilon + statistics).

    Zero when Upsilon vanishes (gamma_S = 0 for strange species), when u.p is not
    finite, when the exponential overflows, and when the denominator is not
    positive (Bose condensation regime, where the occupation is undefined).
    """
    if upsilon <= 0.0 or not math.isfinite(u_dot_p):
        return 0.0
    denominator = safe_exp(u_dot_p / temperature) / upsilon + statistics
    if not denominator > 0.0 or math.isinf(denominator):
        return 0.0
    return (degeneracy / TWO_PI3) / denominator


class EmissionSampler:
    """
    Samples emission points and Cooper-Frye weights for one species at a time.

    Not safe for concurrent use: the weight depends on a fixed sequence of draws
    from ``rng`` (R, Phi, Theta, Zet, PhiP, ThetaP, then the finite-width mass
    draw if any). Give each worker its own sampler, see ``spawn``.
    """

    def __init__(self, config: ModelConfig, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.thermo = config.thermo
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def hyper_volume(self) -> float:
        return self.config.hyper_volume

    def spawn(self, n: int) -> List["EmissionSampler"]:
        """n samplers sharing the configuration, each with an independent child stream."""
        return [EmissionSampler(self.config, child) for child in self.rng.spawn(n)]

    def upsilon(self, particle: ParticleType) -> float:
        """Strangeness-suppressed fugacity entering the emission weight."""
        T = self.thermo.temperature
        mu = self.thermo.chemical_potential(particle)
        gamma = self.thermo.gamma_s ** (particle.number_s + particle.number_as)
        if gamma == 0.0:
            return 0.0
        return gamma * safe_exp(mu / T)

    def evaluate(self, particle: ParticleType, finite_width: bool = False) -> Tuple[PhaseSpacePoint, float]:
        """
        Draw one phase-space point for ``particle`` and return (point, weight).

        The weight is the Cooper-Frye integrand times the Jacobian of the
        (R, Phi, Theta, Zet, PhiP, ThetaP) parametrization; it is never negative.
        The point may carry non-finite momentum components when the rapidity
        diverges; callers are expected to discard such samples.
        """
        cfg = self.config
        rng = self.rng

        # Bose-Einstein or Fermi-Dirac
        gs = particle.degeneracy
        statistics = particle.statistics
        T = self.thermo.temperature

        # spatial position
        r = cfg.radius * rng.random()
        phi = 2.0 * math.pi * rng.random()
        theta = math.pi * rng.random()

        # momentum, 0 <= p < inf
        p, dp_dzet = momentum_substitution(rng.random())
        phi_p = 2.0 * math.pi * rng.random()
        theta_p = math.pi * rng.random()

        mass, _spectral_weight = particle.sample_mass(rng, finite_width)

        ep = math.hypot(mass, p)
        kappa = angular_correlation(theta, phi, theta_p, phi_p)
        u_dot_p = flow_energy(ep, p, kappa, cfg.expansion_rate, r)
        d_sigma_dot_p = flux_factor(r, theta, ep, p, kappa, cfg.hypersurface_slope)

        position = (
            cfg.freeze_out_time0 + cfg.hypersurface_slope * r,
            r * math.cos(phi) * math.sin(theta),
            r * math.sin(phi) * math.sin(theta),
            r * math.cos(theta),
        )
        momentum = FourVector(
            ep,
            p * math.cos(phi_p) * math.sin(theta_p),
            p * math.sin(phi_p) * math.sin(theta_p),
            p * math.cos(theta_p),
        ).on_shell(mass, phi_p)

        upsilon = self.upsilon(particle)
        dp = p * p * math.sin(theta_p) * dp_dzet / ep if ep > 0.0 else 0.0
        f = occupation_number(u_dot_p, T, upsilon, gs, statistics)

        weight = f * dp * d_sigma_dot_p
        return PhaseSpacePoint.from_vectors(position, momentum), weight
