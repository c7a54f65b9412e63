"""
Kinematics helpers for the freeze-out emission kernel.

Units: GeV for energies and momenta, GeV^-1 for lengths (natural units c = hbar = 1).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple
import numpy as np

HBAR_C = 0.1973269804  # GeV fm


# -----------------------------
# FourVector
# -----------------------------
@dataclass(frozen=True)
class FourVector:
    E: float
    px: float
    py: float
    pz: float

    @property
    def mass_squared(self) -> float:
        return self.E * self.E - self.px * self.px - self.py * self.py - self.pz * self.pz

    @property
    def mass(self) -> float:
        return math.sqrt(max(self.mass_squared, 0.0))

    @property
    def pt(self) -> float:
        return math.hypot(self.px, self.py)

    @property
    def phi(self) -> float:
        return math.atan2(self.py, self.px)

    def transverse_mass(self, mass: float) -> float:
        return math.hypot(mass, self.pt)

    @property
    def rapidity(self) -> float:
        return rapidity(self.E, self.pz)

    def boost(self, beta: np.ndarray) -> "FourVector":
        p4 = np.array([self.E, self.px, self.py, self.pz], dtype=float)
        boosted = lorentz_boost_array(p4, np.asarray(beta, dtype=float))
        return FourVector(float(boosted[0]), float(boosted[1]), float(boosted[2]), float(boosted[3]))

    @classmethod
    def from_rapidity(cls, mt: float, pt: float, phi: float, y: float) -> "FourVector":
        """Build a four-momentum from (mT, pT, phi, y); on shell by construction."""
        with np.errstate(over="ignore", invalid="ignore"):
            E = float(mt * np.cosh(np.float64(y)))
            pz = float(mt * np.sinh(np.float64(y)))
        return cls(E, pt * math.cos(phi), pt * math.sin(phi), pz)

    def on_shell(self, mass: float, phi: float) -> "FourVector":
        """
        Re-project onto the mass shell through (mT, pT, phi, y).

        Identity in exact arithmetic; removes rounding drift so E^2 - p^2 = m^2
        holds to machine precision. When |pz| -> E the rapidity diverges and the
        result carries inf/nan components instead of raising.
        """
        pt = self.pt
        return FourVector.from_rapidity(math.hypot(mass, pt), pt, phi, self.rapidity)

    def __repr__(self) -> str:
        return f"FourVector(E={self.E:.6f}, px={self.px:.6f}, py={self.py:.6f}, pz={self.pz:.6f})"


def rapidity(E: float, pz: float) -> float:
    """0.5 ln((E + pz) / (E - pz)); returns +-inf or nan at the singular points."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(0.5 * np.log(np.divide(np.float64(E + pz), np.float64(E - pz))))


# -----------------------------
# Lorentz boost
# -----------------------------
def lorentz_boost_array(p4: np.ndarray, beta: np.ndarray) -> np.ndarray:
    beta = np.asarray(beta, dtype=float)
    p4 = np.asarray(p4, dtype=float)
    beta2 = float(np.dot(beta, beta))
    if beta2 >= 1.0:
        raise ValueError("beta^2 < 1 required.")
    if beta2 <= 1e-18:
        return p4.copy()
    gamma = 1.0 / math.sqrt(1.0 - beta2)
    bp = float(np.dot(beta, p4[1:]))
    Eprime = gamma * (p4[0] + bp)
    factor = ((gamma - 1.0) * bp / beta2) + gamma * p4[0]
    pprime = p4[1:] + factor * beta
    return np.array([Eprime, pprime[0], pprime[1], pprime[2]], dtype=float)


# -----------------------------
# Phase-space point
# -----------------------------
@dataclass(frozen=True)
class PhaseSpacePoint:
    """Emission point (t, x, y, z) and four-momentum (E, px, py, pz) of one sample."""

    t: float
    x: float
    y: float
    z: float
    E: float
    px: float
    py: float
    pz: float

    @classmethod
    def from_vectors(cls, position: Tuple[float, float, float, float], momentum: FourVector) -> "PhaseSpacePoint":
        t, x, y, z = position
        return cls(t, x, y, z, momentum.E, momentum.px, momentum.py, momentum.pz)

    @property
    def position(self) -> np.ndarray:
        return np.array([self.t, self.x, self.y, self.z], dtype=float)

    @property
    def momentum(self) -> FourVector:
        return FourVector(self.E, self.px, self.py, self.pz)

    @property
    def radius(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.as_tuple())

    def as_tuple(self) -> Tuple[float, ...]:
        return (self.t, self.x, self.y, self.z, self.E, self.px, self.py, self.pz)
