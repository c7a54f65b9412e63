"""Kinematics test suite.

Covers:
  - mass shell re-projection through (mT, pT, phi, y)
  - rapidity at regular and singular points
  - Lorentz boosts
  - PhaseSpacePoint finiteness checks
"""

import math
import numpy as np
import pytest
from .kinematics import FourVector, PhaseSpacePoint, rapidity, HBAR_C


# ----------------------------- Utility ------------------------------------
def _assert_close(a, b, tol=1e-9, msg=""):
    assert abs(a - b) < tol, msg or f"Values differ: {a} vs {b} (tol={tol})"


def _on_shell_vector(mass, p, theta, phi):
    E = math.hypot(mass, p)
    return FourVector(E, p * math.sin(theta) * math.cos(phi), p * math.sin(theta) * math.sin(phi), p * math.cos(theta))


# --------------------------- Mass shell -----------------------------------
@pytest.mark.parametrize(
    "mass,p,theta,phi",
    [
        (0.13957, 0.5, 0.3, 1.0),
        (0.93827, 2.0, 2.9, -2.0),
        (0.0, 1.0, 1.2, 0.4),
        (0.49368, 250.0, 0.01, 3.0),
    ],
)
def test_on_shell_preserves_momentum_and_mass(mass, p, theta, phi):
    v = _on_shell_vector(mass, p, theta, phi)
    w = v.on_shell(mass, phi)
    _assert_close(w.E, v.E, tol=1e-9 * v.E)
    _assert_close(w.px, v.px, tol=1e-9 * v.E)
    _assert_close(w.py, v.py, tol=1e-9 * v.E)
    _assert_close(w.pz, v.pz, tol=1e-9 * v.E)
    _assert_close(w.mass_squared, mass * mass, tol=1e-9 * w.E * w.E)


def test_from_rapidity_at_midrapidity():
    v = FourVector.from_rapidity(mt=1.0, pt=0.6, phi=0.0, y=0.0)
    _assert_close(v.E, 1.0)
    _assert_close(v.pz, 0.0)
    _assert_close(v.px, 0.6)
    _assert_close(v.py, 0.0)


def test_transverse_quantities():
    v = FourVector(5.0, 3.0, 4.0, 0.0)
    _assert_close(v.pt, 5.0)
    _assert_close(v.transverse_mass(0.0), 5.0)
    _assert_close(v.phi, math.atan2(4.0, 3.0))


# --------------------------- Rapidity -------------------------------------
def test_rapidity_regular():
    _assert_close(rapidity(2.0, 0.0), 0.0)
    _assert_close(rapidity(2.0, 1.0), 0.5 * math.log(3.0))
    _assert_close(FourVector(2.0, 0.0, 0.0, -1.0).rapidity, -0.5 * math.log(3.0))


def test_rapidity_singular_points_do_not_raise():
    assert rapidity(1.0, 1.0) == math.inf
    assert rapidity(1.0, -1.0) == -math.inf
    assert math.isnan(rapidity(0.0, 0.0))


def test_on_shell_degenerate_rapidity_is_non_finite():
    w = FourVector(1.0, 0.0, 0.0, 1.0).on_shell(0.0, 0.0)
    point = PhaseSpacePoint.from_vectors((0.0, 0.0, 0.0, 0.0), w)
    assert not point.is_finite()


# --------------------------- Boosts ---------------------------------------
def test_boost_round_trip():
    v = _on_shell_vector(0.5, 1.3, 0.7, 2.1)
    beta = np.array([0.2, -0.3, 0.4])
    back = v.boost(beta).boost(-beta)
    _assert_close(back.E, v.E)
    _assert_close(back.px, v.px)
    _assert_close(back.pz, v.pz)


def test_boost_preserves_mass():
    v = _on_shell_vector(0.5, 1.3, 0.7, 2.1)
    b = v.boost(np.array([0.0, 0.6, 0.0]))
    _assert_close(b.mass, 0.5)


def test_superluminal_boost_raises():
    with pytest.raises(ValueError):
        FourVector(1.0, 0.0, 0.0, 0.0).boost(np.array([1.0, 0.0, 0.0]))


# --------------------------- PhaseSpacePoint ------------------------------
def test_phase_space_point_accessors():
    point = PhaseSpacePoint(1.0, 3.0, 0.0, 4.0, 2.0, 0.1, 0.2, 0.3)
    _assert_close(point.radius, 5.0)
    assert point.is_finite()
    assert point.momentum == FourVector(2.0, 0.1, 0.2, 0.3)
    assert point.position.tolist() == [1.0, 3.0, 0.0, 4.0]
    assert len(point.as_tuple()) == 8


def test_phase_space_point_nan():
    point = PhaseSpacePoint(0.0, 0.0, 0.0, 0.0, math.nan, 0.0, 0.0, 0.0)
    assert not point.is_finite()


def test_hbar_c_value():
    _assert_close(HBAR_C, 0.1973269804, tol=1e-12)
    # 1 fm in GeV^-1
    _assert_close(1.0 / HBAR_C, 5.067730716, tol=1e-8)
