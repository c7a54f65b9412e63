"""
Model parameter files for the single-freeze-out (SR) model.

A model file is a flat YAML mapping, e.g.::

    T0: 8.0             # [fm]
    R: 8.0              # [fm]
    H: 0.1              # [1]
    A: -0.5             # [1]
    GammaS: 1.0         # [1]
    Temperature: 165.6  # [MeV]
    Chemistry: chemical_potential
    MuB: 28.5           # [MeV]
    MuI: -0.9
    MuS: 6.9
    MuC: 0.0

Lengths are converted to GeV^-1 and energies to GeV on load. Errors are returned
as a ConfigOutcome rather than raised, so the caller decides whether to abort.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .kinematics import HBAR_C
from .thermodynamics import Chemistry, Thermodynamics

logger = logging.getLogger(__name__)

MODEL_NAME = "SR"

_CHEMICAL_POTENTIAL_KEYS = ("MuB", "MuI", "MuS", "MuC")
_GAMMA_LAMBDA_KEYS = ("LambdaQ", "LambdaI", "LambdaS", "LambdaC", "GammaQ", "GammaS", "GammaC")


class ConfigError(ValueError):
    """Missing, malformed or unrecognized model parameter."""


@dataclass(frozen=True)
class ModelConfig:
    """Resolved SR model parameters in natural units."""

    radius: float
    expansion_rate: float
    hypersurface_slope: float
    freeze_out_time0: float
    gamma_s: float
    thermo: Thermodynamics

    @property
    def hyper_volume(self) -> float:
        """Volume of the sampled (R, Phi, Theta, Zet, PhiP, ThetaP) box: R * (2 pi^2)^2."""
        return self.radius * (2.0 * math.pi * math.pi) ** 2


@dataclass(frozen=True)
class RunSettings:
    """Run-level bookkeeping that used to live in process globals."""

    model_name: str = MODEL_NAME
    integrate_samples: int = 0
    randomize: bool = False
    seed: Optional[int] = None
    event_subdir: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))


@dataclass(frozen=True)
class ConfigOutcome:
    config: Optional[ModelConfig] = None
    error: Optional[str] = None
    event_subdir: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ModelConfig:
        if self.error is not None:
            raise ConfigError(self.error)
        return self.config


def _number(params: Mapping[str, Any], key: str, default: Optional[float] = None) -> float:
    if key not in params or params[key] is None:
        if default is None:
            raise ConfigError(f"Did not find the necessary model parameter '{key}'")
        return default
    try:
        return float(params[key])
    except (TypeError, ValueError):
        raise ConfigError(f"Model parameter '{key}' is not a number: {params[key]!r}")


def _thermodynamics(params: Mapping[str, Any]) -> Thermodynamics:
    temperature = _number(params, "Temperature") * 0.001
    if temperature <= 0.0:
        raise ConfigError(f"Temperature must be positive, got {temperature * 1000.0} MeV")

    chemistry = params.get("Chemistry")
    if chemistry == Chemistry.CHEMICAL_POTENTIAL.value:
        mu_b, mu_i, mu_s, mu_c = (_number(params, k) * 0.001 for k in _CHEMICAL_POTENTIAL_KEYS)
        return Thermodynamics(
            temperature=temperature,
            chemistry=Chemistry.CHEMICAL_POTENTIAL,
            mu_b=mu_b, mu_i=mu_i, mu_s=mu_s, mu_c=mu_c,
            gamma_q=_number(params, "GammaQ", 1.0),
            gamma_s=_number(params, "GammaS"),
            gamma_c=_number(params, "GammaC", 1.0),
        )
    if chemistry == Chemistry.GAMMA_LAMBDA.value:
        lq, li, ls, lc, gq, gs, gc = (_number(params, k) for k in _GAMMA_LAMBDA_KEYS)
        for key, value in zip(_GAMMA_LAMBDA_KEYS[:4], (lq, li, ls, lc)):
            if value <= 0.0:
                raise ConfigError(f"Fugacity '{key}' must be positive, got {value}")
        return Thermodynamics(
            temperature=temperature,
            chemistry=Chemistry.GAMMA_LAMBDA,
            lambda_q=lq, lambda_i=li, lambda_s=ls, lambda_c=lc,
            gamma_q=gq, gamma_s=gs, gamma_c=gc,
        )
    raise ConfigError(
        f"Unknown chemistry mode {chemistry!r}; expected one of "
        f"{[c.value for c in Chemistry]}"
    )


def parse_model_config(params: Mapping[str, Any]) -> ConfigOutcome:
    """Validate a raw parameter mapping and convert it to natural units."""
    try:
        radius = _number(params, "R") / HBAR_C
        if radius < 0.0:
            raise ConfigError(f"Radius must be non-negative, got {params['R']} fm")
        config = ModelConfig(
            radius=radius,
            expansion_rate=_number(params, "H"),
            hypersurface_slope=_number(params, "A"),
            freeze_out_time0=_number(params, "T0") / HBAR_C,
            gamma_s=_number(params, "GammaS"),
            thermo=_thermodynamics(params),
        )
    except ConfigError as e:
        return ConfigOutcome(error=str(e))
    return ConfigOutcome(config=config, event_subdir=str(params.get("EventSubDir") or ""))


def load_model_config(path) -> ConfigOutcome:
    """Read a YAML model file; I/O and syntax problems are reported like any other config error."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            params = yaml.safe_load(fh)
    except OSError as e:
        return ConfigOutcome(error=f"Cannot read model file {path}: {e}")
    except yaml.YAMLError as e:
        return ConfigOutcome(error=f"Cannot parse model file {path}: {e}")

    if not isinstance(params, Mapping):
        return ConfigOutcome(error=f"Model file {path} must contain a key/value mapping")

    outcome = parse_model_config(params)
    if outcome.ok:
        logger.info(f"Loaded {MODEL_NAME} model parameters from {path}")
    return outcome
