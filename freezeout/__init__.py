"""
Thermal emission from a spherical single freeze-out (SR) hypersurface.

Usage:
    from freezeout import load_model_config, EmissionSampler, load_particle

    config = load_model_config("models/sr_default.yaml").unwrap()
    sampler = EmissionSampler(config, np.random.default_rng(42))
    point, weight = sampler.evaluate(load_particle("Pion+"))
"""
from .kinematics import FourVector, PhaseSpacePoint
from .particles import ParticleType, ParticleDB, load_particle
from .thermodynamics import Chemistry, Thermodynamics
from .config import (
    ConfigError,
    ConfigOutcome,
    ModelConfig,
    RunSettings,
    load_model_config,
    parse_model_config,
)
from .sampler import EmissionSampler
from .description import describe, parameter_hash
from .unweighting import UnweightingController
from .integrator import YieldEstimate, integrate_yield, generate_events

__all__ = [
    "FourVector",
    "PhaseSpacePoint",
    "ParticleType",
    "ParticleDB",
    "load_particle",
    "Chemistry",
    "Thermodynamics",
    "ConfigError",
    "ConfigOutcome",
    "ModelConfig",
    "RunSettings",
    "load_model_config",
    "parse_model_config",
    "EmissionSampler",
    "describe",
    "parameter_hash",
    "UnweightingController",
    "YieldEstimate",
    "integrate_yield",
    "generate_events",
]
