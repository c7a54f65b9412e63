"""
Monte-Carlo driver around EmissionSampler.

* integrate_yield: average multiplicity of a species, hyper_volume * <weight>
* estimate_w_max / sample_particles: accept-reject unweighting of emission points
* generate_event(s): Poisson multiplicities per species, then unweighted sampling
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .kinematics import PhaseSpacePoint
from .particles import ParticleType
from .sampler import EmissionSampler
from .unweighting import UnweightingController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YieldEstimate:
    particle: ParticleType
    multiplicity: float
    error: float
    max_weight: float
    n_samples: int
    n_discarded: int


def integrate_yield(sampler: EmissionSampler,
                    particle: ParticleType,
                    n_samples: int,
                    finite_width: bool = False) -> YieldEstimate:
    """
    Integrate the Cooper-Frye weight over the sampling box.

    Samples with non-finite coordinates are discarded and counted as zero
    contributions; the running maximum is kept for later unweighting.
    """
    if n_samples <= 0:
        raise ValueError(f"n_samples must be positive, got {n_samples}")

    total = 0.0
    total_sq = 0.0
    w_max = 0.0
    discarded = 0
    for _ in range(n_samples):
        point, weight = sampler.evaluate(particle, finite_width)
        if not point.is_finite() or not math.isfinite(weight):
            discarded += 1
            continue
        total += weight
        total_sq += weight * weight
        w_max = max(w_max, weight)

    mean = total / n_samples
    variance = max(total_sq / n_samples - mean * mean, 0.0)
    volume = sampler.hyper_volume
    estimate = YieldEstimate(
        particle=particle,
        multiplicity=volume * mean,
        error=volume * math.sqrt(variance / n_samples),
        max_weight=w_max,
        n_samples=n_samples,
        n_discarded=discarded,
    )
    logger.info(
        f"{particle.name} ({particle.pdg}): <N> = {estimate.multiplicity:.4f} "
        f"+- {estimate.error:.4f} [w_max={w_max:.3e}, discarded {discarded}/{n_samples}]"
    )
    return estimate


def estimate_w_max(sampler: EmissionSampler,
                   particle: ParticleType,
                   n_trials: int = 5000,
                   finite_width: bool = False) -> float:
    w_max = 0.0
    for _ in range(n_trials):
        point, weight = sampler.evaluate(particle, finite_width)
        if point.is_finite() and math.isfinite(weight):
            w_max = max(w_max, weight)

    if w_max <= 0:
        raise RuntimeError(f"Failed to estimate w_max for {particle.name} (no non-zero weights)")
    return w_max


def sample_particles(sampler: EmissionSampler,
                     particle: ParticleType,
                     n: int,
                     controller: UnweightingController,
                     finite_width: bool = False,
                     max_attempts: Optional[int] = None) -> List[PhaseSpacePoint]:
    """
    Draw n unweighted emission points by accept-reject against controller.w_max.

    Raises RuntimeError when max_attempts evaluations do not yield n points.
    """
    accepted: List[PhaseSpacePoint] = []
    attempts = 0
    while len(accepted) < n:
        if max_attempts is not None and attempts >= max_attempts:
            raise RuntimeError(
                f"Accepted only {len(accepted)}/{n} {particle.name} after {attempts} attempts"
            )
        attempts += 1
        point, weight = sampler.evaluate(particle, finite_width)
        if not point.is_finite():
            continue
        if controller.accept(weight, sampler.rng):
            accepted.append(point)
    return accepted


def generate_event(sampler: EmissionSampler,
                   yields: List[YieldEstimate],
                   controllers: Dict[int, UnweightingController],
                   finite_width: bool = False) -> List[Tuple[ParticleType, PhaseSpacePoint]]:
    """One event: Poisson multiplicity for every species, then unweighted points."""
    event: List[Tuple[ParticleType, PhaseSpacePoint]] = []
    for est in yields:
        n = int(sampler.rng.poisson(est.multiplicity))
        if n == 0:
            continue
        points = sample_particles(sampler, est.particle, n, controllers[est.particle.pdg], finite_width)
        event.extend((est.particle, pt) for pt in points)
    return event


def generate_events(sampler: EmissionSampler,
                    yields: List[YieldEstimate],
                    n_events: int,
                    finite_width: bool = False,
                    safety_factor: float = 1.2) -> List[List[Tuple[ParticleType, PhaseSpacePoint]]]:
    controllers = {}
    for est in yields:
        if est.max_weight <= 0.0:
            raise RuntimeError(f"No non-zero weight recorded for {est.particle.name}; integrate first")
        controllers[est.particle.pdg] = UnweightingController(est.max_weight, safety_factor)

    events = [generate_event(sampler, yields, controllers, finite_width) for _ in range(n_events)]

    n_particles = sum(len(ev) for ev in events)
    logger.info(f"\n✅ Generated {n_events} events with {n_particles} particles")
    for pdg, ctrl in controllers.items():
        logger.info(f"Unweighting efficiency [{pdg}]: {ctrl.efficiency:.3f} ({ctrl.overflows} overflows)")
    return events


def multiplicity_table(events) -> Dict[int, float]:
    """Mean number of particles per event, keyed by PDG code."""
    counts: Dict[int, int] = {}
    for ev in events:
        for particle, _ in ev:
            counts[particle.pdg] = counts.get(particle.pdg, 0) + 1
    n = max(len(events), 1)
    return {pdg: c / n for pdg, c in counts.items()}


def transverse_momenta(points: List[PhaseSpacePoint]) -> np.ndarray:
    return np.array([p.momentum.pt for p in points], dtype=float)
