import sys
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

sys.path.append(str(Path(__file__).resolve().parents[1]))

from freezeout.config import load_model_config
from freezeout.integrator import estimate_w_max, sample_particles, transverse_momenta
from freezeout.particles import load_particle
from freezeout.sampler import EmissionSampler
from freezeout.unweighting import UnweightingController

MODEL = Path(__file__).resolve().parents[1] / "models" / "sr_default.yaml"


def main(species="Pion+", n=20000, seed=42):
    config = load_model_config(MODEL).unwrap()
    sampler = EmissionSampler(config, np.random.default_rng(seed))
    particle = load_particle(species)

    w_max = estimate_w_max(sampler, particle, n_trials=20000)
    points = sample_particles(sampler, particle, n, UnweightingController(w_max))
    pt = transverse_momenta(points)

    T = config.thermo.temperature
    mt = np.sqrt(pt**2 + particle.mass**2)

    plt.figure(figsize=(7, 5))
    counts, edges = np.histogram(pt, bins=60, range=(0.0, 2.0))
    centers = 0.5 * (edges[1:] + edges[:-1])
    widths = np.diff(edges)
    # dN / (pT dpT)
    plt.semilogy(centers, counts / (centers * widths * n), "o", ms=3, label=f"SR sample ({species})")

    # exp(-mT/T) shape normalized at the first bin, for reference
    ref = np.exp(-(np.sqrt(centers**2 + particle.mass**2) - particle.mass) / T)
    plt.semilogy(centers, ref * counts[0] / (centers[0] * widths[0] * n), "-", label=f"exp(-mT/T), T={T*1000:.0f} MeV")

    plt.xlabel(r"$p_T$ [GeV]")
    plt.ylabel(r"$dN / (p_T\, dp_T)$ [a.u.]")
    plt.title(f"Transverse momentum spectrum, mean mT = {mt.mean():.3f} GeV")
    plt.legend()
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main(*sys.argv[1:2])
