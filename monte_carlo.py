#!/usr/bin/env python3
"""
Monte Carlo driver script for the SR freeze-out model

Examples:
    python monte_carlo.py --particle "Pion+" --samples 100000
    python monte_carlo.py --model models/sr_gamma_lambda.yaml --events 10 --seed 42
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from freezeout.config import RunSettings, load_model_config
from freezeout.description import describe
from freezeout.integrator import generate_events, integrate_yield, multiplicity_table
from freezeout.particles import DB_PATH, ParticleDB
from freezeout.sampler import EmissionSampler

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_MODEL = BASE_DIR / "models" / "sr_default.yaml"
DEFAULT_CSV = BASE_DIR / "data" / "particles.csv"

logger = logging.getLogger("monte_carlo")


def build_parser():
    return argparse.ArgumentParser(
        description="Thermal emission from a single freeze-out (SR) hypersurface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  python monte_carlo.py --particle "Pion+" --samples 100000
  python monte_carlo.py --particle Proton --particle Lambda --finite-width
  python monte_carlo.py --events 10 --seed 42"""
    )


def open_particle_db(db_path: Path, csv_path: Path) -> ParticleDB:
    if not db_path.exists():
        logger.info(f"Particle database {db_path} missing, importing {csv_path}")
        return ParticleDB.from_csv(csv_path, db_path)
    return ParticleDB(db_path)


def main(argv=None):
    parser = build_parser()
    parser.add_argument("--model", type=Path, default=DEFAULT_MODEL, help="YAML model parameter file")
    parser.add_argument("--particles-db", type=Path, default=DB_PATH, help="sqlite particle table")
    parser.add_argument("--particles-csv", type=Path, default=DEFAULT_CSV,
                        help="CSV used to build the particle table when the database is missing")
    parser.add_argument("--particle", action="append", default=None,
                        help="Species name or PDG code (repeatable, default: all)")
    parser.add_argument("--samples", type=int, default=100_000, help="Integration samples per species")
    parser.add_argument("--events", type=int, default=0, help="Number of events to generate (default 0)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    parser.add_argument("--finite-width", action="store_true", help="Sample resonance masses from Breit-Wigner")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    outcome = load_model_config(args.model)
    if not outcome.ok:
        logger.error(f"Configuration error: {outcome.error}")
        return 2
    config = outcome.config

    settings = RunSettings(
        integrate_samples=args.samples,
        randomize=args.seed is None,
        seed=args.seed,
        event_subdir=outcome.event_subdir,
    )
    print(describe(config, settings))

    db = open_particle_db(args.particles_db, args.particles_csv)
    if args.particle:
        species = [db.get(int(p)) if p.lstrip("-").isdigit() else db.get(p) for p in args.particle]
    else:
        species = db.all()

    sampler = EmissionSampler(config, np.random.default_rng(args.seed))

    print("=" * 60)
    print(f"{'Species':15s} {'PDG':>8s} {'<N>':>12s} {'error':>10s} {'w_max':>10s}")
    yields = []
    for particle in species:
        est = integrate_yield(sampler, particle, args.samples, args.finite_width)
        yields.append(est)
        print(f"{particle.name:15s} {particle.pdg:8d} {est.multiplicity:12.4f} "
              f"{est.error:10.4f} {est.max_weight:10.3e}")
    print("=" * 60 + "\n")

    if args.events > 0:
        usable = [est for est in yields if est.max_weight > 0.0]
        events = generate_events(sampler, usable, args.events, args.finite_width)
        print("Mean multiplicity per event:")
        for pdg, mean in sorted(multiplicity_table(events).items()):
            print(f"  • {pdg:8d}: {mean:.3f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
