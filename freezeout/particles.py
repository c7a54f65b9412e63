import math
import sqlite3
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

# Path to the particle table shipped with the repository
DB_PATH = Path(__file__).resolve().parents[1] / "data" / "particles.db"

# Breit-Wigner sampling window, in units of the width around the pole mass
BW_WINDOW = 3.0

# spin - int(spin) below this counts as integral
SPIN_TOLERANCE = 0.01


@dataclass(frozen=True)
class ParticleType:
    """
    Hadron species descriptor.

    Quark content is stored as counts of light quarks (u, d), strange and charm
    quarks together with their antiquark counterparts. Masses and widths in GeV.
    """

    name: str
    pdg: int
    mass: float
    spin: float = 0.0
    width: float = 0.0
    i3: float = 0.0
    number_q: int = 0
    number_aq: int = 0
    number_s: int = 0
    number_as: int = 0
    number_c: int = 0
    number_ac: int = 0
    threshold: float = 0.0

    def __post_init__(self):
        if self.spin < 0:
            raise ValueError(f"Spin must be non-negative for {self.name}, got {self.spin}")
        if self.mass < 0:
            raise ValueError(f"Mass must be non-negative for {self.name}, got {self.mass}")

    # -------------------- Quantum numbers --------------------

    @property
    def degeneracy(self) -> float:
        return 2.0 * self.spin + 1.0

    @property
    def is_boson(self) -> bool:
        return (self.spin - int(self.spin)) < SPIN_TOLERANCE

    @property
    def statistics(self) -> float:
        """-1 for Bose-Einstein, +1 for Fermi-Dirac."""
        return -1.0 if self.is_boson else +1.0

    @property
    def baryon_number(self) -> float:
        quarks = self.number_q + self.number_s + self.number_c
        antiquarks = self.number_aq + self.number_as + self.number_ac
        return (quarks - antiquarks) / 3.0

    @property
    def strangeness(self) -> int:
        return self.number_as - self.number_s

    @property
    def charm(self) -> int:
        return self.number_c - self.number_ac

    # -------------------- Mass sampling --------------------

    def sample_mass(self, rng, finite_width: bool = False) -> Tuple[float, float]:
        """
        Return (mass, spectral_weight).

        Point mass (no draws) unless finite_width is set and the species has a
        width; then one draw from a Breit-Wigner truncated to
        [max(threshold, m - BW_WINDOW*width), m + BW_WINDOW*width], sampled by
        inverse CDF. The spectral weight is the probability mass of the
        Breit-Wigner inside the window.
        """
        if not finite_width or self.width <= 0.0:
            return self.mass, 1.0

        half = 0.5 * self.width
        lo = max(self.threshold, self.mass - BW_WINDOW * self.width)
        hi = self.mass + BW_WINDOW * self.width
        a = math.atan((lo - self.mass) / half)
        b = math.atan((hi - self.mass) / half)
        u = rng.random()
        mass = self.mass + half * math.tan(a + u * (b - a))
        return mass, (b - a) / math.pi

    def __repr__(self):
        return (
            f"ParticleType(name={self.name}, pdg={self.pdg}, mass={self.mass:.4f} GeV, "
            f"width={self.width:.4f} GeV, spin={self.spin}, B={self.baryon_number:+.0f}, "
            f"S={self.strangeness:+d}, C={self.charm:+d})"
        )


class ParticleDB:
    """
    Species lookup backed by the `particles` table of a sqlite file.
    Includes in-memory caching for fast lookups.
    """

    COLUMNS = (
        "name", "pdg", "mass", "spin", "width", "i3",
        "number_q", "number_aq", "number_s", "number_as",
        "number_c", "number_ac", "threshold",
    )

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = Path(db_path)
        self._cache: Dict[str, ParticleType] = {}

    def get(self, name_or_pdg) -> ParticleType:
        """Fetch a species by name (case-insensitive) or PDG code."""
        key = str(name_or_pdg).lower()
        if key in self._cache:
            return self._cache[key]

        if not self.db_path.exists():
            raise ValueError(f"Particle database not found at {self.db_path}")

        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            cur = conn.cursor()
            if isinstance(name_or_pdg, int):
                cur.execute("SELECT * FROM particles WHERE pdg = ?", (name_or_pdg,))
            else:
                cur.execute(
                    "SELECT * FROM particles WHERE LOWER(name) = LOWER(?)",
                    (str(name_or_pdg),),
                )
            row = cur.fetchone()
        finally:
            conn.close()

        if not row:
            raise ValueError(f"Particle '{name_or_pdg}' not found in database at {self.db_path}")

        particle = self._from_row(dict(row))
        self._cache[key] = particle
        logger.debug(f"Loaded {particle}")
        return particle

    @classmethod
    def from_csv(cls, csv_path: Path, db_path: Path = DB_PATH) -> "ParticleDB":
        """(Re)build the sqlite particle table from a CSV file with the COLUMNS headers."""
        df = pd.read_csv(csv_path)
        missing = [c for c in ("name", "pdg", "mass") if c not in df.columns]
        if missing:
            raise ValueError(f"Particle CSV {csv_path} lacks required columns {missing}")
        df = df.loc[:, [c for c in cls.COLUMNS if c in df.columns]]

        conn = sqlite3.connect(db_path)
        try:
            df.to_sql("particles", conn, if_exists="replace", index=False)
            conn.commit()
        finally:
            conn.close()
        logger.info(f"Imported {len(df)} particles from {csv_path} into {db_path}")
        return cls(db_path)

    def all(self) -> list:
        """Every species in the table, ordered by mass."""
        if not self.db_path.exists():
            raise ValueError(f"Particle database not found at {self.db_path}")
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            rows = conn.execute("SELECT * FROM particles ORDER BY mass").fetchall()
        finally:
            conn.close()
        return [self._from_row(dict(r)) for r in rows]

    @classmethod
    def _from_row(cls, data: dict) -> ParticleType:
        kwargs = {k: data[k] for k in cls.COLUMNS if k in data and data[k] is not None}
        for k in ("pdg", "number_q", "number_aq", "number_s", "number_as", "number_c", "number_ac"):
            if k in kwargs:
                kwargs[k] = int(kwargs[k])
        for k in ("mass", "spin", "width", "i3", "threshold"):
            if k in kwargs:
                kwargs[k] = float(kwargs[k])
        return ParticleType(**kwargs)


def load_particle(name_or_pdg, db_path: Optional[Path] = None) -> ParticleType:
    return ParticleDB(db_path or DB_PATH).get(name_or_pdg)
