import sys
from pathlib import Path

# === Paths ===
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from freezeout.particles import DB_PATH, ParticleDB

CSV_PATH = BASE_DIR / "data" / "particles.csv"

if __name__ == "__main__":
    csv_path = Path(sys.argv[1]) if len(sys.argv) > 1 else CSV_PATH
    db = ParticleDB.from_csv(csv_path, DB_PATH)
    particles = db.all()

    print(f"✅ Done! Imported {len(particles)} particles.")
    print(f"📦 Database: {DB_PATH}")
    for p in particles:
        print(f"  {p.name:12s} | PDG ID: {p.pdg:6d} | m = {p.mass:.5f} GeV")
