"""Import roster people from a CSV file (Name,Email,StudentID[,Subteam,Grade]).

Usage: python scripts/seed_db.py roster.csv
"""

from __future__ import annotations

import asyncio
import csv
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from event_checkin.container import build_container
from event_checkin.roster.model import new_person


async def seed(csv_path: Path) -> int:
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    added = 0
    with csv_path.open(newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            name = (row.get("Name") or "").strip()
            if not name:
                continue
            person = new_person(
                name=name,
                email=row.get("Email") or "",
                student_id=row.get("StudentID") or "",
                subteam=row.get("Subteam") or "",
                grade=row.get("Grade") or "",
            )
            if await container.roster.add(person):
                added += 1
    return added


def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit("usage: seed_db.py ROSTER_CSV")
    added = asyncio.run(seed(Path(sys.argv[1])))
    print(f"OK: Seeded {added} people")


if __name__ == "__main__":
    main()
