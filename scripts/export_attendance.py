"""Write the attendance presence matrix to a CSV file."""

from __future__ import annotations

import asyncio
import importlib
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from event_checkin.container import build_container


async def export(out_file: Path) -> Path:
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    if not await container.roster.refresh():
        raise SystemExit("Could not read the roster from the document store.")
    return await container.export_service.write_csv(out_file)


def main() -> None:
    out_dir = REPO_ROOT / "exports"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = Path(sys.argv[1]) if len(sys.argv) > 1 else out_dir / f"attendance_export_{ts}.csv"

    print(f"OK: Export created: {asyncio.run(export(out_file))}")


if __name__ == "__main__":
    main()
