"""Example: drive the services directly (without Flask).

Controllers are a thin layer; search, check-in and export all live in the services.
"""

import asyncio
import importlib

from config import get_settings_module

from event_checkin.container import build_container
from event_checkin.roster.model import new_person


async def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    await container.roster.add(new_person(name="Ann Lee", email="ann@example.com", student_id="1001"))
    await container.roster.add(new_person(name="Benny Ann", email="benny@example.com", student_id="1002"))

    matches = container.roster.search("ann")
    print([p.name for p in matches])

    await container.ledger.check_in(matches[0].id)
    print(await container.export_service.export_csv())


if __name__ == "__main__":
    asyncio.run(main())
