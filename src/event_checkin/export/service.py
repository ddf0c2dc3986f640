from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ..attendance.ledger import AttendanceLedger
from ..core.constants import ABSENT_MARK, PRESENT_MARK
from ..roster.cache import RosterCache
from .csv_writer import serialize_csv
from .matrix import PresenceMatrix, build_matrix

logger = logging.getLogger(__name__)


class ExportService:
    """Use case: attendance matrix export."""

    def __init__(
        self,
        roster: RosterCache,
        ledger: AttendanceLedger,
        *,
        present_mark: str = PRESENT_MARK,
        absent_mark: str = ABSENT_MARK,
    ):
        self._roster = roster
        self._ledger = ledger
        self._present = present_mark
        self._absent = absent_mark

    async def build(self) -> PresenceMatrix:
        # The whole ledger is read before any column is laid out.
        records = await self._ledger.fetch_all()
        matrix = build_matrix(self._roster.get(), records)
        logger.info("Built presence matrix: %d people x %d dates", len(matrix.people), len(matrix.dates))
        return matrix

    async def export_csv(self) -> str:
        return serialize_csv(await self.build(), present=self._present, absent=self._absent)

    async def write_csv(self, path: str | Path) -> Path:
        text = await self.export_csv()
        target = Path(path)
        await asyncio.to_thread(target.write_bytes, text.encode("utf-8"))
        logger.info("Wrote attendance export to %s", target)
        return target
