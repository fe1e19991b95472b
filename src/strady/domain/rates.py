# src/strady/domain/rates.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from strady.adapters.logging_utils import get_logger
from strady.adapters.storage import RateRow, read_rate_rows
from strady.domain.errors import RateFileError

logger = get_logger(__name__)


@dataclass(frozen=True)
class RateTable:
    rows: tuple[RateRow, ...]
    source_path: Path
    loaded_at: datetime | None = None   # None when no file was found
    skipped_rows: int = 0

    def __len__(self) -> int:
        return len(self.rows)


class RateTableStore:
    """
    Holds the current loan-rate table.

    `reload()` builds a complete new RateTable and publishes it with a single
    attribute assignment, so concurrent `get()` callers see either the old
    table or the new one, never a partial one. The live table is never
    mutated in place.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._table = RateTable(rows=(), source_path=self._path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> RateTable:
        return self._table

    def reload(self) -> RateTable:
        logger.info("Refreshing loan rate cache", extra={"context": {"path": str(self._path)}})

        if not self._path.is_file():
            logger.warning(
                "No rate file found; loan rate API will be empty",
                extra={"context": {"path": str(self._path)}},
            )
            table = RateTable(rows=(), source_path=self._path)
        else:
            try:
                rows, skipped = read_rate_rows(self._path)
            except RateFileError as e:
                logger.warning(
                    "Unreadable rate file; loan rate API will be empty",
                    extra={"context": {"path": str(self._path), "error": str(e)}},
                )
                rows, skipped = [], 0
            table = RateTable(
                rows=tuple(rows),
                source_path=self._path,
                loaded_at=datetime.now(timezone.utc),
                skipped_rows=skipped,
            )
            if skipped:
                logger.warning(
                    "Skipped malformed rate rows",
                    extra={"context": {"path": str(self._path), "skipped": skipped}},
                )
            logger.info(
                "Loan rate cache refreshed",
                extra={"context": {"rows": len(table), "skipped": skipped}},
            )

        self._table = table
        return table
