"""In-memory curriculum knowledge base loaded from per-level JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .extraction import read_field
from .levels import LEVEL_FILE_MAP, normalize_level
from .types import CurriculumRow

logger = logging.getLogger(__name__)


class CurriculumDataError(ValueError):
    """Raised when a curriculum file does not hold a JSON array of rows."""


def coerce_unit(value: Any) -> int | None:
    """Best-effort integer conversion for a row's unit column."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        return None


def row_unit(row: CurriculumRow) -> int | None:
    """Return the unit number stored in ``row``, if any."""

    return coerce_unit(read_field(row, "Unit"))


def _read_rows(file_path: Path) -> tuple[CurriculumRow, ...]:
    with file_path.open("r", encoding="utf-8") as data_file:
        data = json.load(data_file)
    if not isinstance(data, list):
        raise CurriculumDataError(
            f"expected a JSON array of rows, got {type(data).__name__}"
        )
    return tuple(
        MappingProxyType(dict(row)) for row in data if isinstance(row, Mapping)
    )


class CurriculumStore:
    """Level label -> ordered curriculum rows.

    Build one per process, call :meth:`load` once at bootstrap and share it
    read-only. Tests construct isolated instances over a temporary directory.
    """

    def __init__(
        self,
        data_dir: Path | str,
        level_files: Mapping[str, str] | None = None,
    ) -> None:
        self._data_dir = Path(data_dir)
        self._level_files = dict(level_files if level_files is not None else LEVEL_FILE_MAP)
        self._levels: dict[str, tuple[CurriculumRow, ...]] = {}
        self._warnings: list[str] = []
        self._loaded = False

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def warnings(self) -> list[str]:
        """Problems recorded while loading (missing or unreadable files)."""

        return list(self._warnings)

    def load(self) -> None:
        """Read every configured level file. Repeated calls are no-ops."""

        if self._loaded:
            logger.debug("Curriculum already loaded from %s; skipping", self._data_dir)
            return

        logger.info("Loading curriculum knowledge base from %s", self._data_dir)

        # Levels 7-9 (and S/K) share one file; parse each file only once.
        parsed_files: dict[str, tuple[CurriculumRow, ...] | None] = {}
        loaded_count = 0
        failed_count = 0

        for level, file_name in self._level_files.items():
            if file_name not in parsed_files:
                parsed_files[file_name] = self._load_file(file_name)
            rows = parsed_files[file_name]

            if rows is None:
                failed_count += 1
                continue

            self._levels[level] = rows
            loaded_count += 1
            logger.info("Curriculum %s: %d rows from %s", level, len(rows), file_name)

        self._loaded = True
        logger.info(
            "Curriculum load finished: %d levels loaded, %d failed",
            loaded_count,
            failed_count,
        )

    def _load_file(self, file_name: str) -> tuple[CurriculumRow, ...] | None:
        file_path = self._data_dir / file_name
        if not file_path.exists():
            message = f"Curriculum file not found: {file_name}"
            logger.warning(message)
            self._warnings.append(message)
            return None

        try:
            return _read_rows(file_path)
        except (OSError, json.JSONDecodeError, CurriculumDataError) as exc:
            message = f"Failed to load curriculum file {file_name}: {exc}"
            logger.error(message)
            self._warnings.append(message)
            return None

    def loaded_levels(self) -> list[str]:
        """Canonical labels of the levels that loaded successfully."""

        return list(self._levels.keys())

    def rows_for_level(self, level: str) -> tuple[CurriculumRow, ...]:
        return self._levels.get(normalize_level(level), ())

    def units_for_level(self, level: str) -> list[int]:
        """Sorted distinct unit numbers for ``level``; empty when unknown."""

        units = {
            unit
            for unit in (row_unit(row) for row in self.rows_for_level(level))
            if unit is not None
        }
        return sorted(units)


__all__ = [
    "CurriculumStore",
    "CurriculumDataError",
    "coerce_unit",
    "row_unit",
]
