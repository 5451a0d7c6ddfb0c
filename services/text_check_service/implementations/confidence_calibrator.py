"""
Rule confidence calibration loaded from an operator-supplied file.

File format, one entry per line::

    # comment
    RULE_ID,float_value[,extra,columns,...]

Extra columns carry auxiliary debugging data and are ignored. A later line
overrides an earlier one with the same rule id. Loading is all-or-nothing:
any malformed line fails the whole load and no table is produced.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any
from uuid import UUID, uuid4

from textcheck_service_libs.error_handling import raise_configuration_error
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.config import Settings
from services.text_check_service.request_parameters import (
    COMMA_PATTERN,
    split_preserving_empty_head,
)

logger = create_service_logger("text_check_service.implementations.confidence_calibrator")

EXPECTED_LINE_FORMAT = "RULE_ID,float_value[,...]"

# Decimal float literal with optional exponent and f/d suffix, plus NaN and Infinity
FLOAT_LITERAL = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?[fFdD]?)"
)


class ConfidenceTable(Mapping[str, float]):
    """Read-only mapping of rule id to calibrated confidence."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, float] | None = None) -> None:
        self._entries: Mapping[str, float] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, rule_id: str) -> float:
        return self._entries[rule_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ConfidenceTable({len(self._entries)} entries)"


EMPTY_CONFIDENCE_TABLE = ConfidenceTable()


def _parse_confidence(value: str) -> float | None:
    """Parse a confidence value, or return None if it is not a plain float literal."""
    literal = value.strip()
    if not FLOAT_LITERAL.fullmatch(literal):
        return None
    return float(literal.rstrip("fFdD"))


def parse_confidence_lines(
    lines: list[str], source: str, correlation_id: UUID
) -> ConfidenceTable:
    """
    Build a table from calibration file lines.

    Raises:
        TextCheckServiceError: CONFIGURATION_ERROR naming ``source`` and the line
    """
    entries: dict[str, float] = {}
    for line_number, line in enumerate(lines, start=1):
        if line.startswith("#") or not line.strip():
            continue
        parts = split_preserving_empty_head(line, COMMA_PATTERN)
        if len(parts) < 2 or not parts[0]:
            raise_configuration_error(
                service="text-check-service",
                operation="load_confidence_map",
                config_key="RULE_ID_TO_CONFIDENCE_FILE",
                message=f"Invalid line in {source}, expected '{EXPECTED_LINE_FORMAT}': {line}",
                correlation_id=correlation_id,
                path=source,
                line_number=line_number,
            )
        confidence = _parse_confidence(parts[1])
        if confidence is None:
            raise_configuration_error(
                service="text-check-service",
                operation="load_confidence_map",
                config_key="RULE_ID_TO_CONFIDENCE_FILE",
                message=(
                    f"Invalid confidence float value in {source}, "
                    f"expected '{EXPECTED_LINE_FORMAT}': {line}"
                ),
                correlation_id=correlation_id,
                path=source,
                line_number=line_number,
            )
        entries[parts[0]] = confidence
    return ConfidenceTable(entries)


def load_confidence_table(
    path: str | Path | None, correlation_id: UUID | None = None
) -> ConfidenceTable:
    """
    Load the calibration table from ``path``.

    No path means no calibration: the empty table is returned.

    Raises:
        TextCheckServiceError: CONFIGURATION_ERROR if the file cannot be read
            or contains a malformed line
    """
    if path is None or str(path) == "":
        return EMPTY_CONFIDENCE_TABLE

    correlation_id = correlation_id or uuid4()
    file_path = Path(path)
    logger.info("Loading confidence map for rules", path=str(file_path))
    try:
        lines = file_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise_configuration_error(
            service="text-check-service",
            operation="load_confidence_map",
            config_key="RULE_ID_TO_CONFIDENCE_FILE",
            message=f"Cannot read confidence file {file_path}: {e}",
            correlation_id=correlation_id,
            path=str(file_path),
        )
    table = parse_confidence_lines(lines, str(file_path), correlation_id)
    logger.info("Confidence map loaded", path=str(file_path), entry_count=len(table))
    return table


class ConfidenceCalibrator:
    """
    Holds the process-wide calibration table.

    The table is loaded once at construction; a failure there is fatal to
    the calibrator. Readers only ever see a complete table: ``reload`` builds
    a new one and swaps the reference.
    """

    def __init__(self, settings: Settings, metrics: dict[str, Any] | None = None) -> None:
        self.path = settings.RULE_ID_TO_CONFIDENCE_FILE
        self.metrics = metrics
        self._table = load_confidence_table(self.path)
        self._record_size()

    @property
    def table(self) -> ConfidenceTable:
        return self._table

    def get(self, rule_id: str) -> float | None:
        """Calibrated confidence for ``rule_id``, or None to keep the caller's default."""
        return self._table.get(rule_id)

    def reload(self) -> ConfidenceTable:
        """
        Re-read the configured file and replace the table.

        Raises:
            TextCheckServiceError: On a malformed file; the previous table stays
        """
        new_table = load_confidence_table(self.path)
        self._table = new_table
        self._record_size()
        return new_table

    def _record_size(self) -> None:
        if self.metrics is not None:
            self.metrics["confidence_calibration_entries"].set(len(self._table))
