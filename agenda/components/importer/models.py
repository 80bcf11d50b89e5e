"""
Importer component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from agenda.domain.entities import Band, User


@dataclass(frozen=True)
class ParsedRow:
    """One CSV data line: the raw cells, the event fields it yields, and what is wrong with it."""

    original: dict[str, str]
    data: dict[str, Any] | None
    errors: list[str]
    line_number: int

    @property
    def is_valid(self) -> bool:
        return not self.errors and self.data is not None


@dataclass(frozen=True)
class ImportReport:
    rows: list[ParsedRow] = field(default_factory=list)
    header_error: str | None = None
    missing_headers: list[str] = field(default_factory=list)

    @property
    def valid_rows(self) -> list[ParsedRow]:
        return [r for r in self.rows if r.is_valid]

    @property
    def invalid_rows(self) -> list[ParsedRow]:
        return [r for r in self.rows if not r.is_valid]


@dataclass(frozen=True)
class ValidateImportInput:
    file_text: str
    bands: list[Band]


@dataclass(frozen=True)
class CommitImportInput:
    actor: User
    rows: list[ParsedRow]


@dataclass(frozen=True)
class CommitResult:
    committed: int = 0
    failed: int = 0
    event_ids: list[str] = field(default_factory=list)
    success: bool = True
    error: str | None = None
