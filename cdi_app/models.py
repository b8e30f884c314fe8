"""Value objects shared by the loaders, importer and wizard."""

from __future__ import annotations

from dataclasses import dataclass, field

from cdi_common.errors import RowCreationError


@dataclass(frozen=True)
class SelectionItem:
    """One row of a selection screen (tenant, application or profile)."""

    title: str
    description: str
    id: str


@dataclass(frozen=True)
class ImportRecord:
    """Row view of a CSV line: ``devEui, name, description?``."""

    dev_eui: str
    name: str
    description: str = ""

    @classmethod
    def from_row(cls, row: list[str]) -> "ImportRecord | None":
        """Return None for rows with fewer than two cells."""
        if len(row) < 2:
            return None
        description = row[2] if len(row) > 2 else ""
        return cls(dev_eui=row[0], name=row[1], description=description)


@dataclass(frozen=True)
class RowFailure:
    row_number: int
    dev_eui: str
    error: RowCreationError

    @property
    def message(self) -> str:
        return self.error.message


@dataclass
class ImportResult:
    """Outcome of one batch import.

    ``created`` is the figure the wizard reports; the other counters and
    ``failures`` only go to the log.
    """

    created: int = 0
    processed: int = 0
    skipped: int = 0
    failures: list[RowFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)
