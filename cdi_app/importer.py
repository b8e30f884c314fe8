"""CSV-driven batch device creation."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Callable

import grpc

from cdi_app.models import ImportRecord, ImportResult, RowFailure
from cdi_app.session import DeviceService
from cdi_common.errors import FileReadError, RowCreationError, wrap_error

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9a-fA-F]+")

RowCallback = Callable[[int, ImportRecord, bool], None]


def is_hex_string(value: str) -> bool:
    """True for a non-empty string made only of ``0-9a-fA-F``."""
    return bool(_HEX_RE.fullmatch(value))


def read_rows(file_path: str | Path) -> list[list[str]]:
    """Read every non-blank CSV row; any open/parse failure raises FileReadError."""
    path = Path(file_path)
    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            return [row for row in csv.reader(handle) if row]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise FileReadError(
            f"Failed to read CSV file {path}: {exc}",
            context={"file_path": str(path)},
            cause=exc,
        ) from exc


def data_start_index(rows: list[list[str]]) -> int:
    """Return 1 when row 0 looks like a header, else 0."""
    if not rows:
        return 0
    first = rows[0]
    if not first or not is_hex_string(first[0]):
        return 1
    return 0


def import_devices(
    service: DeviceService,
    application_id: str,
    device_profile_id: str,
    file_path: str | Path,
    *,
    on_row: RowCallback | None = None,
) -> ImportResult:
    """Create one device per CSV row, one call at a time, in row order.

    Row failures are logged and counted; they never abort the batch and
    earlier successes are kept.
    """
    rows = read_rows(file_path)
    start = data_start_index(rows)
    if start:
        logger.info("Skipping header row: %s", rows[0])

    result = ImportResult()
    for index in range(start, len(rows)):
        row_number = index + 1
        record = ImportRecord.from_row(rows[index])
        if record is None:
            result.skipped += 1
            continue

        result.processed += 1
        try:
            service.create_device(record, application_id, device_profile_id)
        except grpc.RpcError as exc:
            error = wrap_error(
                RowCreationError,
                f"Failed to create device {record.dev_eui}: {exc}",
                context={"row": row_number, "dev_eui": record.dev_eui},
                cause=exc,
            )
            logger.warning("%s", error, extra={"error_context": error.context})
            result.failures.append(
                RowFailure(row_number=row_number, dev_eui=record.dev_eui, error=error)
            )
            ok = False
        else:
            result.created += 1
            logger.debug("Created device %s (row %d)", record.dev_eui, row_number)
            ok = True
        if on_row is not None:
            on_row(row_number, record, ok)

    logger.info(
        "Import finished: created=%d failed=%d skipped=%d",
        result.created,
        result.failed,
        result.skipped,
    )
    return result
