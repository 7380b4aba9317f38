from __future__ import annotations

import io
import csv
import logging
from pathlib import Path

from openpyxl import load_workbook
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from .models import Program, PROGRAM_IMPORT_COLUMNS

logger = logging.getLogger(__name__)

# -----------------------------
# CSV/XLSX parsing (no pandas)
# -----------------------------

def _read_csv_rows(file_bytes: bytes) -> list[list[str]]:
    # Programs export uses ';' as separator
    f = io.StringIO(file_bytes.decode("utf-8-sig", errors="replace"))
    return [[field.strip() for field in row] for row in csv.reader(f, delimiter=";")]


def _read_xlsx_rows(file_bytes: bytes) -> list[list[str]]:
    wb = load_workbook(io.BytesIO(file_bytes), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        out = []
        for r in ws.iter_rows(values_only=True):
            out.append(["" if v is None else str(v).strip() for v in r])
    finally:
        wb.close()
    return out


def read_rows(path: Path) -> list[list[str]]:
    content = path.read_bytes()
    if path.suffix.lower() in (".xlsx", ".xlsm"):
        return _read_xlsx_rows(content)
    return _read_csv_rows(content)


# -----------------------------
# Programs import
# -----------------------------

def import_programs(session: Session, path: str | Path) -> int:
    """Load the programs spreadsheet into an empty ``programs`` table.

    The first row is a header. The first 20 fields of each row map onto
    PROGRAM_IMPORT_COLUMNS in order; empty cells become NULL. Rows with fewer
    fields are skipped.

    Returns: number of programs inserted (0 when the file is missing or the
    table already has data).
    """
    path = Path(path)
    if not path.is_file():
        logger.info("Programs file %s not found, skipping import", path)
        return 0

    existing = session.execute(select(func.count()).select_from(Program)).scalar_one()
    if existing:
        logger.info("Programs table already has data, skipping import")
        return 0

    rows = read_rows(path)
    if len(rows) <= 1:
        logger.info("Programs file %s has no data rows", path)
        return 0

    width = len(PROGRAM_IMPORT_COLUMNS)
    to_insert = []
    for line_no, fields in enumerate(rows[1:], start=2):
        if not any(fields):
            continue
        if len(fields) < width:
            logger.warning(
                "Skipping line %d with insufficient fields (%d < %d): %s",
                line_no, len(fields), width, ";".join(fields)[:100],
            )
            continue
        values = {col: (fields[i] or None) for i, col in enumerate(PROGRAM_IMPORT_COLUMNS)}
        to_insert.append(Program(**values))

    session.add_all(to_insert)
    session.commit()
    logger.info("Imported %d programs from %s", len(to_insert), path)
    return len(to_insert)
