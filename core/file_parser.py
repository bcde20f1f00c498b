"""
Workbook parsing for classification result files.

A result file is an .xlsx workbook whose sheet looks like:

    |class1|class2|...|classN|数据库名称|表|字段|
    |c1    |c2    |...|cN    |db1       |tb1|field1|

N is discovered from the header by locating the marker column. Rows are
read until the first one with data beyond the header width. Blank cells
inside the width are kept and rejected by the row checks.
"""
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from openpyxl import load_workbook

from config import settings
from core.errors import DuplicateField, MalformedHeader, MalformedRow, SheetNotFound
from core.tree import ClassificationTree, FieldIdentity

logger = logging.getLogger(__name__)

IDENTITY_COLUMNS = 3  # database, table, field


@dataclass
class ClassificationRow:
    """One parsed data row: a classification path and the field it names."""
    path: list[str]
    identity: FieldIdentity
    row_number: Optional[int] = None


def cell_to_str(value: Any) -> str:
    """Coerce a cell value to a stripped string ('' for empty cells)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _trim(cells: Iterable[Any]) -> list[str]:
    """Stringify cells and drop trailing empty ones."""
    values = [cell_to_str(c) for c in cells]
    while values and not values[-1]:
        values.pop()
    return values


def count_levels(header: list[str], marker: str) -> int:
    """
    Number of classification columns before the marker column.

    Raises:
        MalformedHeader: if the marker is missing, first, or the header
            does not end with exactly the three identity columns
    """
    try:
        levels = header.index(marker)
    except ValueError:
        raise MalformedHeader(f"marker column '{marker}' not found in header")

    if levels == 0:
        raise MalformedHeader("the number of classification levels cannot be 0")
    if len(header) != levels + IDENTITY_COLUMNS:
        raise MalformedHeader(
            f"header count error: expected {levels + IDENTITY_COLUMNS} columns, got {len(header)}"
        )
    return levels


def parse_rows(rows: Iterable[Iterable[Any]], marker: Optional[str] = None) -> list[ClassificationRow]:
    """
    Parse raw sheet rows (header first) into classification rows.

    Args:
        rows: Cell values row by row, header included
        marker: Header label of the first identity column

    Returns:
        Parsed rows in sheet order
    """
    marker = marker or settings.FIELD_MARKER
    iterator = iter(rows)

    try:
        header = _trim(next(iterator))
    except StopIteration:
        raise MalformedHeader("failed to retrieve the header")

    levels = count_levels(header, marker)
    width = levels + IDENTITY_COLUMNS
    logger.info(f"Header declares {levels} classification level(s)")

    parsed = []
    for row_number, raw in enumerate(iterator, start=2):
        cells = _trim(raw)
        if len(cells) > width:
            logger.info(f"Row {row_number} has {len(cells)} column(s), stopping")
            break
        if not cells or not cells[0]:
            continue
        cells += [""] * (width - len(cells))

        path = cells[:levels]
        database, table, field_name = cells[levels:]
        if not all(path):
            raise MalformedRow(f"row {row_number}: blank classification level")
        if not (database and table and field_name):
            raise MalformedRow(f"row {row_number}: blank database, table or field")

        parsed.append(ClassificationRow(
            path=path,
            identity=FieldIdentity(database, table, field_name),
            row_number=row_number,
        ))

    logger.info(f"Parsed {len(parsed)} classification row(s)")
    return parsed


def parse_workbook(
    source: Union[str, Path, bytes],
    sheet_name: Optional[str] = None,
    marker: Optional[str] = None,
) -> list[ClassificationRow]:
    """
    Read classification rows from an .xlsx workbook.

    Args:
        source: Path to the workbook, or its raw bytes
        sheet_name: Sheet holding the results
        marker: Header label of the first identity column
    """
    sheet_name = sheet_name or settings.SHEET_NAME
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    wb = load_workbook(source, read_only=True, data_only=True)
    try:
        if sheet_name not in wb.sheetnames:
            raise SheetNotFound(
                f"failed to open the sheet [{sheet_name}], sheets present: {wb.sheetnames}"
            )
        ws = wb[sheet_name]
        return parse_rows(ws.iter_rows(values_only=True), marker)
    finally:
        wb.close()


def build_tree(
    rows: Iterable[ClassificationRow],
    tree: Optional[ClassificationTree] = None,
) -> ClassificationTree:
    """
    Build a classification tree, rejecting repeated field identities.

    The duplicate check runs before the row touches the tree. Rows are
    inserted into `tree` when given, otherwise into a new one.

    Raises:
        DuplicateField: if an identity was already seen in this input
    """
    tree = tree if tree is not None else ClassificationTree()
    seen: set[FieldIdentity] = set()

    for row in rows:
        if row.identity in seen:
            raise DuplicateField(row.identity)
        seen.add(row.identity)
        tree.insert(row.path, row.identity)

    return tree
