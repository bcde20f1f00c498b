"""
Shared fixtures: small classification workbooks and prebuilt trees.
"""
import io

import pytest
from openpyxl import Workbook

from core import ClassificationTree, FieldIdentity

SHEET = "Sheet 1"
MARKER = "数据库名称"


def header(levels: int) -> list:
    return [f"class{i + 1}" for i in range(levels)] + [MARKER, "表", "字段"]


def workbook_bytes(rows: list, sheet: str = SHEET) -> bytes:
    """Serialize rows (header included) as an .xlsx workbook."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build(rows: list) -> ClassificationTree:
    """Build a tree from (path, (db, table, field)) pairs."""
    tree = ClassificationTree()
    for path, identity in rows:
        tree.insert(list(path), FieldIdentity(*identity))
    return tree


@pytest.fixture
def write_workbook(tmp_path):
    """Factory writing rows to an .xlsx file under tmp_path."""
    def _write(name: str, rows: list, sheet: str = SHEET):
        path = tmp_path / name
        path.write_bytes(workbook_bytes(rows, sheet))
        return path
    return _write


@pytest.fixture
def reference_rows():
    return [
        header(2),
        ["A", "B", "db1", "t1", "f1"],
        ["A", "C", "db1", "t1", "f2"],
    ]


@pytest.fixture
def candidate_rows():
    return [
        header(2),
        ["A", "B", "db1", "t1", "f1"],
    ]
