# Classi v1.0.0
"""
Core package for the Classi scoring engine.
Contains the classification tree, diff engine, accuracy aggregation
and workbook parsing.
"""
from core.errors import (
    ClassificationError,
    MalformedHeader,
    MalformedRow,
    SheetNotFound,
    DuplicateField,
    EmptyPathInsert,
    NodeExists,
    SuperNodeNotFound,
    DecryptionFailure,
    EmptyScoreSet
)
from core.tree import (
    ClassificationTree,
    FieldIdentity,
    Node,
    NodeKind,
    NodeValue
)
from core.diff import (
    diff_trees,
    diff_chain,
    DiffUnit,
    DiffResult
)
from core.accuracy import (
    compute_accuracy,
    format_percentage,
    AccuracyReport,
    CategoryAccuracy
)
from core.file_parser import (
    parse_workbook,
    parse_rows,
    build_tree,
    ClassificationRow
)

__all__ = [
    "ClassificationError",
    "MalformedHeader",
    "MalformedRow",
    "SheetNotFound",
    "DuplicateField",
    "EmptyPathInsert",
    "NodeExists",
    "SuperNodeNotFound",
    "DecryptionFailure",
    "EmptyScoreSet",
    "ClassificationTree",
    "FieldIdentity",
    "Node",
    "NodeKind",
    "NodeValue",
    "diff_trees",
    "diff_chain",
    "DiffUnit",
    "DiffResult",
    "compute_accuracy",
    "format_percentage",
    "AccuracyReport",
    "CategoryAccuracy",
    "parse_workbook",
    "parse_rows",
    "build_tree",
    "ClassificationRow"
]
