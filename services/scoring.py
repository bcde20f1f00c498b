"""
Scoring service.

Wires ingestion, the diff engine and the accuracy aggregator together:

    encrypted reference -> decrypt -> parse -> reference tree
    candidate workbook          -> parse -> candidate tree
    diff(reference, candidate)  -> accuracy report
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from config import settings
from core.accuracy import AccuracyReport, compute_accuracy, format_percentage
from core.diff import DiffResult, diff_trees
from core.file_parser import build_tree, parse_workbook
from core.tree import ClassificationTree
from services.codec import decrypt_file

logger = logging.getLogger(__name__)


@dataclass
class ScoreResult:
    """Diff result of one candidate plus its accuracy report."""
    diff: DiffResult
    report: AccuracyReport

    def to_dict(self) -> dict:
        return {
            "accuracy": self.report.to_dict(),
            "diff": [unit.to_dict() for unit in self.diff],
        }


def load_tree(source: Union[str, Path, bytes]) -> ClassificationTree:
    """Parse a plain workbook (path or bytes) into a tree."""
    tree = build_tree(parse_workbook(source))
    logger.info(f"Built tree with {tree.leaf_count()} field(s)")
    return tree


def load_reference_tree(path: Optional[Union[str, Path]] = None) -> ClassificationTree:
    """Decrypt the reference answer file and build its tree."""
    path = path or settings.REFERENCE_FILE
    logger.info(f"Loading reference from {path}")
    return load_tree(decrypt_file(path))


def load_candidate_tree(source: Union[str, Path, bytes]) -> ClassificationTree:
    return load_tree(source)


def score_trees(reference: ClassificationTree, candidate: ClassificationTree) -> ScoreResult:
    """Diff a candidate against the reference and aggregate accuracy."""
    result = diff_trees(reference, candidate)
    logger.info(f"Diff produced {len(result)} unit(s)")
    return ScoreResult(diff=result, report=compute_accuracy(result))


def score_files(
    candidate: Union[str, Path],
    reference: Optional[Union[str, Path]] = None,
) -> ScoreResult:
    """Score a candidate workbook against the encrypted reference file."""
    reference_tree = load_reference_tree(reference)
    candidate_tree = load_candidate_tree(candidate)
    return score_trees(reference_tree, candidate_tree)


def format_report(report: AccuracyReport) -> list[str]:
    """Render the report as printable lines, overall accuracy first."""
    lines = [f"total classification accuracy: {format_percentage(report.overall_accuracy)}"]
    for category in report.categories:
        lines.append(
            f"classification [{category.category}] accuracy: {format_percentage(category.accuracy)}"
        )
    return lines
