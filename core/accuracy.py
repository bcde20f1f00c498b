# Classi v1.0.0
"""
Accuracy aggregation over a diff result.

Reduces DiffUnits to an overall percentage and one percentage per
top-level category.
"""
from dataclasses import dataclass, field

from core.diff import DiffResult
from core.errors import EmptyScoreSet


@dataclass
class CategoryAccuracy:
    """Matched/total tally for one top-level category."""
    category: str
    total: int = 0
    matched: int = 0

    @property
    def accuracy(self) -> float:
        return self.matched / self.total * 100 if self.total else 0.0

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "total": self.total,
            "matched": self.matched,
            "accuracy": round(self.accuracy, 2),
        }


@dataclass
class AccuracyReport:
    """Overall and per-category accuracy, as percentages."""
    total: int
    matched: int
    categories: list[CategoryAccuracy] = field(default_factory=list)

    @property
    def overall_accuracy(self) -> float:
        return self.matched / self.total * 100

    @property
    def per_category(self) -> dict[str, float]:
        """Category label to accuracy percentage, in first-seen order."""
        return {c.category: c.accuracy for c in self.categories}

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "matched": self.matched,
            "overall_accuracy": round(self.overall_accuracy, 2),
            "categories": [c.to_dict() for c in self.categories],
        }


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"


def compute_accuracy(result: DiffResult) -> AccuracyReport:
    """
    Tally matched units overall and per category.

    Units are grouped by the first label of their path. For unmatched units
    that is the reference's top-level label; for matched units it is the
    first label found in the candidate, which can differ. Categories keep
    the order in which they first appear in the result.

    Raises:
        EmptyScoreSet: if the result has no units
    """
    if not result:
        raise EmptyScoreSet()

    matched = 0
    groups: dict[str, CategoryAccuracy] = {}
    for unit in result:
        group = groups.get(unit.category)
        if group is None:
            group = groups[unit.category] = CategoryAccuracy(category=unit.category)
        group.total += 1
        if unit.matched:
            group.matched += 1
            matched += 1

    return AccuracyReport(
        total=len(result),
        matched=matched,
        categories=list(groups.values()),
    )
