# Classi v1.0.0
"""
Classification Diff Engine

Compares a reference (trusted) classification tree against a candidate tree,
producing one or more DiffUnit records per reference leaf chain.

Matching is by value presence, not by position: a segment of a reference
chain counts as found when a node with the same value exists anywhere in
the candidate tree. This gives partial credit to a candidate that files a
field under the right labels in a different arrangement.

Every segment of a chain is looked up. If the field itself is found, a matched
unit is emitted with the labels found so far; if any segment was missing,
an unmatched unit carrying the reference labels is emitted as well. One
chain can therefore yield two units.
"""
from dataclasses import dataclass, field

from core.tree import ClassificationTree, Node


@dataclass
class DiffUnit:
    """Scoring record for one reference leaf chain."""
    path: list[str] = field(default_factory=list)
    field_label: str = ""
    matched: bool = False

    @property
    def category(self) -> str:
        """Top-level label this unit is grouped under, empty if none."""
        return self.path[0] if self.path else ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "classis": list(self.path),
            "field": self.field_label,
            "field_exist": self.matched,
        }


DiffResult = list[DiffUnit]


def _reference_labels(chain: list[Node]) -> list[str]:
    return [node.value.label for node in chain if node.value.is_classification]


def diff_chain(chain: list[Node], candidate: ClassificationTree) -> list[DiffUnit]:
    """
    Look up every segment of one reference chain against the candidate.

    Returns the matched unit (if the field was found) followed by the
    unmatched unit (if any segment was missing).
    """
    units = []
    matched_path: list[str] = []
    missed = False

    for segment in chain:
        found = candidate.find(segment.value)
        if found is None:
            missed = True
            continue

        if found.value.is_classification:
            matched_path.append(found.value.label)
        elif found.value.is_leaf:
            units.append(DiffUnit(
                path=list(matched_path),
                field_label=str(found.value),
                matched=True,
            ))

    if missed:
        units.append(DiffUnit(
            path=_reference_labels(chain),
            field_label=str(chain[-1].value),
            matched=False,
        ))

    return units


def diff_trees(reference: ClassificationTree, candidate: ClassificationTree) -> DiffResult:
    """
    Main entry point for comparing two classification trees.

    Args:
        reference: The trusted answer tree
        candidate: The tree under evaluation

    Returns:
        DiffUnits in the reference tree's leaf enumeration order
    """
    result: DiffResult = []
    for chain in reference.all_leaves():
        result.extend(diff_chain(chain, candidate))
    return result
