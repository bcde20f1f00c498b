"""
Error types for the classification scoring engine.

Every failure the pipeline can surface derives from ClassificationError,
so callers can catch one type and report the message.
"""
from typing import Any


class ClassificationError(Exception):
    """Base class for all classification scoring errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"classification error: {self.message}"


class MalformedHeader(ClassificationError):
    """Header row is missing the marker column or has the wrong width."""


class MalformedRow(ClassificationError):
    """A data row has a blank classification level or identity cell."""


class SheetNotFound(ClassificationError):
    """The workbook does not contain the configured sheet."""


class DuplicateField(ClassificationError):
    """The same (database, table, field) identity appears twice in one input."""

    def __init__(self, identity: Any):
        super().__init__(f"duplicated field detected: {identity}")
        self.identity = identity


class EmptyPathInsert(ClassificationError):
    """An insert was attempted with zero classification levels."""

    def __init__(self):
        super().__init__("classification levels must be provided")


class NodeExists(ClassificationError):
    """
    The value already exists as a direct child of the target parent.

    Terminal: aborts the whole insert as soon as it is raised.
    """

    def __init__(self, value: Any):
        super().__init__(f"the node exists: {value}")
        self.value = value


class SuperNodeNotFound(ClassificationError):
    """
    No node in the searched subtree holds the requested parent value.

    Recoverable while searching: the caller moves on to the next sibling.
    """

    def __init__(self, value: Any):
        super().__init__(f"the super node was not found: {value}")
        self.value = value


class DecryptionFailure(ClassificationError):
    """The reference file could not be decrypted (bad key, nonce or data)."""


class EmptyScoreSet(ClassificationError):
    """Accuracy was requested for a diff result with no units."""

    def __init__(self):
        super().__init__("cannot compute accuracy of an empty diff result")
