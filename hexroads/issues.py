"""Typed issues returned by board edits and asset lookups."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class IssueCode(str, Enum):
    """Why an edit or lookup did not go through as asked."""
    INVALID_COORDINATE = "invalid_coordinate"
    CELL_ALREADY_OCCUPIED = "cell_already_occupied"
    CELL_ALREADY_ZONED = "cell_already_zoned"
    UNKNOWN_ZONE = "unknown_zone"
    UNSUPPORTED_CONNECTIVITY_DEGREE = "unsupported_connectivity_degree"
    ASSET_KEY_UNAVAILABLE = "asset_key_unavailable"


@dataclass(frozen=True)
class Issue:
    """A single problem, optionally tied to a cell."""
    code: IssueCode
    message: str
    coord: Optional[tuple[int, int]] = None


@dataclass
class EditResult:
    """Result of a board edit.

    Errors mean the edit was rejected and the board is unchanged.
    Warnings are soft events; the edit still happened.
    """
    valid: bool = True
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    updated: list[tuple[int, int]] = field(default_factory=list)

    @classmethod
    def rejected(cls, *errors: Issue) -> "EditResult":
        return cls(valid=False, errors=list(errors))

    def codes(self) -> set[IssueCode]:
        """All issue codes, errors and warnings alike."""
        return {issue.code for issue in self.errors + self.warnings}
