#!/usr/bin/env python3

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

DEV_NULL = "/dev/null"


@dataclass(frozen=True)
class PRDetails:
    """Data class for pull request details."""
    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""


class LineKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass(frozen=True)
class ChangedLine:
    """
    One line of a hunk.

    Added and context lines carry new_line_number, removed lines carry
    old_line_number. text is the raw diff line including its +/-/space marker.
    """
    kind: LineKind
    text: str
    new_line_number: Optional[int] = None
    old_line_number: Optional[int] = None

    @property
    def line_number(self) -> Optional[int]:
        if self.kind == LineKind.REMOVED:
            return self.old_line_number
        return self.new_line_number


@dataclass(frozen=True)
class Hunk:
    """Data class for one contiguous block of changes in a file."""
    header_text: str
    raw_content: str
    changes: Tuple[ChangedLine, ...] = ()


@dataclass(frozen=True)
class ChangedFile:
    """Data class for a changed file in a PR."""
    source_path: Optional[str]
    target_path: Optional[str]
    hunks: Tuple[Hunk, ...] = field(default_factory=tuple)

    @property
    def is_deleted(self) -> bool:
        return not self.target_path or self.target_path == DEV_NULL


class ReviewCandidate(BaseModel):
    # Coerced to an integer by the comment mapper, which rejects bad values
    lineNumber: Any = Field(..., description="The line number the comment refers to")
    reviewComment: str = Field(..., description="The code review comment")


class FileReviews(BaseModel):
    reviews: List[ReviewCandidate] = Field(..., description="All code reviews for a hunk")


@dataclass(frozen=True)
class PublishableComment:
    """A review comment anchored to a post-change file path and line."""
    file_path: str
    line_number: int
    body: str

    def to_github(self) -> Dict[str, Any]:
        return {
            "path": self.file_path,
            "line": self.line_number,
            "body": self.body,
        }


@dataclass(frozen=True)
class ReviewSuccess:
    """The model answered with a valid (possibly empty) list of reviews."""
    reviews: List[ReviewCandidate]


@dataclass(frozen=True)
class ReviewFailure:
    """The model call failed or its answer did not match the JSON contract."""
    reason: str


ReviewResult = Union[ReviewSuccess, ReviewFailure]
