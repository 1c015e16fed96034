#!/usr/bin/env python3

import logging
from typing import Any, List, Sequence

from reviewbot.models import ChangedFile, PublishableComment, ReviewCandidate

logger = logging.getLogger(__name__)


class CommentMappingError(ValueError):
    """Raised when a review cannot be anchored to a valid line."""


def to_line_number(value: Any) -> int:
    """
    Converts a model supplied line number into an int.

    Integers, integral floats and numeric strings are accepted. Anything else,
    including values below 1, raises CommentMappingError.
    """
    if isinstance(value, bool):
        raise CommentMappingError(f"Invalid line number: {value!r}")

    if isinstance(value, int):
        line_number = value
    elif isinstance(value, float) and value.is_integer():
        line_number = int(value)
    elif isinstance(value, str):
        try:
            line_number = int(value.strip())
        except ValueError:
            raise CommentMappingError(f"Invalid line number: {value!r}") from None
    else:
        raise CommentMappingError(f"Invalid line number: {value!r}")

    if line_number < 1:
        raise CommentMappingError(f"Invalid line number: {value!r}")
    return line_number


def create_comments(
        changed_file: ChangedFile,
        reviews: Sequence[ReviewCandidate],
) -> List[PublishableComment]:
    """
    Anchors the reviews of one hunk to the file they were made for.

    Args:
        changed_file: File the reviewed hunk belongs to
        reviews: Reviews returned by the model

    Returns:
        List of comments for the file's post-change path

    Raises:
        CommentMappingError: if a review has an invalid line number
    """
    if changed_file.is_deleted:
        if reviews:
            logger.warning("Dropping %d reviews for deleted file %s", len(reviews), changed_file.source_path)
        return []

    return [
        PublishableComment(
            file_path=changed_file.target_path,
            line_number=to_line_number(review.lineNumber),
            body=review.reviewComment,
        )
        for review in reviews
    ]
