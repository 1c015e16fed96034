#!/usr/bin/env python3

import fnmatch
import os
from typing import AbstractSet, Iterable, List, Sequence

from reviewbot.models import ChangedFile


def has_allowed_extension(file_path: str, allowed_extensions: AbstractSet[str]) -> bool:
    """Checks the file extension (e.g. ".js") against the allow-list."""
    return os.path.splitext(file_path)[1] in allowed_extensions


def is_excluded(file_path: str, exclude_patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(file_path, pattern) for pattern in exclude_patterns)


def filter_files(
        files: Sequence[ChangedFile],
        allowed_extensions: AbstractSet[str],
        exclude_patterns: Iterable[str] = (),
) -> List[ChangedFile]:
    """
    Selects the files that are eligible for review.

    A file is kept when it still exists after the change (deleted files have
    nothing to anchor a comment to), its extension is allowed and it does not
    match any exclude pattern. The order of the input is preserved.

    Args:
        files: Parsed files from the diff
        allowed_extensions: Extensions to review, including the leading dot
        exclude_patterns: fnmatch patterns of paths that are never reviewed

    Returns:
        List of files to review
    """
    exclude_patterns = list(exclude_patterns)
    return [
        changed_file for changed_file in files
        if not changed_file.is_deleted
        and has_allowed_extension(changed_file.target_path, allowed_extensions)
        and not is_excluded(changed_file.target_path, exclude_patterns)
    ]
