#!/usr/bin/env python3

import logging
from typing import List, Optional

from unidiff import PatchSet, UnidiffParseError
from unidiff.constants import LINE_TYPE_ADDED, LINE_TYPE_CONTEXT, LINE_TYPE_REMOVED
from unidiff.patch import Hunk as UnidiffHunk

from reviewbot.models import DEV_NULL, ChangedFile, ChangedLine, Hunk, LineKind

logger = logging.getLogger(__name__)

_KINDS = {
    LINE_TYPE_ADDED: LineKind.ADDED,
    LINE_TYPE_REMOVED: LineKind.REMOVED,
    LINE_TYPE_CONTEXT: LineKind.CONTEXT,
}


class DiffParseError(ValueError):
    """Raised when the diff text cannot be parsed as a unified diff."""


class DiffParser:
    """Parser for Git diff output."""

    @staticmethod
    def parse_diff(diff_str: str) -> List[ChangedFile]:
        """
        Parses the diff string and returns a structured format.

        Args:
            diff_str: Git diff string

        Returns:
            List of ChangedFile objects, in diff order

        Raises:
            DiffParseError: if any part of the diff is malformed
        """
        try:
            patch = PatchSet(diff_str)
        except UnidiffParseError as e:
            raise DiffParseError(f"Malformed diff: {e}") from e

        files = []
        for patched_file in patch:
            files.append(ChangedFile(
                source_path=_strip_prefix(patched_file.source_file, "a/"),
                target_path=_strip_prefix(patched_file.target_file, "b/"),
                hunks=tuple(_convert_hunk(hunk) for hunk in patched_file),
            ))

        logger.debug("Parsed %d files from diff", len(files))
        return files


def _strip_prefix(name: Optional[str], prefix: str) -> Optional[str]:
    if not name or name == DEV_NULL:
        return None
    if name.startswith(prefix):
        return name[len(prefix):]
    return name


def _convert_hunk(hunk: UnidiffHunk) -> Hunk:
    header = (
        f"@@ -{hunk.source_start},{hunk.source_length} "
        f"+{hunk.target_start},{hunk.target_length} @@"
    )
    if hunk.section_header:
        header = f"{header} {hunk.section_header}"

    changes = []
    for line in hunk:
        kind = _KINDS.get(line.line_type)
        if kind is None:
            # "\ No newline at end of file" markers
            continue
        text = line.line_type + line.value.rstrip("\r\n")
        if kind == LineKind.REMOVED:
            changes.append(ChangedLine(kind, text, old_line_number=line.source_line_no))
        else:
            changes.append(ChangedLine(kind, text, new_line_number=line.target_line_no))

    return Hunk(
        header_text=header,
        raw_content=str(hunk).rstrip("\n"),
        changes=tuple(changes),
    )
