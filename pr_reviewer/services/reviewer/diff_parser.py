"""Turn a unified diff into files, hunks and position-numbered lines."""

import re
from typing import Iterator

from unidiff import LINE_TYPE_ADDED, LINE_TYPE_CONTEXT, LINE_TYPE_REMOVED, PatchSet, UnidiffParseError

from pr_reviewer.core.exceptions import DiffParseError
from pr_reviewer.services.reviewer.schemas import DELETED_FILE_PATH, DiffChunk, DiffFile, DiffLine

_LINE_KINDS = {
    LINE_TYPE_ADDED: "added",
    LINE_TYPE_REMOVED: "removed",
    LINE_TYPE_CONTEXT: "context",
}

_HUNK_HEADER = re.compile(r"^@@ -\d+(?:,\d+)? \+\d+(?:,\d+)? @@.*$", re.MULTILINE)


def _strip_prefix(path: str | None, prefix: str) -> str | None:
    if not path or path == DELETED_FILE_PATH:
        return path
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


def _hunk_header(hunk) -> str:
    header = f"@@ -{hunk.source_start},{hunk.source_length} +{hunk.target_start},{hunk.target_length} @@"
    if hunk.section_header:
        header = f"{header} {hunk.section_header}"
    return header


def _parse_file(patched_file, raw_headers: Iterator[str]) -> DiffFile:
    chunks = []
    position = 0

    for index, hunk in enumerate(patched_file):
        # The first header sits above position 1, later headers take a position
        if index > 0:
            position += 1

        lines = []
        for line in hunk:
            position += 1
            kind = _LINE_KINDS.get(line.line_type)
            if kind is None:
                # "\ No newline at end of file" still occupies a position
                continue
            value = line.value.rstrip("\r\n")
            lines.append(
                DiffLine(
                    kind=kind,
                    content=f"{line.line_type}{value}",
                    new_line_number=line.target_line_no,
                    old_line_number=line.source_line_no,
                    position=position,
                )
            )

        header = next(raw_headers, None) or _hunk_header(hunk)
        chunks.append(DiffChunk(content=header, lines=lines))

    return DiffFile(
        path=_strip_prefix(patched_file.target_file, "b/"),
        source_path=_strip_prefix(patched_file.source_file, "a/"),
        chunks=chunks,
    )


def parse_diff(diff: str) -> list[DiffFile]:
    """Parse unified diff text.

    Args:
        diff: Output of ``git diff`` or the GitHub ``.diff`` media type

    Returns:
        One DiffFile per changed file, in diff order. Deleted files keep
        ``/dev/null`` as their path.

    Raises:
        DiffParseError: If the text is not a parseable unified diff
    """
    if not diff or not diff.strip():
        return []

    try:
        patch_set = PatchSet(diff)
    except UnidiffParseError as e:
        raise DiffParseError(f"Unparseable diff: {e}") from e

    # Headers as written, unidiff only keeps the parsed numbers
    raw_headers = (header.rstrip("\r") for header in _HUNK_HEADER.findall(diff))
    return [_parse_file(patched_file, raw_headers) for patched_file in patch_set]
