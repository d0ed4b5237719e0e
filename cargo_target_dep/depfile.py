"""Makefile-style dependency file parsing.

rustc writes one ``<output>: <dep> <dep> ...`` rule per output, with
spaces inside a path escaped as ``\\ ``.  Every parser here is a pure
function except ``read_dep_file``, which only reads.

- ``split_paths``   — split a line on unescaped spaces, unescaping each path
- ``escape_path``   — inverse of the unescaping done by ``split_paths``
- ``format_dep_line`` — render an output and its deps as one rule line
- ``parse_dep_line`` — one rule line → ``DepLine``
- ``read_dep_file`` — dependency file on disk → ``DepLine`` (first line only)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from cargo_target_dep.errors import MalformedDepFile

logger = logging.getLogger(__name__)

_ESCAPED_SPACE = "\\ "


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class DepLine(BaseModel):
    """A parsed dependency rule: one output and the paths it depends on."""

    model_config = ConfigDict(frozen=True)

    output: str = Field(..., min_length=1, description="Declared output path")
    deps: list[str] = Field(
        default_factory=list,
        description="Prerequisite paths, in the order they were declared",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def split_paths(line: str) -> list[str]:
    """Split *line* on every space not preceded by a backslash.

    Escaped spaces are unescaped in the returned paths.  Empty fields
    (runs of separators, trailing whitespace) are dropped.
    """
    paths: list[str] = []
    start = 0
    for idx, ch in enumerate(line):
        if ch == " " and idx > 0 and line[idx - 1] != "\\":
            paths.append(line[start:idx])
            start = idx + 1
    paths.append(line[start:])
    return [p.replace(_ESCAPED_SPACE, " ") for p in paths if p]


def escape_path(path: str) -> str:
    return path.replace(" ", _ESCAPED_SPACE)


def format_dep_line(output: str, deps: Sequence[str] = ()) -> str:
    """Render *output* and *deps* the way rustc writes a dependency rule."""
    return " ".join([escape_path(output) + ":", *(escape_path(d) for d in deps)])


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def parse_dep_line(line: str, *, source: str = "<string>") -> DepLine:
    """Parse a single ``<output>: <dep> ...`` rule.

    Raises
    ------
    MalformedDepFile
        When the line is blank or its first field lacks the trailing ``:``.
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        raise MalformedDepFile(source, "first line is empty")

    fields = split_paths(line)

    head, deps = fields[0], fields[1:]
    if not head.endswith(":"):
        raise MalformedDepFile(source, f"output {head!r} missing trailing ':'")

    output = head[:-1]
    if not output:
        raise MalformedDepFile(source, "output path is empty")

    return DepLine(output=output, deps=deps)


def read_dep_file(path: str | Path) -> DepLine:
    """Read *path* and parse its first line.

    Any further lines are ignored: only single-output builds are
    supported.

    Raises
    ------
    MalformedDepFile
        When the file is unreadable, not UTF-8, empty, or malformed.
    """
    source = str(path)
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise MalformedDepFile(source, f"unreadable: {exc}") from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDepFile(source, f"not valid UTF-8: {exc}") from exc

    if not text:
        raise MalformedDepFile(source, "file is empty")

    # Only "\n" ends a line; str.splitlines() would also split on "\x85" and "\u2028"
    first, *rest = text.split("\n")
    if any(rest):
        logger.debug("dep file %s: ignoring %d extra line(s)", source, len(rest))

    return parse_dep_line(first, source=source)


__all__ = [
    "DepLine",
    "escape_path",
    "format_dep_line",
    "parse_dep_line",
    "read_dep_file",
    "split_paths",
]
