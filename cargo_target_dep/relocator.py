"""Artifact relocator — moves the built output and forwards its deps.

Reads the ``*.d`` dependency file(s) cargo left in the isolated target
dir, renames the declared output to the caller's destination, and
announces every prerequisite as ``cargo:rerun-if-changed=<path>``.

Only single-output sub-builds are supported: each matching dependency
file is processed on its own and moved to the same destination, so a
sub-build with several outputs ends with whichever was moved last.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from cargo_target_dep.depfile import read_dep_file
from cargo_target_dep.errors import DiscoveryError, RelocationError

logger = logging.getLogger(__name__)

DEP_FILE_PATTERN = "*.d"
RERUN_IF_CHANGED = "cargo:rerun-if-changed="

Emit = Callable[[str], None]


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class RelocationOutcome(BaseModel):
    """Where one dependency file's output ended up, and what it depends on."""

    model_config = ConfigDict(frozen=True)

    dep_file: Path = Field(..., description="Dependency file that was processed")
    artifact: Path = Field(..., description="Final location of the moved output")
    rerun_if_changed: list[str] = Field(
        default_factory=list,
        description="Prerequisites announced to the parent build, in order",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def print_rerun_if_changed(path: str) -> None:
    """Default announcement sink: a cargo build-script directive on stdout."""
    print(f"{RERUN_IF_CHANGED}{path}", file=sys.stdout, flush=True)


def output_dir(isolated_dir: str | Path, profile: str, target: str | None = None) -> Path:
    """Where cargo puts artifacts: ``<isolated>[/<target>]/<profile>``."""
    out = Path(isolated_dir)
    if target:
        out = out / target
    return out / profile


def find_dep_files(out_dir: Path) -> list[Path]:
    """Every ``*.d`` file directly in *out_dir*, sorted; raises if none."""
    found = sorted(out_dir.glob(DEP_FILE_PATTERN))
    if not found:
        raise DiscoveryError(str(out_dir), DEP_FILE_PATTERN)
    if len(found) > 1:
        logger.warning(
            "found %d dependency files in %s; each will be moved to the same destination",
            len(found), out_dir,
        )
    return found


def ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RelocationError(None, str(path), str(exc)) from exc


def move_artifact(source: str | Path, destination: Path, *, into_dir: bool) -> Path:
    """Rename *source* to *destination* (or into it, keeping the filename)."""
    source = Path(source)
    final = destination / source.name if into_dir else destination
    try:
        source.rename(final)
    except OSError as exc:
        raise RelocationError(str(source), str(final), str(exc)) from exc
    logger.info("moved %s -> %s", source, final)
    return final


# ---------------------------------------------------------------------------
# Core relocator
# ---------------------------------------------------------------------------


def relocate_dep_file(
    dep_file: Path,
    destination: Path,
    *,
    into_dir: bool = False,
    emit: Emit | None = None,
) -> RelocationOutcome:
    """Process a single dependency file: parse, move, announce."""
    emit = emit or print_rerun_if_changed
    dep_line = read_dep_file(dep_file)

    artifact = move_artifact(dep_line.output, destination, into_dir=into_dir)

    for dep in dep_line.deps:
        emit(dep)

    return RelocationOutcome(
        dep_file=dep_file,
        artifact=artifact,
        rerun_if_changed=list(dep_line.deps),
    )


def relocate(
    isolated_dir: str | Path,
    profile: str,
    target: str | None,
    destination: str | Path,
    *,
    into_dir: bool = False,
    emit: Emit | None = None,
) -> list[RelocationOutcome]:
    """Relocate the build output found under *isolated_dir*.

    Parameters
    ----------
    isolated_dir:
        The ``--target-dir`` the sub-build was run with.
    profile:
        Profile name; cargo's output lands in a directory of that name.
    target:
        Cross-compile triple, or ``None`` for a host build.
    destination:
        Exact destination file, or the directory to move into when
        *into_dir* is set (created if absent).
    emit:
        Sink for prerequisite paths.  Defaults to printing
        ``cargo:rerun-if-changed=`` lines on stdout.

    Returns
    -------
    list[RelocationOutcome]
        One entry per dependency file, in sorted filename order.

    Raises
    ------
    DiscoveryError, MalformedDepFile, RelocationError
        Fatal; earlier dependency files may already have been moved.
    """
    destination = Path(destination)
    out_dir = output_dir(isolated_dir, profile, target)

    if into_dir:
        ensure_directory(destination)

    return [
        relocate_dep_file(dep_file, destination, into_dir=into_dir, emit=emit)
        for dep_file in find_dep_files(out_dir)
    ]


__all__ = [
    "DEP_FILE_PATTERN",
    "RERUN_IF_CHANGED",
    "RelocationOutcome",
    "find_dep_files",
    "output_dir",
    "print_rerun_if_changed",
    "relocate",
    "relocate_dep_file",
]
