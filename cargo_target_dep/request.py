"""Build request — the immutable configuration for one sub-project build.

``build_target_dep`` starts a request; every chained setter returns a
new frozen copy.  Nothing runs until the request is handed to
``execute`` (or ``TargetDep.build``).
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from cargo_target_dep.config import BuildEnv
    from cargo_target_dep.relocator import RelocationOutcome

Profile = Literal["debug", "release"]

MANIFEST_NAME = "Cargo.toml"
ISOLATED_ROOT = "target-deps"
SEPARATOR_JOINER = "__"

_SEPARATORS_RE = re.compile(
    "|".join(re.escape(s) for s in {os.sep, os.altsep or os.sep, "/"})
)


class TargetDep(BaseModel):
    """One sub-project build: what to build, how, and where the output goes."""

    model_config = ConfigDict(frozen=True)

    manifest_path: Path = Field(..., description="Path to the sub-project's Cargo.toml")
    output_path: Path = Field(..., description="Destination file, or directory in into_dir mode")
    profile: Profile = Field(default="debug", description="Cargo profile to build with")
    target_triple: str | None = Field(default=None, description="Cross-compile target")
    name: str | None = Field(
        default=None,
        description="Explicit isolated-dir name; derived from output_path when unset",
    )
    into_dir: bool = Field(
        default=False,
        description="Treat output_path as a directory and keep the artifact's filename",
    )

    # -- chained setters ----------------------------------------------------

    def release(self) -> TargetDep:
        return self.model_copy(update={"profile": "release"})

    def target(self, target: str) -> TargetDep:
        return self.model_copy(update={"target_triple": target})

    def named(self, name: str) -> TargetDep:
        return self.model_copy(update={"name": name})

    def into_directory(self) -> TargetDep:
        return self.model_copy(update={"into_dir": True})

    # -- derived values -----------------------------------------------------

    def isolated_key(self) -> str:
        """Directory name unique to this request.

        The explicit name when one was given, else the destination path
        as written with every path separator replaced by ``__``.
        """
        raw = self.name if self.name else str(self.output_path)
        return _SEPARATORS_RE.sub(SEPARATOR_JOINER, raw)

    def isolated_dir(self, out_dir: str | Path) -> Path:
        # e.g. $OUT_DIR/target-deps/output__path
        return Path(out_dir) / ISOLATED_ROOT / self.isolated_key()

    def resolve_destination(self, manifest_dir: Path | None = None) -> Path:
        """Anchor a relative destination at *manifest_dir* when one is known."""
        if manifest_dir is not None and not self.output_path.is_absolute():
            return manifest_dir / self.output_path
        return self.output_path

    def build(self, env: BuildEnv | None = None) -> list[RelocationOutcome]:
        """Shorthand for ``execute(self, env)``."""
        from cargo_target_dep.build import execute

        return execute(self, env)


def build_target_dep(package_root: str | Path, output_path: str | Path) -> TargetDep:
    """Start a request for the crate at *package_root*, delivering to *output_path*."""
    return TargetDep(
        manifest_path=Path(package_root) / MANIFEST_NAME,
        output_path=Path(output_path),
    )
