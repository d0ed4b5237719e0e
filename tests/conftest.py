"""Shared test fixtures — reduces boilerplate across test modules.

Provides:
- ``clean_build_env`` — autouse fixture that strips cargo build-script vars
- ``build_env`` — a ``BuildEnv`` pointing at a temporary ``OUT_DIR``
- ``sub_project`` — an on-disk crate directory with a ``Cargo.toml``
- ``fake_cargo`` — a stand-in for ``subprocess.run`` that writes what
  ``cargo build`` would: the artifact and its ``.d`` file
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from cargo_target_dep.config import BuildEnv
from cargo_target_dep.depfile import format_dep_line

# ---------------------------------------------------------------------------
# Environment patching
# ---------------------------------------------------------------------------

_BUILD_ENV_KEYS: tuple[str, ...] = (
    "CARGO",
    "OUT_DIR",
    "CARGO_MANIFEST_DIR",
    "TARGET_DEP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch):
    """Make every test start without cargo's build-script variables."""
    for key in _BUILD_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def build_env(tmp_path: Path) -> BuildEnv:
    return BuildEnv(CARGO="cargo", OUT_DIR=str(tmp_path / "out"))


@pytest.fixture
def sub_project(tmp_path: Path) -> Path:
    root = tmp_path / "sub"
    (root / "src").mkdir(parents=True)
    (root / "Cargo.toml").write_text('[package]\nname = "tool"\n', encoding="utf-8")
    (root / "src" / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
    (root / "src" / "lib.rs").write_text("", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Fake cargo
# ---------------------------------------------------------------------------


def _arg(cmd: list[str], flag: str) -> str | None:
    if flag in cmd:
        return cmd[cmd.index(flag) + 1]
    return None


class FakeCargo:
    """Records invocations and populates the target dir like cargo does."""

    def __init__(self, artifact: str = "tool", deps: list[str] | None = None) -> None:
        self.artifact = artifact
        self.deps = deps
        self.returncode = 0
        self.calls: list[list[str]] = []

    def out_dir(self, cmd: list[str]) -> Path:
        out = Path(_arg(cmd, "--target-dir"))
        target = _arg(cmd, "--target")
        if target:
            out = out / target
        return out / _arg(cmd, "--profile")

    def __call__(self, cmd, *args, **kwargs):
        self.calls.append(list(cmd))
        if self.returncode == 0:
            out = self.out_dir(cmd)
            out.mkdir(parents=True, exist_ok=True)
            artifact = out / self.artifact
            artifact.write_bytes(b"\x7fELF")
            manifest_dir = Path(_arg(cmd, "--manifest-path")).parent
            deps = self.deps
            if deps is None:
                deps = [str(manifest_dir / "src" / "main.rs"), str(manifest_dir / "src" / "lib.rs")]
            (out / f"{self.artifact}.d").write_text(
                format_dep_line(str(artifact), deps) + "\n", encoding="utf-8",
            )
        return subprocess.CompletedProcess(cmd, self.returncode)


@pytest.fixture
def fake_cargo(monkeypatch) -> FakeCargo:
    fake = FakeCargo()
    monkeypatch.setattr("cargo_target_dep.invoker.subprocess.run", fake)
    return fake
