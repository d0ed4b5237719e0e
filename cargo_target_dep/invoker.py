"""Build invoker — runs ``cargo build`` for a sub-project in isolation.

The sub-build's target dir is redirected into an invocation-specific
directory under ``$OUT_DIR`` so builds for different destinations never
share state.  stdout/stderr are not captured: cargo's output flows
straight into the parent build's log.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from cargo_target_dep.config import BuildEnv
from cargo_target_dep.errors import BuildFailed
from cargo_target_dep.request import TargetDep

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def build_command(cargo: str, request: TargetDep, target_dir: Path) -> list[str]:
    """Assemble the argv for building *request* into *target_dir*."""
    cmd = [
        cargo,
        "build",
        "--manifest-path",
        str(request.manifest_path),
        "--profile",
        request.profile,
        "--target-dir",
        str(target_dir),
    ]
    if request.target_triple:
        cmd += ["--target", request.target_triple]
    return cmd


# ---------------------------------------------------------------------------
# Core invoker
# ---------------------------------------------------------------------------


def invoke(request: TargetDep, env: BuildEnv) -> Path:
    """Build *request* with cargo and return the isolated target dir.

    Blocks until cargo exits.  There is no timeout and no retry.

    Raises
    ------
    ConfigError
        When ``CARGO`` or ``OUT_DIR`` is not set in *env*.
    BuildFailed
        When the manifest is missing, cargo cannot be spawned, or cargo
        exits non-zero.
    """
    cargo = env.cargo
    target_dir = request.isolated_dir(env.out_dir)
    manifest = str(request.manifest_path)

    if not request.manifest_path.is_file():
        raise BuildFailed(manifest, reason="manifest not found")

    cmd = build_command(cargo, request, target_dir)
    logger.info("building target dep %s (profile=%s, target=%s) into %s",
                manifest, request.profile, request.target_triple or "host", target_dir)
    logger.debug("running %s", " ".join(cmd))

    try:
        result = subprocess.run(cmd, check=False)
    except OSError as exc:
        raise BuildFailed(manifest, reason=f"failed to execute {cargo!r}: {exc}") from exc

    if result.returncode != 0:
        raise BuildFailed(manifest, status=result.returncode)

    return target_dir


__all__ = ["build_command", "invoke"]
