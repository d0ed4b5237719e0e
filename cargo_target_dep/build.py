"""Orchestration — build a target dep, then relocate its output."""

from __future__ import annotations

import logging

from cargo_target_dep.config import BuildEnv, load_env
from cargo_target_dep.invoker import invoke
from cargo_target_dep.relocator import Emit, RelocationOutcome, relocate
from cargo_target_dep.request import TargetDep

logger = logging.getLogger(__name__)


def execute(
    request: TargetDep,
    env: BuildEnv | None = None,
    *,
    emit: Emit | None = None,
) -> list[RelocationOutcome]:
    """Run the sub-build for *request* and move its artifact into place.

    *env* defaults to the current process environment.  The destination
    is resolved once, before cargo runs.  Any ``TargetDepError`` is fatal
    and propagates unchanged.
    """
    if env is None:
        env = load_env()
    destination = request.resolve_destination(env.manifest_dir)

    isolated_dir = invoke(request, env)
    outcomes = relocate(
        isolated_dir,
        request.profile,
        request.target_triple,
        destination,
        into_dir=request.into_dir,
        emit=emit,
    )

    logger.info(
        "target dep %s: %d artifact(s) relocated",
        request.manifest_path, len(outcomes),
    )
    return outcomes


__all__ = ["execute"]
