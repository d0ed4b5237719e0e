"""Command-line entry point — allows ``python -m cargo_target_dep``.

Reads CARGO / OUT_DIR / CARGO_MANIFEST_DIR from the environment, like
the library does.  stdout carries only ``cargo:`` directives; logs and
errors go to stderr.
"""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser

from cargo_target_dep.build import execute
from cargo_target_dep.config import load_env
from cargo_target_dep.errors import TargetDepError
from cargo_target_dep.request import build_target_dep

logger = logging.getLogger("cargo_target_dep")


def _parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="cargo-target-dep",
        description="Build a Cargo sub-project and move its artifact into place",
    )
    parser.add_argument("package_root", help="Directory containing the sub-project's Cargo.toml")
    parser.add_argument("output", help="Destination file (or directory with --into-dir)")
    parser.add_argument("--release", action="store_true", help="Build with the release profile")
    parser.add_argument("--target", help="Cross-compile target triple")
    parser.add_argument("--name", help="Explicit name for the isolated target dir")
    parser.add_argument(
        "--into-dir",
        action="store_true",
        help="Treat OUTPUT as a directory and keep the artifact's filename",
    )
    return parser


def _log_level(name: str) -> tuple[int, bool]:
    """Resolve *name* to a logging level; unknown names fall back to WARNING."""
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level, True
    return logging.WARNING, False


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    env = load_env()

    level, known = _log_level(env.TARGET_DEP_LOG_LEVEL)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if not known:
        logger.warning(
            "unknown TARGET_DEP_LOG_LEVEL %r, using WARNING", env.TARGET_DEP_LOG_LEVEL,
        )

    request = build_target_dep(args.package_root, args.output)
    if args.release:
        request = request.release()
    if args.target:
        request = request.target(args.target)
    if args.name:
        request = request.named(args.name)
    if args.into_dir:
        request = request.into_directory()

    try:
        execute(request, env)
    except TargetDepError as exc:
        logger.error("target dep %s: %s", request.manifest_path, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
