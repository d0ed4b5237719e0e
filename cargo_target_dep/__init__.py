"""Build Cargo sub-projects from a build script and relocate their output.

Public API
----------
Requests::

    build_target_dep, TargetDep, Profile

Orchestration::

    execute  — invoke, then relocate

Invoker::

    invoke, build_command

Relocator::

    relocate, relocate_dep_file, RelocationOutcome

Dependency files::

    DepLine, parse_dep_line, read_dep_file, split_paths, format_dep_line

Configuration::

    BuildEnv, load_env

Errors::

    TargetDepError, ConfigError, BuildFailed,
    DiscoveryError, MalformedDepFile, RelocationError,
"""

from cargo_target_dep.build import execute
from cargo_target_dep.config import BuildEnv, load_env
from cargo_target_dep.depfile import (
    DepLine,
    format_dep_line,
    parse_dep_line,
    read_dep_file,
    split_paths,
)
from cargo_target_dep.errors import (
    BuildFailed,
    ConfigError,
    DiscoveryError,
    MalformedDepFile,
    RelocationError,
    TargetDepError,
)
from cargo_target_dep.invoker import build_command, invoke
from cargo_target_dep.relocator import RelocationOutcome, relocate, relocate_dep_file
from cargo_target_dep.request import Profile, TargetDep, build_target_dep

__all__ = [
    # Requests
    "Profile",
    "TargetDep",
    "build_target_dep",
    # Orchestration
    "execute",
    # Invoker
    "build_command",
    "invoke",
    # Relocator
    "RelocationOutcome",
    "relocate",
    "relocate_dep_file",
    # Dependency files
    "DepLine",
    "format_dep_line",
    "parse_dep_line",
    "read_dep_file",
    "split_paths",
    # Configuration
    "BuildEnv",
    "load_env",
    # Errors
    "BuildFailed",
    "ConfigError",
    "DiscoveryError",
    "MalformedDepFile",
    "RelocationError",
    "TargetDepError",
]
