"""Target-dep error hierarchy.

Every error names the path it failed on as a typed attribute.
``to_dict()`` exposes those attributes for build scripts that call
``execute`` directly and want to report them themselves; the
``cargo-target-dep`` command logs ``str(exc)`` prefixed with the
sub-project's manifest.  All of them are fatal for the invocation
that raised them.
"""

from __future__ import annotations


class TargetDepError(Exception):
    """Base error for all target-dep failures."""

    def __init__(self, message: str, *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "message": self.message, **self.detail}

    def __str__(self) -> str:
        return self.message


class ConfigError(TargetDepError):
    """A required build-environment value is missing."""

    def __init__(self, key: str, *, hint: str | None = None) -> None:
        self.key = key
        self.hint = hint or "cargo-target-dep is meant to be used from a build script"
        super().__init__(
            f"Missing required env var {key!r}; {self.hint}",
            detail={"key": key},
        )


class BuildFailed(TargetDepError):
    """The sub-project build could not be run or exited non-zero."""

    def __init__(
        self,
        manifest_path: str,
        *,
        status: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.manifest_path = manifest_path
        self.status = status
        self.reason = reason or ""

        if status is not None:
            msg = f"Error building target dep {manifest_path!r}: exit status {status}"
        else:
            msg = f"Error building target dep {manifest_path!r}: {self.reason}"

        detail: dict = {"manifest_path": manifest_path}
        if status is not None:
            detail["status"] = status
        if reason:
            detail["reason"] = reason

        super().__init__(msg, detail=detail)


class DiscoveryError(TargetDepError):
    """No dependency file was found where the build should have put one."""

    def __init__(self, out_dir: str, pattern: str = "*.d") -> None:
        self.out_dir = out_dir
        self.pattern = pattern
        super().__init__(
            f"No dependency file matching '{pattern}' in '{out_dir}'",
            detail={"out_dir": out_dir, "pattern": pattern},
        )


class MalformedDepFile(TargetDepError):
    """A dependency file could not be read or does not have the expected shape."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(
            f"Malformed dependency file '{path}': {reason}",
            detail={"path": path, "reason": reason},
        )


class RelocationError(TargetDepError):
    """Creating the destination or moving the artifact failed."""

    def __init__(self, source: str | None, destination: str, reason: str) -> None:
        self.source = source or ""
        self.destination = destination
        self.reason = reason

        if source:
            msg = f"Failed to move output '{source}' to '{destination}': {reason}"
        else:
            msg = f"Failed to create destination directory '{destination}': {reason}"

        detail: dict = {"destination": destination, "reason": reason}
        if source:
            detail["source"] = source

        super().__init__(msg, detail=detail)
