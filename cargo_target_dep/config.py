"""Build-environment configuration loaded from environment variables.

Uses ``pydantic-settings`` for env-var loading.  Cargo exports these
variables to build scripts; values are checked on use (``require``),
not on instantiation, so a ``BuildEnv`` can be built with only the
keys a caller needs, e.g. in tests.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from cargo_target_dep.errors import ConfigError


class BuildEnv(BaseSettings):
    """Process-wide values the helper consumes from the parent build.

    Required on use: CARGO, OUT_DIR
    Optional: CARGO_MANIFEST_DIR, TARGET_DEP_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # -- required (default empty so absence is detectable) --
    CARGO: str = ""
    OUT_DIR: str = ""

    # -- optional --
    # Root that relative destinations are resolved against.
    CARGO_MANIFEST_DIR: str = ""
    TARGET_DEP_LOG_LEVEL: str = "WARNING"

    def require(self, key: str) -> str:
        """Return the value of *key*, raising ``ConfigError`` when it is unset."""
        value = getattr(self, key, "")
        if not value:
            raise ConfigError(key)
        return value

    @property
    def cargo(self) -> str:
        return self.require("CARGO")

    @property
    def out_dir(self) -> Path:
        return Path(self.require("OUT_DIR"))

    @property
    def manifest_dir(self) -> Path | None:
        return Path(self.CARGO_MANIFEST_DIR) if self.CARGO_MANIFEST_DIR else None


def load_env() -> BuildEnv:
    """Read a fresh ``BuildEnv`` from the current process environment."""
    return BuildEnv()
