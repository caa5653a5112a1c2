"""Configuration resolver with 4-level priority.

Priority (highest to lowest):
1. CLI arguments (explicit dict passed by the caller)
2. Environment variables (FSKIT_*)
3. Config files (user > system)
4. Defaults
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from fskit.core.errors import ConfigError

ALLOWED_LOGGING_LEVELS = frozenset({"quiet", "normal", "verbose", "debug"})
DEFAULT_LOGGING_LEVEL = "normal"

DEFAULT_MAX_WORKERS = 8
DEFAULT_CHUNK_SIZE = 1024 * 1024
DEFAULT_DECIMALS = 2


@dataclass(frozen=True)
class LoggingPolicy:
    """Resolved, immutable logging policy."""

    level_name: str  # quiet | normal | verbose | debug
    source: str  # where level_name came from


@dataclass(frozen=True)
class FsSettings:
    """Validated runtime settings for filesystem operations."""

    root_dir: Path | None = None
    max_workers: int = DEFAULT_MAX_WORKERS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    decimals: int = DEFAULT_DECIMALS


class ConfigResolver:
    """Resolve configuration with strict 4-level priority.

    Example:
        resolver = ConfigResolver(
            cli_args={'copy': {'max_workers': 4}},
            user_config_path=Path('~/.config/fskit/config.yaml')
        )

        workers, source = resolver.resolve('copy.max_workers')
        # workers = 4, source = 'cli'
    """

    def __init__(
        self,
        cli_args: dict[str, Any] | None = None,
        user_config_path: Path | None = None,
        system_config_path: Path | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        """Initialize config resolver.

        Args:
            cli_args: Explicit overrides (highest priority)
            user_config_path: Path to user config file
            system_config_path: Path to system config file
            defaults: Default values (lowest priority)
        """
        self.cli_args = cli_args or {}
        self.user_config_path = user_config_path or Path.home() / ".config/fskit/config.yaml"
        self.system_config_path = system_config_path or Path("/etc/fskit/config.yaml")
        self.defaults = defaults or self._default_config()

        self._user_config: dict[str, Any] | None = None
        self._system_config: dict[str, Any] | None = None

    def resolve(self, key: str) -> tuple[Any, str]:
        """Resolve config value with priority.

        Args:
            key: Config key (supports dot notation: 'copy.max_workers')

        Returns:
            (value, source) tuple

        Raises:
            ConfigError: If key not found in any source
        """
        value = self._from_cli(key)
        if value is not None:
            return value, "cli"

        value = self._from_env(key)
        if value is not None:
            return value, "env"

        value = self._from_user_config(key)
        if value is not None:
            return value, "user_config"

        value = self._from_system_config(key)
        if value is not None:
            return value, "system_config"

        value = self._from_defaults(key)
        if value is not None:
            return value, "default"

        raise ConfigError(f"Config key '{key}' not found in any source")

    def resolve_logging_policy(self) -> LoggingPolicy:
        """Resolve and validate logging.level.

        Allowed values (after normalization):
            quiet | normal | verbose | debug

        Raises:
            ConfigError: If the resolved value is invalid.
        """
        key = "logging.level"
        try:
            value, source = self.resolve(key)
        except ConfigError:
            return LoggingPolicy(level_name=DEFAULT_LOGGING_LEVEL, source="default")

        if not isinstance(value, str):
            raise ConfigError(f"Config key '{key}' must be a string, got {type(value).__name__}")

        norm = value.strip().lower()
        if norm not in ALLOWED_LOGGING_LEVELS:
            allowed = ", ".join(sorted(ALLOWED_LOGGING_LEVELS))
            raise ConfigError(f"Invalid '{key}': {value!r}. Allowed values: {allowed}")

        return LoggingPolicy(level_name=norm, source=source)

    def _from_cli(self, key: str) -> Any | None:
        return self._get_nested(self.cli_args, key)

    def _from_env(self, key: str) -> Any | None:
        """Get value from environment variables.

        Environment variable format: FSKIT_KEY_NAME
        Example: FSKIT_ROOT_DIR, FSKIT_COPY_MAX_WORKERS
        """
        env_key = f"FSKIT_{key.upper().replace('.', '_')}"
        return os.environ.get(env_key)

    def _from_user_config(self, key: str) -> Any | None:
        return self._get_nested(self._get_user_config(), key)

    def _from_system_config(self, key: str) -> Any | None:
        return self._get_nested(self._get_system_config(), key)

    def _from_defaults(self, key: str) -> Any | None:
        return self._get_nested(self.defaults, key)

    def _get_user_config(self) -> dict[str, Any]:
        """Load user config file (cached)."""
        if self._user_config is None:
            self._user_config = self._load_yaml(self.user_config_path)
        return self._user_config

    def _get_system_config(self) -> dict[str, Any]:
        """Load system config file (cached)."""
        if self._system_config is None:
            self._system_config = self._load_yaml(self.system_config_path)
        return self._system_config

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
                return data if isinstance(data, dict) else {}
        except Exception as e:
            raise ConfigError(f"Failed to load config from {path}: {e}") from e

    def _get_nested(self, data: dict[str, Any], key: str) -> Any | None:
        """Get nested value using dot notation.

        Example:
            data = {'copy': {'chunk_size': 65536}}
            _get_nested(data, 'copy.chunk_size') -> 65536
        """
        parts = key.split(".")
        current: Any = data

        for part in parts:
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None

        return current

    @staticmethod
    def _default_config() -> dict[str, Any]:
        """Default configuration."""
        return {
            # Empty means: current working directory at first use
            "root_dir": "",
            "copy": {
                "max_workers": DEFAULT_MAX_WORKERS,
                "chunk_size": DEFAULT_CHUNK_SIZE,
            },
            "format": {
                "decimals": DEFAULT_DECIMALS,
            },
            "logging": {
                "level": DEFAULT_LOGGING_LEVEL,
            },
        }


def _positive_int(resolver: ConfigResolver, key: str, *, minimum: int = 1) -> int:
    value, source = resolver.resolve(key)

    # Environment values always arrive as strings.
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            f"Config key '{key}' must be an int, got {type(value).__name__} (from {source})"
        )
    if value < minimum:
        raise ConfigError(f"Config key '{key}' must be >= {minimum}, got {value} (from {source})")
    return value


def load_settings(resolver: ConfigResolver) -> FsSettings:
    """Resolve and validate FsSettings.

    Raises:
        ConfigError: If any value has the wrong type or range.
    """
    root_value, _src = resolver.resolve("root_dir")
    if not isinstance(root_value, str):
        raise ConfigError(f"Config key 'root_dir' must be a path string, got {root_value!r}")

    root_dir = Path(root_value).expanduser() if root_value.strip() else None

    return FsSettings(
        root_dir=root_dir,
        max_workers=_positive_int(resolver, "copy.max_workers"),
        chunk_size=_positive_int(resolver, "copy.chunk_size"),
        decimals=_positive_int(resolver, "format.decimals", minimum=0),
    )
