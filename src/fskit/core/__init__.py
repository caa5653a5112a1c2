"""fskit core: configuration, errors, logging and events."""

from fskit.core.config import ConfigResolver, FsSettings, load_settings
from fskit.core.errors import (
    AlreadyExistsError,
    ConfigError,
    FileError,
    FsKitError,
    IsADirectoryError,
    NotADirectoryError,
    NotFoundError,
    PathError,
)
from fskit.core.events import EventBus, get_event_bus
from fskit.core.logging import (
    VerbosityLevel,
    apply_logging_policy,
    get_logger,
    get_verbosity,
    set_colors,
    set_log_sink,
    set_verbosity,
)

__all__ = [
    # Config
    "ConfigResolver",
    "FsSettings",
    "load_settings",
    # Errors
    "FsKitError",
    "ConfigError",
    "FileError",
    "NotFoundError",
    "AlreadyExistsError",
    "NotADirectoryError",
    "IsADirectoryError",
    "PathError",
    # Events
    "EventBus",
    "get_event_bus",
    # Logging
    "VerbosityLevel",
    "apply_logging_policy",
    "get_logger",
    "get_verbosity",
    "set_colors",
    "set_log_sink",
    "set_verbosity",
]
