"""Error handling with friendly messages."""

from __future__ import annotations


class FsKitError(Exception):
    """Base exception for all fskit errors."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\nSuggestion: {self.suggestion}"
        return self.message


class ConfigError(FsKitError):
    """Configuration error."""

    pass


class FileError(FsKitError):
    """File operation error."""

    pass


class NotFoundError(FileError):
    """Raised when a file or directory is not found."""


class AlreadyExistsError(FileError):
    """Raised when a destination already exists and overwrite is disabled."""


class NotADirectoryError(FileError):
    """Raised when a directory was expected."""


class IsADirectoryError(FileError):
    """Raised when a file was expected."""


class PathError(FileError):
    """Raised when a source/target pair cannot be used together."""

    def __init__(self, target: str, source: str) -> None:
        super().__init__(
            f"Target '{target}' is inside source '{source}'",
            "Choose a target directory outside of the source tree",
        )
