"""Error types raised while turning a Cargo manifest into an RPM description.

Every failure surfaces as a subclass of :class:`Error`. Problems with the
content of the manifest are :class:`ConfigError` subclasses and carry the
dotted path (or asset index and field) they refer to, so callers can report
exactly which key was wrong.
"""

from pathlib import Path


class Error(Exception):
    """Base type for all failures raised by cargo-generate-rpm."""


class ConfigError(Error):
    """Base type for invalid or incomplete manifest content."""


class MissingFieldError(ConfigError):
    """A required key is absent at ``path``."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Missing field: {path}")
        self.path = path


class WrongTypeError(ConfigError):
    """A key at ``path`` is present but is not of the ``expected`` kind."""

    def __init__(self, path: str, expected: str) -> None:
        super().__init__(f"Field {path} must be {expected}")
        self.path = path
        self.expected = expected


class AssetFileUndefinedError(ConfigError):
    """A required field of the asset at ``index`` is missing.

    Also raised with ``field="source"`` when the asset entry is not a table.
    """

    def __init__(self, index: int, field: str) -> None:
        super().__init__(f"{field} of {index}-th asset is undefined")
        self.index = index
        self.field = field


class AssetFileWrongTypeError(ConfigError):
    """A field of the asset at ``index`` has the wrong type."""

    def __init__(self, index: int, field: str, expected: str) -> None:
        super().__init__(f"{field} of {index}-th asset must be {expected}")
        self.index = index
        self.field = field
        self.expected = expected


class AssetFileNotFoundError(ConfigError):
    """No candidate location of an asset source exists on disk."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Asset file not found: {path}")
        self.path = path


class AssetGlobInvalidError(ConfigError):
    """An asset source is not a valid glob pattern.

    Reserved for glob expansion of asset sources, which is not performed yet.
    """

    def __init__(self, index: int, pattern: str) -> None:
        super().__init__(f"Invalid glob at {index}: {pattern}")
        self.index = index
        self.pattern = pattern


class AssetReadFailedError(ConfigError):
    """An asset matched by a glob could not be read. Reserved like globs."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File unreadable: {path}")
        self.path = path


class ManifestParseError(Error):
    """The manifest file exists but is not a valid TOML document."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


class FileIoError(Error):
    """The manifest file itself could not be read."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"{cause.strerror or cause}: {path}")
        self.path = path


class IoError(Error):
    """Any other I/O failure, e.g. probing an asset for the builder."""


class RpmError(Error):
    """The package builder rejected a value it was given."""


__all__ = [
    "AssetFileNotFoundError",
    "AssetFileUndefinedError",
    "AssetFileWrongTypeError",
    "AssetGlobInvalidError",
    "AssetReadFailedError",
    "ConfigError",
    "Error",
    "FileIoError",
    "IoError",
    "ManifestParseError",
    "MissingFieldError",
    "RpmError",
    "WrongTypeError",
]
