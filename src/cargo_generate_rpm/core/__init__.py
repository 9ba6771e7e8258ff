"""Core utilities for package description generation.

This package contains the error taxonomy, accessors over the parsed
manifest, type definitions and schema validation used across the library.
"""

from .errors import (
    AssetFileNotFoundError,
    AssetFileUndefinedError,
    AssetFileWrongTypeError,
    AssetGlobInvalidError,
    AssetReadFailedError,
    ConfigError,
    Error,
    FileIoError,
    IoError,
    ManifestParseError,
    MissingFieldError,
    RpmError,
    WrongTypeError,
)
from .types import FileSpec, PackageSpec, ScriptsSpec
from .validator import validate_package_spec, validate_package_spec_with_error_details

__all__ = [
    "AssetFileNotFoundError",
    "AssetFileUndefinedError",
    "AssetFileWrongTypeError",
    "AssetGlobInvalidError",
    "AssetReadFailedError",
    "ConfigError",
    "Error",
    "FileIoError",
    "FileSpec",
    "IoError",
    "ManifestParseError",
    "MissingFieldError",
    "PackageSpec",
    "RpmError",
    "ScriptsSpec",
    "WrongTypeError",
    "validate_package_spec",
    "validate_package_spec_with_error_details",
]
