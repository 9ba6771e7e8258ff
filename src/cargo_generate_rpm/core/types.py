"""Type definitions for the generated package description.

This module defines TypedDict classes that mirror the JSON schema structure
defined in schemas/package.schema.json.
"""

from typing import TypedDict


class FileSpec(TypedDict):
    """A single file placed into the package."""

    source: str  # Path the file was found at on disk
    dest: str  # Absolute install path inside the package
    user: str
    group: str
    mode: int  # Full st_mode value, including file-type bits
    config: bool  # %config file, preserved across upgrades
    doc: bool  # %doc file
    size_bytes: int


class ScriptsSpec(TypedDict):
    """Lifecycle scriptlets; null when not provided."""

    pre_install: str | None
    post_install: str | None
    pre_uninstall: str | None
    post_uninstall: str | None


class PackageSpec(TypedDict):
    """Complete description of an RPM package, ready for archive generation."""

    name: str
    version: str
    license: str
    arch: str
    description: str
    compression: str  # e.g. "gzip"
    release: int | None
    epoch: int | None
    scripts: ScriptsSpec
    files: list[FileSpec]
