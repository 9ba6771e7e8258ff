"""Base abstractions for package builders.

This module defines the fluent interface the manifest resolver drives. A
builder accumulates package tags and files and is finalized once by
:meth:`PackageBuilder.build`.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Self

from ..core.errors import RpmError


class Compressor(Enum):
    """Payload compression algorithms understood by the builder."""

    NONE = "none"
    GZIP = "gzip"
    ZSTD = "zstd"
    XZ = "xz"

    @classmethod
    def from_str(cls, name: str) -> "Compressor":
        """Look up a compressor by name.

        Raises:
            RpmError: If the name is not a supported algorithm
        """
        try:
            return cls(name)
        except ValueError:
            raise RpmError(f"unknown compressor type {name!r}") from None


class RpmFileOptions:
    """Per-file options for a packaged file.

    Every setter returns the options object so calls can be chained:

        >>> opts = RpmFileOptions("/usr/bin/tool").mode(0o100755).is_config()
    """

    def __init__(self, dest: str):
        self.destination = dest
        self.user_name: str | None = None
        self.group_name: str | None = None
        self.file_mode: int | None = None
        self.config = False
        self.doc = False

    def user(self, user: str) -> "RpmFileOptions":
        self.user_name = user
        return self

    def group(self, group: str) -> "RpmFileOptions":
        self.group_name = group
        return self

    def mode(self, mode: int) -> "RpmFileOptions":
        self.file_mode = mode
        return self

    def is_config(self) -> "RpmFileOptions":
        self.config = True
        return self

    def is_doc(self) -> "RpmFileOptions":
        self.doc = True
        return self

    def __repr__(self) -> str:
        return (
            f"RpmFileOptions(dest={self.destination!r}, user={self.user_name!r}, "
            f"group={self.group_name!r}, mode={self.file_mode!r}, "
            f"config={self.config}, doc={self.doc})"
        )


class PackageBuilder(ABC):
    """Abstract base class for fluent package builders.

    Setters return the builder itself. Implementations may raise
    :class:`~cargo_generate_rpm.core.errors.RpmError` when a value violates
    the package format, and must not be used after :meth:`build`.
    """

    @abstractmethod
    def compression(self, compressor: Compressor) -> Self:
        pass

    @abstractmethod
    def with_file(self, source: Path, options: RpmFileOptions) -> Self:
        """Add the file at ``source`` to the package.

        Args:
            source: Location of the file on disk
            options: Destination and attributes of the packaged file

        Returns:
            The builder

        Raises:
            RpmError: If the options are rejected
            IoError: If the source cannot be inspected
        """
        pass

    @abstractmethod
    def release(self, release: int) -> Self:
        pass

    @abstractmethod
    def epoch(self, epoch: int) -> Self:
        pass

    @abstractmethod
    def pre_install_script(self, content: str) -> Self:
        pass

    @abstractmethod
    def post_install_script(self, content: str) -> Self:
        pass

    @abstractmethod
    def pre_uninstall_script(self, content: str) -> Self:
        pass

    @abstractmethod
    def post_uninstall_script(self, content: str) -> Self:
        pass

    @abstractmethod
    def build(self) -> Any:
        """Finalize the builder and return the package it describes."""
        pass
