"""RPM package builder.

This module accumulates package tags and files in memory and finalizes them
into an immutable :class:`PackageDescriptor`, which is what the archive
writer consumes.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from ..core.errors import IoError, RpmError
from ..core.types import FileSpec, PackageSpec
from .base import Compressor, PackageBuilder, RpmFileOptions

logger = logging.getLogger(__name__)

DEFAULT_OWNER = "root"


@dataclass(frozen=True)
class RpmFileEntry:
    """A file as it will appear in the package payload."""

    source: str
    dest: str
    user: str
    group: str
    mode: int
    config: bool
    doc: bool
    size_bytes: int

    def to_spec(self) -> FileSpec:
        return FileSpec(
            source=self.source,
            dest=self.dest,
            user=self.user,
            group=self.group,
            mode=self.mode,
            config=self.config,
            doc=self.doc,
            size_bytes=self.size_bytes,
        )


@dataclass(frozen=True)
class PackageDescriptor:
    """Finalized package tags and payload listing."""

    name: str
    version: str
    license: str
    arch: str
    description: str
    compression: Compressor = Compressor.NONE
    release: int | None = None
    epoch: int | None = None
    pre_install_script: str | None = None
    post_install_script: str | None = None
    pre_uninstall_script: str | None = None
    post_uninstall_script: str | None = None
    files: tuple[RpmFileEntry, ...] = field(default_factory=tuple)

    def to_spec(self) -> PackageSpec:
        """Render the descriptor as a JSON-ready dictionary."""
        return PackageSpec(
            name=self.name,
            version=self.version,
            license=self.license,
            arch=self.arch,
            description=self.description,
            compression=self.compression.value,
            release=self.release,
            epoch=self.epoch,
            scripts={
                "pre_install": self.pre_install_script,
                "post_install": self.post_install_script,
                "pre_uninstall": self.pre_uninstall_script,
                "post_uninstall": self.post_uninstall_script,
            },
            files=[f.to_spec() for f in self.files],
        )


class RpmBuilder(PackageBuilder):
    """Builder for RPM package descriptors.

    Example:
        >>> builder = (
        ...     RpmBuilder("tool", "1.0.0", "MIT", "x86_64", "A tool")
        ...     .compression(Compressor.GZIP)
        ...     .with_file(Path("target/release/tool"), RpmFileOptions("/usr/bin/tool"))
        ...     .release(2)
        ... )
        >>> package = builder.build()
    """

    def __init__(self, name: str, version: str, license: str, arch: str, description: str):
        self._name = name
        self._version = version
        self._license = license
        self._arch = arch
        self._description = description
        self._compressor = Compressor.NONE
        self._release: int | None = None
        self._epoch: int | None = None
        self._scripts: dict[str, str] = {}
        self._files: dict[str, RpmFileEntry] = {}

    def compression(self, compressor: Compressor) -> Self:
        self._compressor = compressor
        return self

    def with_file(self, source: Path, options: RpmFileOptions) -> Self:
        dest = options.destination
        if not (dest.startswith("/") or dest.startswith("./")):
            raise RpmError(f"invalid destination path {dest!r}: must start with '/' or './'")
        if dest in self._files:
            raise RpmError(f"file {dest!r} already added to the package")

        try:
            stat_info = os.stat(source)
        except OSError as e:
            raise IoError(f"{source}: {e.strerror or e}") from e

        mode = options.file_mode if options.file_mode is not None else stat_info.st_mode
        self._files[dest] = RpmFileEntry(
            source=str(source),
            dest=dest,
            user=DEFAULT_OWNER if options.user_name is None else options.user_name,
            group=DEFAULT_OWNER if options.group_name is None else options.group_name,
            mode=mode,
            config=options.config,
            doc=options.doc,
            size_bytes=stat_info.st_size,
        )
        logger.debug(f"Added {source} as {dest} (mode {mode:o})")
        return self

    def release(self, release: int) -> Self:
        self._release = release
        return self

    def epoch(self, epoch: int) -> Self:
        self._epoch = epoch
        return self

    def pre_install_script(self, content: str) -> Self:
        self._scripts["pre_install"] = content
        return self

    def post_install_script(self, content: str) -> Self:
        self._scripts["post_install"] = content
        return self

    def pre_uninstall_script(self, content: str) -> Self:
        self._scripts["pre_uninstall"] = content
        return self

    def post_uninstall_script(self, content: str) -> Self:
        self._scripts["post_uninstall"] = content
        return self

    def build(self) -> PackageDescriptor:
        return PackageDescriptor(
            name=self._name,
            version=self._version,
            license=self._license,
            arch=self._arch,
            description=self._description,
            compression=self._compressor,
            release=self._release,
            epoch=self._epoch,
            pre_install_script=self._scripts.get("pre_install"),
            post_install_script=self._scripts.get("post_install"),
            pre_uninstall_script=self._scripts.get("pre_uninstall"),
            post_uninstall_script=self._scripts.get("post_uninstall"),
            files=tuple(self._files.values()),
        )
