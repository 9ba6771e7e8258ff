"""Cargo manifest loading and package metadata resolution.

This module reads ``Cargo.toml``, locates the ``[package.metadata.generate-rpm]``
table and turns it, together with the standard ``[package]`` fields, into a
configured :class:`~cargo_generate_rpm.builder.RpmBuilder`.
"""

import logging
import platform
import tomllib
from pathlib import Path
from typing import Any

from .assets import FileInfo, locate_on_disk, resolve_assets
from .builder import Compressor, RpmBuilder
from .core.errors import FileIoError, ManifestParseError, MissingFieldError, WrongTypeError
from .core.values import METADATA_PATH, Table, as_table, get_integer, get_string

logger = logging.getLogger(__name__)

# Rust target_arch names mapped to RPM architecture names
RPM_ARCH_NAMES = {
    "x86": "i586",
    "arm": "armhfp",
    "powerpc": "ppc",
    "powerpc64": "ppc64",
}

# platform.machine() spellings mapped to Rust target_arch names
_MACHINE_ALIASES = {
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86": "x86",
    "amd64": "x86_64",
    "x86_64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
    "ppc": "powerpc",
    "ppc64": "powerpc64",
    "ppc64le": "powerpc64",
}


def host_arch() -> str:
    """Return the architecture of the running machine as a Rust arch name."""
    machine = platform.machine().lower()
    if machine in _MACHINE_ALIASES:
        return _MACHINE_ALIASES[machine]
    if machine.startswith("armv"):
        return "arm"
    return machine


def resolve_arch(target_arch: str | None = None) -> str:
    """Resolve the RPM architecture.

    An explicit ``target_arch`` is used verbatim. Otherwise the host
    architecture is translated to its RPM name (e.g. ``x86`` -> ``i586``).
    """
    if target_arch is not None:
        return target_arch
    arch = host_arch()
    return RPM_ARCH_NAMES.get(arch, arch)


def locate_metadata(manifest: Table) -> Table:
    """Find the ``package.metadata.generate-rpm`` table.

    Args:
        manifest: The parsed manifest

    Returns:
        The generate-rpm metadata table

    Raises:
        MissingFieldError: If a table along the path is absent
        WrongTypeError: If a value along the path is not a table
    """
    pkg = _get_package(manifest)
    if "metadata" not in pkg:
        raise MissingFieldError("package.metadata")
    metadata = as_table(pkg["metadata"])
    if metadata is None:
        raise WrongTypeError("package.metadata", "table")

    for name, value in metadata.items():
        if name == "generate-rpm":
            table = as_table(value)
            if table is None:
                raise WrongTypeError(METADATA_PATH, "table")
            return table
    raise MissingFieldError(METADATA_PATH)


def _get_package(manifest: Table) -> Table:
    if "package" not in manifest:
        raise MissingFieldError("package")
    pkg = as_table(manifest["package"])
    if pkg is None:
        raise WrongTypeError("package", "table")
    return pkg


def _require_package_str(pkg: Table, key: str) -> str:
    value = get_string(pkg, key, prefix="package")
    if value is None:
        raise MissingFieldError(f"package.{key}")
    return value


def _to_u16(value: int) -> int:
    return value & 0xFFFF


def _to_i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


class Config:
    """A loaded Cargo manifest.

    Example:
        >>> config = Config.from_path(Path("Cargo.toml"))
        >>> package = config.create_rpm_builder(None).build()
    """

    def __init__(self, manifest: Table, path: Path):
        """Initialize from an already parsed manifest.

        Args:
            manifest: Parsed TOML document
            path: Location of the manifest; asset sources may be relative to its directory
        """
        self.manifest = manifest
        self.path = path

    @classmethod
    def from_path(cls, path: Path | str) -> "Config":
        """Load and parse a manifest file.

        Raises:
            FileIoError: If the file cannot be read
            ManifestParseError: If the file is not valid TOML
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                manifest: Any = tomllib.load(f)
        except OSError as e:
            raise FileIoError(path, e) from e
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ManifestParseError(path, str(e)) from e

        logger.debug(f"Loaded manifest {path}")
        return cls(manifest, path)

    def metadata(self) -> Table:
        return locate_metadata(self.manifest)

    def files(self) -> list[FileInfo]:
        """Resolve the asset list of the manifest."""
        return resolve_assets(self.metadata())

    def create_rpm_builder(self, target_arch: str | None = None) -> RpmBuilder:
        """Create a builder configured from the manifest.

        Args:
            target_arch: RPM architecture; defaults to the host architecture

        Returns:
            Builder holding all package tags and files

        Raises:
            ConfigError: If the manifest is incomplete or malformed, or an asset is missing
            RpmError: If the builder rejects a file
            IoError: If an asset cannot be inspected
        """
        metadata = self.metadata()
        pkg = _get_package(self.manifest)

        name = get_string(metadata, "name")
        if name is None:
            name = _require_package_str(pkg, "name")
        version = get_string(metadata, "version")
        if version is None:
            version = _require_package_str(pkg, "version")
        license = get_string(metadata, "license")
        if license is None:
            license = _require_package_str(pkg, "license")
        arch = resolve_arch(target_arch)
        description = get_string(metadata, "summary")
        if description is None:
            description = _require_package_str(pkg, "description")

        logger.debug(f"Building {name}-{version}.{arch}")
        builder = RpmBuilder(name, version, license, arch, description).compression(
            Compressor.from_str("gzip")
        )

        base_dir = self.path.parent
        for file in self.files():
            source = locate_on_disk(file.source, base_dir)
            builder = builder.with_file(source, file.rpm_file_options())

        release = get_integer(metadata, "release")
        if release is not None:
            builder = builder.release(_to_u16(release))
        epoch = get_integer(metadata, "epoch")
        if epoch is not None:
            builder = builder.epoch(_to_i32(epoch))

        script = get_string(metadata, "pre_install_script")
        if script is not None:
            builder = builder.pre_install_script(script)
        script = get_string(metadata, "pre_uninstall_script")
        if script is not None:
            builder = builder.pre_uninstall_script(script)
        script = get_string(metadata, "post_install_script")
        if script is not None:
            builder = builder.post_install_script(script)
        script = get_string(metadata, "post_uninstall_script")
        if script is not None:
            builder = builder.post_uninstall_script(script)

        return builder
