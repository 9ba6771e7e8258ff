"""cargo-generate-rpm.

This package reads the ``[package.metadata.generate-rpm]`` table of a
Cargo manifest and resolves it into a validated RPM package description:
package tags, lifecycle scripts and the list of files with their
ownership, permissions and config/doc flags.
"""

# Core library interface
from .config import Config, locate_metadata, resolve_arch
from .assets import FileInfo, locate_on_disk, resolve_assets
from .builder import Compressor, PackageBuilder, PackageDescriptor, RpmBuilder, RpmFileOptions

# Core utilities
from .core import ConfigError, Error, PackageSpec
from .core import validate_package_spec, validate_package_spec_with_error_details

# CLI interface
from .cli import generate_package_spec, main

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "Config",
    "locate_metadata",
    "resolve_arch",
    "FileInfo",
    "resolve_assets",
    "locate_on_disk",
    "Compressor",
    "PackageBuilder",
    "PackageDescriptor",
    "RpmBuilder",
    "RpmFileOptions",
    # Core utilities
    "ConfigError",
    "Error",
    "PackageSpec",
    "validate_package_spec",
    "validate_package_spec_with_error_details",
    # CLI
    "generate_package_spec",
    "main",
]
