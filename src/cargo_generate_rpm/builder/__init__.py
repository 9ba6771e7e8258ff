"""Package builders.

This package contains the fluent builder contract consumed by the manifest
resolver and the RPM builder implementation.
"""

from .base import Compressor, PackageBuilder, RpmFileOptions
from .rpm import PackageDescriptor, RpmBuilder, RpmFileEntry

__all__ = [
    "Compressor",
    "PackageBuilder",
    "PackageDescriptor",
    "RpmBuilder",
    "RpmFileEntry",
    "RpmFileOptions",
]
