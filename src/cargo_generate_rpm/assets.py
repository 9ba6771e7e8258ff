"""Resolution of the ``assets`` array into typed file entries.

Each asset is a table such as::

    { source = "target/release/tool", dest = "/usr/bin/tool", mode = "755" }

and is turned into a :class:`FileInfo`. Any malformed entry raises an error
naming its 0-based index and the offending field; resolution stops at the
first error.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .builder.base import RpmFileOptions
from .core.errors import (
    AssetFileNotFoundError,
    AssetFileUndefinedError,
    AssetFileWrongTypeError,
    MissingFieldError,
    WrongTypeError,
)
from .core.values import METADATA_PATH, Table, as_array, as_bool, as_str, as_table

logger = logging.getLogger(__name__)

ASSETS_PATH = f"{METADATA_PATH}.assets"

S_IFMT = 0o170000
S_IFDIR = 0o040000
S_IFREG = 0o100000

_OCTAL_DIGITS = re.compile(r"\+?[0-7]+")

# RPM stores file modes in 16 bits
MAX_MODE = 0o177777


@dataclass(frozen=True)
class FileInfo:
    """A validated asset entry."""

    source: str
    dest: str
    user: str | None = None
    group: str | None = None
    mode: int | None = None
    config: bool = False
    doc: bool = False

    def rpm_file_options(self) -> RpmFileOptions:
        """Build the builder options for this file."""
        options = RpmFileOptions(self.dest)
        if self.user is not None:
            options = options.user(self.user)
        if self.group is not None:
            options = options.group(self.group)
        if self.mode is not None:
            options = options.mode(self.mode)
        if self.config:
            options = options.is_config()
        if self.doc:
            options = options.is_doc()
        return options


def resolve_assets(metadata: Table) -> list[FileInfo]:
    """Resolve every entry of ``metadata["assets"]``.

    Args:
        metadata: The ``package.metadata.generate-rpm`` table

    Returns:
        File entries in manifest order

    Raises:
        MissingFieldError: If ``assets`` is absent
        WrongTypeError: If ``assets`` is not an array
        AssetFileUndefinedError: If an entry is not a table or lacks a required field
        AssetFileWrongTypeError: If a field of an entry has the wrong type
    """
    if "assets" not in metadata:
        raise MissingFieldError(ASSETS_PATH)
    assets = as_array(metadata["assets"])
    if assets is None:
        raise WrongTypeError(ASSETS_PATH, "array")

    files = []
    for idx, value in enumerate(assets):
        table = as_table(value)
        if table is None:
            raise AssetFileUndefinedError(idx, "source")
        info = resolve_asset(table, idx)
        logger.debug(f"Resolved asset {idx}: {info.source} -> {info.dest}")
        files.append(info)
    return files


def resolve_asset(table: Table, idx: int) -> FileInfo:
    """Resolve a single asset table at position ``idx``."""
    source = _get_required_str(table, "source", idx)
    dest = _get_required_str(table, "dest", idx)
    user = _get_optional_str(table, "user", idx)
    group = _get_optional_str(table, "group", idx)
    mode = _get_mode(table, source, idx)
    config = _get_flag(table, "config", idx)
    doc = _get_flag(table, "doc", idx)

    return FileInfo(
        source=source,
        dest=dest,
        user=user,
        group=group,
        mode=mode,
        config=config,
        doc=doc,
    )


def _get_required_str(table: Table, name: str, idx: int) -> str:
    if name not in table:
        raise AssetFileUndefinedError(idx, name)
    text = _narrow_str(table[name], name, idx)
    if not text:
        raise AssetFileUndefinedError(idx, name)
    return text


def _get_optional_str(table: Table, name: str, idx: int) -> str | None:
    if name not in table:
        return None
    return _narrow_str(table[name], name, idx)


def _narrow_str(value: Any, name: str, idx: int) -> str:
    text = as_str(value)
    if text is None:
        raise AssetFileWrongTypeError(idx, name, "string")
    return text


def _get_mode(table: Table, source: str, idx: int) -> int | None:
    if "mode" not in table:
        return None
    text = _narrow_str(table["mode"], "mode", idx)
    if not _OCTAL_DIGITS.fullmatch(text):
        raise AssetFileWrongTypeError(idx, "mode", "oct-string")
    mode = int(text, 8)
    if mode > MAX_MODE:
        raise AssetFileWrongTypeError(idx, "mode", "oct-string")
    return file_mode(mode, source)


def _get_flag(table: Table, name: str, idx: int) -> bool:
    if name not in table:
        return False
    flag = as_bool(table[name])
    if flag is None:
        raise AssetFileWrongTypeError(idx, name, "bool")
    return flag


def file_mode(mode: int, source: str) -> int:
    """Add file-type bits to ``mode`` unless it already carries some.

    Sources ending with ``/`` are directories, everything else is a
    regular file.

    Example:
        >>> oct(file_mode(0o644, "a/b.txt"))
        '0o100644'
        >>> oct(file_mode(0o755, "a/b/"))
        '0o40755'
    """
    if mode & S_IFMT:
        return mode
    if source.endswith("/"):
        return S_IFDIR | mode
    return S_IFREG | mode


def locate_on_disk(source: str, base_dir: Path) -> Path:
    """Find an asset source on disk.

    The source is tried as given (relative to the working directory), then
    relative to ``base_dir``, the directory holding the manifest.

    Args:
        source: The asset's ``source`` value
        base_dir: Directory containing the manifest

    Returns:
        The first candidate path that exists

    Raises:
        AssetFileNotFoundError: If no candidate exists
    """
    for candidate in (Path(source), base_dir / source):
        if candidate.exists():
            return candidate
    raise AssetFileNotFoundError(source)
