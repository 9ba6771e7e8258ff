"""Narrowing accessors over the parsed TOML tree.

``tomllib`` hands back plain Python values (``dict``, ``list``, ``str``,
``int``, ``bool``, ``float`` and date/time objects). The ``as_*`` functions
narrow such a value to one kind and return ``None`` on a mismatch instead of
raising, so callers can attach their own path-annotated error.
"""

from typing import Any

from .errors import WrongTypeError

METADATA_PATH = "package.metadata.generate-rpm"

Table = dict[str, Any]


def as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_integer(value: Any) -> int | None:
    # bool is a subclass of int but TOML keeps them apart
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def as_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def as_table(value: Any) -> Table | None:
    return value if isinstance(value, dict) else None


def as_array(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) else None


def get_string(table: Table, key: str, prefix: str = METADATA_PATH) -> str | None:
    """Read an optional string from ``table``.

    Args:
        table: Table to read from
        key: Key to look up
        prefix: Dotted path of ``table``, used in the error

    Returns:
        The string, or None if the key is absent

    Raises:
        WrongTypeError: If the key is present but not a string
    """
    if key not in table:
        return None
    value = as_str(table[key])
    if value is None:
        raise WrongTypeError(f"{prefix}.{key}", "string")
    return value


def get_integer(table: Table, key: str, prefix: str = METADATA_PATH) -> int | None:
    """Read an optional integer from ``table``.

    Same contract as :func:`get_string` with the expected kind "integer".
    """
    if key not in table:
        return None
    value = as_integer(table[key])
    if value is None:
        raise WrongTypeError(f"{prefix}.{key}", "integer")
    return value
