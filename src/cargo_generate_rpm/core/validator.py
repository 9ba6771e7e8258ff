"""Schema checks for package descriptions before they are written out."""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .types import PackageSpec

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "package.schema.json"


def load_schema() -> dict[str, Any]:
    """Read the package schema shipped in ``cargo_generate_rpm/schemas``."""
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))  # type: ignore[no-any-return]


def validate_package_spec(spec: PackageSpec) -> None:
    """Check ``spec`` against the package schema.

    Raises:
        ValidationError: If a tag or file entry violates the schema
        OSError: If the schema cannot be read
    """
    jsonschema.validate(instance=spec, schema=load_schema())


def validate_package_spec_with_error_details(spec: PackageSpec) -> tuple[bool, str | None]:
    """Like :func:`validate_package_spec`, but report instead of raising.

    Returns:
        ``(True, None)`` for a valid description, otherwise ``False`` and a
        message naming the offending field, e.g.
        ``"Validation error at files -> 0 -> mode: ..."``.
    """
    try:
        validate_package_spec(spec)
    except ValidationError as e:
        where = " -> ".join(str(p) for p in e.path) or "root"
        message = f"Validation error at {where}: {e.message}"
        if e.instance is not None:
            message += f"\nInvalid value: {e.instance!r}"
        return False, message
    except (OSError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
    return True, None
