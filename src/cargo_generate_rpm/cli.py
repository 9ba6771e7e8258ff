"""Command-line interface for cargo-generate-rpm.

This module provides the CLI entry point for resolving a Cargo manifest into
a JSON package description.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import Config
from .core.errors import Error
from .core.types import PackageSpec
from .core.validator import validate_package_spec_with_error_details


def generate_package_spec(manifest_path: Path, target_arch: str | None = None) -> PackageSpec:
    """Resolve a Cargo manifest into a package description.

    Args:
        manifest_path: Path to Cargo.toml
        target_arch: Optional RPM architecture override

    Returns:
        Dictionary conforming to the package JSON schema

    Raises:
        Error: If the manifest cannot be loaded or resolved
    """
    print(f"Reading manifest: {manifest_path}", file=sys.stderr)
    config = Config.from_path(manifest_path)

    package = config.create_rpm_builder(target_arch).build()
    print(
        f"Resolved {package.name}-{package.version}.{package.arch} "
        f"with {len(package.files)} files",
        file=sys.stderr,
    )

    return package.to_spec()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the cargo-generate-rpm command."""
    parser = argparse.ArgumentParser(
        prog="cargo-generate-rpm",
        description="Generate an RPM package description from Cargo.toml",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage, from the crate root
  cargo-generate-rpm

  # Another crate, cross-compiled for aarch64
  cargo-generate-rpm -p path/to/Cargo.toml -a aarch64 -o tool.json
        """,
    )

    parser.add_argument(
        "-p",
        "--manifest-path",
        default="Cargo.toml",
        help="Path to Cargo.toml (default: %(default)s)",
    )

    parser.add_argument("-a", "--arch", help="Target RPM architecture (default: host architecture)")

    parser.add_argument("-o", "--output", help="Write the package description to this file")

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        spec = generate_package_spec(Path(args.manifest_path), args.arch)
    except Error as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("Validating package description against schema...", file=sys.stderr)
    is_valid, error_msg = validate_package_spec_with_error_details(spec)

    if not is_valid:
        print("Error: Package description validation failed:", file=sys.stderr)
        print(error_msg, file=sys.stderr)
        sys.exit(1)

    print("Validation successful!", file=sys.stderr)

    if args.output:
        output = Path(args.output)
        try:
            with output.open("w", encoding="utf-8") as f:
                json.dump(spec, f, indent=2)
                f.write("\n")
        except OSError as e:
            print(f"Error: Failed to write {output}: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Wrote {output}", file=sys.stderr)
    else:
        json.dump(spec, sys.stdout, indent=2)
        print()


if __name__ == "__main__":
    main()
