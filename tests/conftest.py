"""Shared fixtures for the test suite."""

from pathlib import Path
from textwrap import dedent

import pytest

BASIC_MANIFEST = """
[package]
name = "hello"
version = "1.2.3"
license = "MIT"
description = "Says hello"

[package.metadata.generate-rpm]
assets = [
    { source = "target/release/hello", dest = "/usr/bin/hello", mode = "755" },
    { source = "LICENSE", dest = "/usr/share/doc/hello/LICENSE", doc = true, mode = "644" },
    { source = "hello.conf", dest = "/etc/hello.conf", config = true },
]
"""


@pytest.fixture
def crate_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A crate directory containing every asset of BASIC_MANIFEST.

    The working directory is moved to tmp_path so only the manifest-relative
    lookup can find the assets.
    """
    monkeypatch.chdir(tmp_path)
    crate = tmp_path / "crate"
    (crate / "target" / "release").mkdir(parents=True)
    (crate / "target" / "release" / "hello").write_bytes(b"\x7fELF")
    (crate / "LICENSE").write_text("MIT License\n", encoding="utf-8")
    (crate / "hello.conf").write_text("greeting = hi\n", encoding="utf-8")
    return crate


@pytest.fixture
def write_manifest(crate_dir: Path):
    """Write a Cargo.toml into crate_dir and return its path."""

    def _write(text: str = BASIC_MANIFEST) -> Path:
        path = crate_dir / "Cargo.toml"
        path.write_text(dedent(text), encoding="utf-8")
        return path

    return _write
