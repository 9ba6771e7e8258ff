"""Tests for asset resolution."""

from pathlib import Path

import pytest

from cargo_generate_rpm.assets import FileInfo, file_mode, locate_on_disk, resolve_assets
from cargo_generate_rpm.core.errors import (
    AssetFileNotFoundError,
    AssetFileUndefinedError,
    AssetFileWrongTypeError,
    MissingFieldError,
    WrongTypeError,
)


def _metadata(*assets: object) -> dict:
    return {"assets": list(assets)}


class TestResolveAssets:
    """Test resolution of the assets array."""

    def test_minimal_entry_uses_defaults(self) -> None:
        """Test that optional fields default to unset/False."""
        files = resolve_assets(_metadata({"source": "a", "dest": "/a"}))
        assert files == [FileInfo(source="a", dest="/a")]
        assert files[0].user is None
        assert files[0].mode is None
        assert files[0].config is False
        assert files[0].doc is False

    def test_full_entry(self) -> None:
        """Test that every field is carried over."""
        files = resolve_assets(
            _metadata(
                {
                    "source": "etc/app.conf",
                    "dest": "/etc/app.conf",
                    "user": "app",
                    "group": "wheel",
                    "mode": "640",
                    "config": True,
                    "doc": False,
                }
            )
        )
        assert files == [
            FileInfo(
                source="etc/app.conf",
                dest="/etc/app.conf",
                user="app",
                group="wheel",
                mode=0o100640,
                config=True,
                doc=False,
            )
        ]

    def test_keeps_manifest_order(self) -> None:
        """Test that entries come back in manifest order."""
        files = resolve_assets(
            _metadata(
                {"source": "b", "dest": "/b"},
                {"source": "a", "dest": "/a"},
            )
        )
        assert [f.source for f in files] == ["b", "a"]

    def test_missing_assets(self) -> None:
        """Test that an absent assets key is a missing field."""
        with pytest.raises(MissingFieldError) as exc_info:
            resolve_assets({})
        assert exc_info.value.path == "package.metadata.generate-rpm.assets"

    @pytest.mark.parametrize("value", ["a", 1, {"source": "a"}, True])
    def test_assets_not_an_array(self, value: object) -> None:
        """Test that a non-array assets value is a wrong type."""
        with pytest.raises(WrongTypeError) as exc_info:
            resolve_assets({"assets": value})
        assert exc_info.value.path == "package.metadata.generate-rpm.assets"
        assert exc_info.value.expected == "array"

    def test_non_table_entry_reports_undefined_source(self) -> None:
        """Test that a non-table entry reuses the undefined-source error."""
        with pytest.raises(AssetFileUndefinedError) as exc_info:
            resolve_assets(_metadata({"source": "a", "dest": "/a"}, "b"))
        assert exc_info.value.index == 1
        assert exc_info.value.field == "source"
        assert str(exc_info.value) == "source of 1-th asset is undefined"

    @pytest.mark.parametrize("field", ["source", "dest"])
    def test_missing_required_field(self, field: str) -> None:
        """Test that source and dest are required."""
        entry = {"source": "a", "dest": "/a"}
        del entry[field]
        with pytest.raises(AssetFileUndefinedError) as exc_info:
            resolve_assets(_metadata(entry))
        assert exc_info.value.index == 0
        assert exc_info.value.field == field

    @pytest.mark.parametrize(
        "entry,field",
        [
            ({"source": "", "dest": "/a"}, "source"),
            ({"source": "a", "dest": ""}, "dest"),
            ({"source": "", "dest": ""}, "source"),
        ],
    )
    def test_empty_required_field(self, entry: dict, field: str) -> None:
        """Test that an empty source or dest counts as undefined."""
        with pytest.raises(AssetFileUndefinedError) as exc_info:
            resolve_assets(_metadata({"source": "a", "dest": "/a"}, entry))
        assert exc_info.value.index == 1
        assert exc_info.value.field == field

    @pytest.mark.parametrize(
        "field,value,expected",
        [
            ("source", 1, "string"),
            ("dest", ["/a"], "string"),
            ("user", 0, "string"),
            ("group", False, "string"),
            ("mode", 644, "string"),
            ("config", "yes", "bool"),
            ("doc", 1, "bool"),
        ],
    )
    def test_wrong_field_type(self, field: str, value: object, expected: str) -> None:
        """Test the wrong-type error of each field."""
        entry: dict[str, object] = {"source": "a", "dest": "/a"}
        entry[field] = value
        with pytest.raises(AssetFileWrongTypeError) as exc_info:
            resolve_assets(_metadata(entry))
        assert exc_info.value.index == 0
        assert exc_info.value.field == field
        assert exc_info.value.expected == expected

    @pytest.mark.parametrize("mode", ["", "0x1ff", "789", "rw-r--r--", " 644", "-644"])
    def test_mode_must_be_octal(self, mode: str) -> None:
        """Test that non-octal mode strings are rejected."""
        with pytest.raises(AssetFileWrongTypeError) as exc_info:
            resolve_assets(_metadata({"source": "a", "dest": "/a", "mode": mode}))
        assert exc_info.value.field == "mode"
        assert exc_info.value.expected == "oct-string"
        assert str(exc_info.value) == "mode of 0-th asset must be oct-string"

    @pytest.mark.parametrize("mode", ["200000", "7" * 30, "1777777"])
    def test_mode_out_of_range(self, mode: str) -> None:
        """Test that modes wider than 16 bits are rejected."""
        with pytest.raises(AssetFileWrongTypeError) as exc_info:
            resolve_assets(_metadata({"source": "a", "dest": "/a", "mode": mode}))
        assert exc_info.value.field == "mode"
        assert exc_info.value.expected == "oct-string"

    def test_widest_mode_accepted(self) -> None:
        """Test that the largest 16-bit mode still resolves."""
        files = resolve_assets(_metadata({"source": "a", "dest": "/a", "mode": "177777"}))
        assert files[0].mode == 0o177777

    def test_stops_at_first_failing_entry(self) -> None:
        """Test that later entries are not evaluated after a failure."""
        with pytest.raises(AssetFileUndefinedError) as exc_info:
            resolve_assets(
                _metadata(
                    {"source": "a", "dest": "/a"},
                    {"source": "b"},
                    {"dest": "/c"},
                )
            )
        assert exc_info.value.index == 1
        assert exc_info.value.field == "dest"

    def test_first_field_error_wins(self) -> None:
        """Test that fields are checked in order and the first error is reported."""
        with pytest.raises(AssetFileWrongTypeError) as exc_info:
            resolve_assets(_metadata({"source": "a", "dest": "/a", "user": 1, "doc": "no"}))
        assert exc_info.value.field == "user"


class TestFileMode:
    """Test file-type bit handling."""

    def test_regular_file_bits(self) -> None:
        """Test that plain sources get S_IFREG."""
        files = resolve_assets(_metadata({"source": "a/b.txt", "dest": "/b.txt", "mode": "644"}))
        assert files[0].mode == 0o100644

    def test_directory_bits(self) -> None:
        """Test that sources with a trailing slash get S_IFDIR."""
        files = resolve_assets(_metadata({"source": "a/b/", "dest": "/b", "mode": "644"}))
        assert files[0].mode == 0o040644

    def test_existing_type_bits_are_kept(self) -> None:
        """Test that explicit type bits are not replaced."""
        files = resolve_assets(_metadata({"source": "a/", "dest": "/a", "mode": "120644"}))
        assert files[0].mode == 0o120644

    def test_leading_zero_and_special_bits(self) -> None:
        """Test that setuid/sticky bits survive."""
        assert file_mode(0o4755, "bin/tool") == 0o104755
        assert file_mode(int("0755", 8), "bin/tool") == 0o100755


class TestRpmFileOptions:
    """Test conversion of FileInfo into builder options."""

    def test_unset_fields_stay_unset(self) -> None:
        """Test that defaults are left to the builder."""
        options = FileInfo(source="a", dest="/a").rpm_file_options()
        assert options.destination == "/a"
        assert options.user_name is None
        assert options.group_name is None
        assert options.file_mode is None
        assert options.config is False
        assert options.doc is False

    def test_fields_are_applied(self) -> None:
        """Test that every set field reaches the options."""
        info = FileInfo(
            source="a", dest="/a", user="u", group="g", mode=0o100600, config=True, doc=True
        )
        options = info.rpm_file_options()
        assert options.user_name == "u"
        assert options.group_name == "g"
        assert options.file_mode == 0o100600
        assert options.config is True
        assert options.doc is True


class TestLocateOnDisk:
    """Test the source search path."""

    def test_prefers_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a source relative to the cwd wins."""
        cwd = tmp_path / "cwd"
        base = tmp_path / "base"
        cwd.mkdir()
        base.mkdir()
        (cwd / "LICENSE").touch()
        (base / "LICENSE").touch()
        monkeypatch.chdir(cwd)

        assert locate_on_disk("LICENSE", base) == Path("LICENSE")

    def test_falls_back_to_manifest_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a source next to the manifest is found."""
        cwd = tmp_path / "cwd"
        base = tmp_path / "base"
        cwd.mkdir()
        base.mkdir()
        (base / "LICENSE").touch()
        monkeypatch.chdir(cwd)

        assert locate_on_disk("LICENSE", base) == base / "LICENSE"

    def test_not_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a source found nowhere raises."""
        monkeypatch.chdir(tmp_path)
        with pytest.raises(AssetFileNotFoundError) as exc_info:
            locate_on_disk("LICENSE", tmp_path / "base")
        assert exc_info.value.path == "LICENSE"
        assert str(exc_info.value) == "Asset file not found: LICENSE"

    def test_absolute_source(self, tmp_path: Path) -> None:
        """Test that absolute sources are used as they are."""
        target = tmp_path / "abs.txt"
        target.touch()
        assert locate_on_disk(str(target), tmp_path / "elsewhere") == target
