"""Tests for LocalizationOptions."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from sqllocalization.enums import SourceOption
from sqllocalization.options import LocalizationOptions


class TestDefaults:
    def test_default_values(self) -> None:
        options = LocalizationOptions()
        assert options.source_args == {}
        assert options.separator == "."
        assert options.filter_segments == 2

    def test_instances_do_not_share_source_args(self) -> None:
        first = LocalizationOptions()
        first.source_args["Table"] = "A"
        assert LocalizationOptions().source_args == {}


class TestValidation:
    def test_source_args_copied(self) -> None:
        args = {"Table": "LocalizedStrings"}
        options = LocalizationOptions(source_args=args)
        args["Table"] = "Changed"
        assert options.source_args == {"Table": "LocalizedStrings"}

    def test_none_source_args_rejected(self) -> None:
        with pytest.raises(TypeError, match="source_args"):
            LocalizationOptions(source_args=None)  # type: ignore[arg-type]

    def test_empty_separator_rejected(self) -> None:
        with pytest.raises(ValueError, match="separator"):
            LocalizationOptions(separator="")

    @pytest.mark.parametrize("segments", [0, -1])
    def test_non_positive_segments_rejected(self, segments: int) -> None:
        with pytest.raises(ValueError, match="filter_segments"):
            LocalizationOptions(filter_segments=segments)

    def test_frozen(self) -> None:
        options = LocalizationOptions()
        with pytest.raises(FrozenInstanceError):
            options.separator = "/"  # type: ignore[misc]


class TestFromEnviron:
    def test_reads_prefixed_variables(self) -> None:
        environ = {
            "SQLLOCALIZATION_CONNECTION_STRING": "sqlite:///strings.db",
            "SQLLOCALIZATION_TABLE": "LocalizedStrings",
            "SQLLOCALIZATION_COLUMN": "Value",
            "UNRELATED": "x",
        }
        options = LocalizationOptions.from_environ(environ=environ)
        assert options.source_args == {
            "ConnectionString": "sqlite:///strings.db",
            "Table": "LocalizedStrings",
            "Column": "Value",
        }

    def test_unset_variables_left_out(self) -> None:
        options = LocalizationOptions.from_environ(environ={"SQLLOCALIZATION_TABLE": "T"})
        assert options.source_args == {SourceOption.TABLE: "T"}

    def test_custom_prefix(self) -> None:
        options = LocalizationOptions.from_environ("APP_", {"APP_COLUMN": "Text"})
        assert options.source_args == {"Column": "Text"}

    def test_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SQLLOCALIZATION_TABLE", "FromEnv")
        assert LocalizationOptions.from_environ().source_args["Table"] == "FromEnv"


class TestSourceOption:
    def test_members_are_strings(self) -> None:
        assert SourceOption.CONNECTION_STRING == "ConnectionString"
        assert str(SourceOption.TABLE) == "Table"

    def test_env_suffix(self) -> None:
        assert SourceOption.CONNECTION_STRING.env_suffix == "CONNECTION_STRING"
