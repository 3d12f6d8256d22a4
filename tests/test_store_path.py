"""Tests for locating the field-card store."""

from __future__ import annotations

from pathlib import Path

import pytest

from culvert_sizer.store_path import DEFAULT_STORE_PATH, resolve_store_path


def test_environment_variable_wins(tmp_path: Path) -> None:
    path_file: Path = tmp_path / "STORE_PATH.txt"
    path_file.write_text(str(tmp_path / "file.json"), encoding="utf-8")
    environ: dict[str, str] = {"CULVERT_SIZER_STORE": str(tmp_path / "env.json")}
    assert resolve_store_path(environ, path_file) == tmp_path / "env.json"


def test_path_file_is_read_when_environment_is_unset(tmp_path: Path) -> None:
    path_file: Path = tmp_path / "STORE_PATH.txt"
    path_file.write_text(f'"{tmp_path / "alt.json"}"\n', encoding="utf-8")
    assert resolve_store_path({"CULVERT_SIZER_STORE": ""}, path_file) == tmp_path / "alt.json"


@pytest.mark.parametrize("contents", [None, "  \n"])
def test_falls_back_to_home_directory(tmp_path: Path, contents: str | None) -> None:
    path_file: Path = tmp_path / "STORE_PATH.txt"
    if contents is not None:
        path_file.write_text(contents, encoding="utf-8")
    assert resolve_store_path({}, path_file) == DEFAULT_STORE_PATH.expanduser()


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CULVERT_SIZER_STORE", str(tmp_path / "env.json"))
    assert resolve_store_path() == tmp_path / "env.json"
