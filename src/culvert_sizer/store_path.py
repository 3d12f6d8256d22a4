"""Locate the JSON field-card store used by the command line."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

ENV_VARIABLE = "CULVERT_SIZER_STORE"
DEFAULT_STORE_PATH = Path("~/.culvert-sizer/field_cards.json")

# One-line override file at the project root.
PATH_FILE = Path(__file__).resolve().parents[2] / "STORE_PATH.txt"


def _read_path_file(path_file: Path) -> Path | None:
    if not path_file.is_file():
        return None
    text: str = path_file.read_text(encoding="utf-8").strip().strip('"')
    return Path(text).expanduser() if text else None


def resolve_store_path(environ: Mapping[str, str] | None = None, path_file: Path | None = None) -> Path:
    """
    Return the store location: `$CULVERT_SIZER_STORE`, then `STORE_PATH.txt`,
    then `~/.culvert-sizer/field_cards.json`.
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    override: str = env.get(ENV_VARIABLE, "")
    if override:
        return Path(override).expanduser()
    return _read_path_file(path_file or PATH_FILE) or DEFAULT_STORE_PATH.expanduser()


__all__: list[str] = ["DEFAULT_STORE_PATH", "ENV_VARIABLE", "PATH_FILE", "resolve_store_path"]
