from __future__ import annotations

from pathlib import Path

DEFAULT_IGNORES = {
    ".DS_Store",
    ".gitkeep",
}


def should_ignore_file(file_path: Path) -> bool:
    # editor backups and hidden files are never route descriptions
    name = file_path.name
    return name in DEFAULT_IGNORES or name.startswith(".") or name.endswith("~")
