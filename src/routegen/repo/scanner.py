from __future__ import annotations

import os
from pathlib import Path

from routegen.repo.ignore import should_ignore_file

ROUTE_SUFFIX = ".json"


def scan_route_files(routes_dir: Path, max_files: int | None = None) -> list[str]:
    """
    Return absolute paths (as strings) of the route descriptions directly under routes_dir.
    Sorted by file name so generated output does not depend on directory order.
    """
    out: list[str] = []
    for entry in sorted(os.listdir(routes_dir)):
        p = routes_dir / entry
        if not p.is_file() or should_ignore_file(p):
            continue
        if p.suffix != ROUTE_SUFFIX:
            continue
        out.append(str(p.resolve()))
        if max_files is not None and len(out) >= max_files:
            break
    return out
