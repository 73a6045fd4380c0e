from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KnownParam:
    type_tag: str
    description: str


# Parameters whose documentation does not follow from their declared type.
KNOWN_PARAMS: dict[str, KnownParam] = {
    "repo": KnownParam(
        type_tag="[Integer, String, Repository, Hash]",
        description="A GitHub repository",
    ),
}


def known_param(name: str) -> Optional[KnownParam]:
    return KNOWN_PARAMS.get(name)
