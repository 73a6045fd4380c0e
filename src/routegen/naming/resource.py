from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from inflection import singularize

from routegen.domain.models import MalformedRouteError, is_placeholder, split_path

# structural marker, never part of a resource name
REPOS_MARKER = "repos"


@dataclass(frozen=True)
class Resource:
    """
    Semantic resource behind a path template.

    A pure view over the path: recompute it after the path changes.
    """

    path: str
    objects: tuple[str, ...]
    is_singular: bool

    @property
    def is_subresource(self) -> bool:
        return len(self.objects) > 1

    @property
    def canonical_name(self) -> str:
        if self.is_subresource:
            prefix, resource = self.objects[0], self.objects[1]
            name = f"{singularize(prefix)}_{resource}"
        else:
            name = self.objects[0]
        return singularize(name) if self.is_singular else name


def literal_segments(path: str) -> list[str]:
    return [seg for seg in split_path(path) if not is_placeholder(seg)]


def ends_with_id_placeholder(path: str) -> bool:
    # ":issue_id", ":id" but not ":number"
    segments = split_path(path)
    return bool(segments) and is_placeholder(segments[-1]) and segments[-1].endswith("id")


def preceding_segment(segments: list[str], target: str) -> Optional[str]:
    """Segment right before the first occurrence of `target`, or None."""
    try:
        idx = segments.index(target)
    except ValueError:
        return None
    if idx == 0:
        return None
    return segments[idx - 1]


def resolve(path: str) -> Resource:
    objects = literal_segments(path)
    if not objects:
        raise MalformedRouteError(f"path has no literal segment: {path!r}")

    if len(objects) > 1:
        objects = [o for o in objects if o != REPOS_MARKER] or objects

    return Resource(
        path=path,
        objects=tuple(objects),
        is_singular=ends_with_id_placeholder(path),
    )
