from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

HttpVerb = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class MalformedRouteError(ValueError):
    """A route description that cannot be processed at all (missing path/method, no literal segment)."""


def split_path(path: str) -> list[str]:
    # "/repos/:owner/:repo" -> ["repos", ":owner", ":repo"]
    return [seg for seg in (path or "").split("/") if seg]


def is_placeholder(segment: str) -> bool:
    return segment.startswith(":")


class Parameter(BaseModel):
    name: str
    type: str = "string"
    required: bool = False
    enum: Optional[list[Any]] = None
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, v: Any) -> Any:
        return "" if v is None else v


class RouteRecord(BaseModel):
    """
    One endpoint as described by a route file.

    `path` and `params` are rewritten in place by the normalizer, once;
    `original_path` keeps the path as it was read.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    path: str
    verb: HttpVerb = Field(alias="method")
    params: list[Parameter] = Field(default_factory=list)
    documentation_url: str = Field("", alias="documentationUrl")
    name: str = ""
    original_path: str = Field("", frozen=True)
    normalized: bool = False

    @field_validator("verb", mode="before")
    @classmethod
    def _upper_verb(cls, v: Any) -> Any:
        return v.upper().strip() if isinstance(v, str) else v

    @field_validator("params", mode="before")
    @classmethod
    def _none_params(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("documentation_url", "name", mode="before")
    @classmethod
    def _none_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @model_validator(mode="before")
    @classmethod
    def _keep_original_path(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("original_path"):
            data = {**data, "original_path": data.get("path", "")}
        return data

    @field_validator("path")
    @classmethod
    def _literal_segment(cls, v: str) -> str:
        if all(is_placeholder(seg) for seg in split_path(v)):
            raise ValueError(f"path has no literal segment: {v!r}")
        return v

    @property
    def segments(self) -> list[str]:
        return split_path(self.path)

    @property
    def original_segments(self) -> list[str]:
        return split_path(self.original_path)

    def param(self, name: str) -> Optional[Parameter]:
        return next((p for p in self.params if p.name == name), None)

    @property
    def required_params(self) -> list[Parameter]:
        return [p for p in self.params if p.required]

    @property
    def optional_params(self) -> list[Parameter]:
        return [p for p in self.params if not p.required]


class GenerateOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    style: Literal["positional", "kwargs"] = "positional"
    client_module: str = "Octokit"
    client_class: str = "Client"


def parse_route(data: Any) -> RouteRecord:
    """Build a RouteRecord from a decoded route description (dict)."""
    if not isinstance(data, dict):
        raise MalformedRouteError(f"route description must be an object, got {type(data).__name__}")
    missing = [k for k in ("path", "method") if not data.get(k)]
    if missing:
        raise MalformedRouteError(f"route description is missing: {', '.join(missing)}")
    try:
        return RouteRecord.model_validate(data)
    except ValidationError as e:
        raise MalformedRouteError(str(e)) from e


def load_route(text: str) -> RouteRecord:
    """Parse one JSON route description."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedRouteError(f"invalid JSON: {e}") from e
    return parse_route(data)


def read_route(path: Path) -> RouteRecord:
    """Read and parse one route file."""
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedRouteError(f"cannot read {path.name}: {e}") from e
    return load_route(text)
