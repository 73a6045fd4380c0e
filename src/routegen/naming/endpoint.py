from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar

from inflection import singularize

from routegen.domain.models import Parameter, RouteRecord, is_placeholder
from routegen.naming.normalize import id_description
from routegen.naming.params import known_param
from routegen.naming.resource import ends_with_id_placeholder, literal_segments

VERB_PRIORITY: Tuple[str, ...] = ("GET", "POST")
PAGINATION_PARAMS = frozenset(["per_page", "page"])

LIST_RETURN_TYPE = "[Array<Sawyer::Resource>]"
ITEM_RETURN_TYPE = "<Sawyer::Resource>"

PriorityKey = Tuple[int, int, int]

T = TypeVar("T")


@dataclass(frozen=True)
class NamingResource:
    """What the generated method is about, as seen from its directory."""

    name: str           # issue_comments
    is_singular: bool   # path ends in an :*id placeholder

    @property
    def canonical_name(self) -> str:
        return singularize(self.name) if self.is_singular else self.name

    @property
    def label(self) -> str:
        return self.canonical_name.replace("_", " ")


@dataclass(frozen=True)
class NamedEndpoint:
    method_name: Optional[str]          # None: verb not generated
    alternate_name: Optional[str]
    parameters: Tuple[str, ...]
    doc_lines: Tuple[str, ...]
    priority_key: PriorityKey
    resource: NamingResource
    verb: str

    @property
    def is_supported(self) -> bool:
        return self.method_name is not None


def naming_resource(route: RouteRecord, directory: str) -> NamingResource:
    segment = literal_segments(route.path)[-1]
    if not directory or segment == directory:
        name = segment
    else:
        name = f"{singularize(directory)}_{segment}"
    return NamingResource(name=name, is_singular=ends_with_id_placeholder(route.path))


def method_name(verb: str, resource: NamingResource) -> Optional[str]:
    if verb == "GET":
        return resource.canonical_name
    if verb == "POST":
        return f"create_{singularize(resource.name)}"
    return None


def alternate_name(verb: str, resource: NamingResource) -> Optional[str]:
    if verb != "GET" or resource.is_singular:
        return None
    return f"list_{resource.canonical_name}"


def parameter_type(param: Parameter) -> str:
    known = known_param(param.name)
    if known is not None:
        return known.type_tag
    return f"[{param.type.capitalize()}]"


def parameter_description(param: Parameter) -> str:
    if param.description:
        return param.description
    known = known_param(param.name)
    if known is not None:
        return known.description
    if param.name.endswith("_id"):
        return id_description(param.name)
    return ""


def return_type(verb: str, resource: NamingResource) -> str:
    if verb == "GET" and not resource.is_singular:
        return LIST_RETURN_TYPE
    return ITEM_RETURN_TYPE


def return_value(verb: str, resource: NamingResource) -> str:
    if verb == "GET":
        if resource.is_singular:
            return f"A single {resource.label}"
        return f"A list of {resource.label}"
    if verb == "POST":
        return f"The new {singularize(resource.name).replace('_', ' ')}"
    return ""


def _line(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def doc_lines(route: RouteRecord, resource: NamingResource) -> List[str]:
    lines = [
        _line("@param", p.name, parameter_type(p), parameter_description(p))
        for p in route.required_params
    ]
    lines += [
        _line("@param options", f"[{p.type.capitalize()}]", f":{p.name}", p.description)
        for p in route.optional_params
        if p.name not in PAGINATION_PARAMS
    ]
    lines.append(_line("@return", return_type(route.verb, resource), return_value(route.verb, resource)))
    lines.append(_line("@see", route.documentation_url))
    return lines


def priority_key(route: RouteRecord, directory: str, resource: NamingResource) -> PriorityKey:
    segments = route.segments
    start = segments.index(directory) if directory in segments else 0
    parts = [seg for seg in segments[start:] if not is_placeholder(seg)]

    verb_rank = VERB_PRIORITY.index(route.verb) if route.verb in VERB_PRIORITY else len(VERB_PRIORITY)
    return (len(parts), verb_rank, 0 if resource.is_singular else 1)


def _own_priority(endpoint: Any) -> PriorityKey:
    return endpoint.priority_key


def name_endpoint(route: RouteRecord, directory: str) -> NamedEndpoint:
    """
    Name a normalized route that lives in `directory` (e.g. "issues").

    Everything is derived from the route as it is now; nothing is cached.
    """
    resource = naming_resource(route, directory)
    return NamedEndpoint(
        method_name=method_name(route.verb, resource),
        alternate_name=alternate_name(route.verb, resource),
        parameters=tuple(p.name for p in route.required_params),
        doc_lines=tuple(doc_lines(route, resource)),
        priority_key=priority_key(route, directory, resource),
        resource=resource,
        verb=route.verb,
    )


def sort_endpoints(endpoints: Iterable[T], key: Callable[[T], PriorityKey] = _own_priority) -> List[T]:
    # sorted() is stable: equal keys keep their input order
    return sorted(endpoints, key=key)
