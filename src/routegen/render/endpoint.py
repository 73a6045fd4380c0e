from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from inflection import singularize

from routegen.domain.models import RouteRecord, is_placeholder
from routegen.naming.endpoint import NamedEndpoint
from routegen.naming.resource import resolve

REPO_PREFIX = "/repos/:owner/:repo"
REPO_PATH_EXPR = "#{Repository.path repo}"

INDENT = "      "
BODY_INDENT = INDENT + "  "


class Parameterizer(Protocol):
    def parameterize(self, args: Sequence[str]) -> str: ...


class PositionalParameterizer:
    """issue_comments(repo, number, options = {})"""

    def parameterize(self, args: Sequence[str]) -> str:
        return ", ".join([*args, "options = {}"])


class KwargsParameterizer:
    """issue_comments(repo:, number:, **options)"""

    def parameterize(self, args: Sequence[str]) -> str:
        return ", ".join([*(f"{a}:" for a in args), "**options"])


PARAMETERIZERS = {
    "positional": PositionalParameterizer,
    "kwargs": KwargsParameterizer,
}


def api_path(route: RouteRecord) -> str:
    """
    Ruby string body of the request path:
    /repos/:owner/:repo/issues/:number -> #{Repository.path repo}/issues/#{number}
    """
    path = route.path
    prefix = ""
    if path == REPO_PREFIX or path.startswith(REPO_PREFIX + "/"):
        prefix = REPO_PATH_EXPR
        path = path[len(REPO_PREFIX):]

    required = {p.name for p in route.required_params}
    segments = [
        f"#{{{seg[1:]}}}" if is_placeholder(seg) and seg[1:] in required else seg
        for seg in path.split("/")
    ]
    return prefix + "/".join(segments)


def option_overrides(route: RouteRecord) -> List[str]:
    # required params the path does not carry travel in the options hash
    placeholders = {seg[1:] for seg in route.segments if is_placeholder(seg)}
    out: List[str] = []
    for p in route.required_params:
        if p.name in placeholders or p.name.endswith("_url"):
            continue
        normalization = ".to_s.downcase" if p.enum else ""
        out.append(f"options[:{p.name}] = {p.name}{normalization}")
    return out


def method_body(route: RouteRecord) -> List[str]:
    return [*option_overrides(route), f'{route.verb.lower()}("{api_path(route)}", options)']


def subresource_body(route: RouteRecord) -> Optional[List[str]]:
    url_param = next((p for p in route.params if p.name.endswith("_url")), None)
    if url_param is None:
        return None
    resource = resolve(route.path)
    parent = singularize(resource.objects[0])
    return [
        f"{parent} = get({url_param.name}, accept: options[:accept])",
        *option_overrides(route),
        f"{route.verb.lower()}({parent}.rels[:{resource.objects[-1]}].href, options)",
    ]


def doc_comment(route: RouteRecord, named: NamedEndpoint) -> List[str]:
    lines: List[str] = []
    if route.name:
        lines += [route.name, ""]
    lines += named.doc_lines
    return [f"{INDENT}# {line}".rstrip() for line in lines]


def render_endpoint(
    route: RouteRecord,
    named: NamedEndpoint,
    parameterizer: Optional[Parameterizer] = None,
) -> Optional[str]:
    """Documented method stanza (plus alias) for one endpoint, or None when its verb is not generated."""
    if not named.is_supported:
        return None
    parameterizer = parameterizer or PositionalParameterizer()

    body = None
    if resolve(route.path).is_subresource:
        body = subresource_body(route)
    if body is None:
        body = method_body(route)

    lines = doc_comment(route, named)
    lines.append(f"{INDENT}def {named.method_name}({parameterizer.parameterize(named.parameters)})")
    lines += [BODY_INDENT + line for line in body]
    lines.append(f"{INDENT}end")
    if named.alternate_name:
        lines.append(f"{INDENT}alias :{named.alternate_name} :{named.method_name}")
    return "\n".join(lines)
