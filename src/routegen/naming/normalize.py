from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from inflection import singularize

from routegen.domain.models import Parameter, RouteRecord, split_path
from routegen.naming.params import known_param
from routegen.naming.resource import preceding_segment, resolve

logger = logging.getLogger(__name__)

GENERIC_ID = ":id"
ALERT_NOTICE = " Please see more in the alert below."

Rule = Callable[[RouteRecord], None]


def _id_resource(route: RouteRecord) -> Optional[str]:
    # "/repos/:owner/:repo/issues/:id" -> "issue"
    segment = preceding_segment(route.original_segments, GENERIC_ID)
    return singularize(segment) if segment else None


def _strip_id_suffix(name: str) -> str:
    return name[: -len("_id")] if name.endswith("_id") else name


def id_description(name: str) -> str:
    # "pull_request_id" -> "The ID of the pull request"
    return f"The ID of the {_strip_id_suffix(name).replace('_', ' ')}"


def rewrite_id_placeholder(route: RouteRecord) -> None:
    """`:id` becomes `:<resource>_id`, the resource being the segment before it."""
    if GENERIC_ID not in route.segments:
        return
    resource = _id_resource(route)
    if resource is None:
        logger.debug("no segment before :id in %s; path left as is", route.original_path)
        return
    target = f":{resource}_id"
    segments = [target if seg == GENERIC_ID else seg for seg in route.segments]
    route.path = "/" + "/".join(segments)


def drop_owner(route: RouteRecord) -> None:
    route.params = [p for p in route.params if p.name != "owner"]


def rename_id_param(route: RouteRecord) -> None:
    param = route.param("id")
    if param is None:
        return
    resource = _id_resource(route)
    if resource is None:
        logger.debug("cannot name the id parameter of %s", route.original_path)
        return
    param.name = f"{resource}_id"


def coerce_id_types(route: RouteRecord) -> None:
    # identifiers are numeric in this API
    for p in route.params:
        if p.name.endswith("_id") and p.type != "integer":
            p.type = "integer"


def describe_known_params(route: RouteRecord) -> None:
    for p in route.params:
        known = known_param(p.name)
        if known is not None:
            p.description = known.description


def describe_ids(route: RouteRecord) -> None:
    for p in route.params:
        if p.description == "" and p.name.endswith("_id"):
            p.description = id_description(p.name)


def strip_alert_notice(route: RouteRecord) -> None:
    for p in route.params:
        p.description = p.description.replace(ALERT_NOTICE, "")


def rewrite_array_types(route: RouteRecord) -> None:
    for p in route.params:
        if p.type.endswith("[]"):
            p.type = f"Array<{p.type.replace('[]', '')}>"


def synthesize_url_param(route: RouteRecord) -> None:
    """
    Subresources are addressed through the URL of their parent:
    the repo and parent id parameters collapse into one `<parent>_url`.
    """
    if not resolve(route.path).is_subresource:
        return

    id_param = next((p for p in route.params if "id" in p.name), None)
    if id_param is None:
        logger.debug("subresource %s has no id parameter", route.path)
        return

    segment = preceding_segment(split_path(route.path), f":{id_param.name}")
    if segment is None:
        logger.debug("%s is not a placeholder of %s", id_param.name, route.path)
        return

    resource = singularize(segment)
    url_name = f"{resource}_url"
    params = [p for p in route.params if p.name not in ("repo", id_param.name, url_name)]
    url_param = Parameter(
        name=url_name,
        type="string",
        required=True,
        description=f"A URL for a {resource} resource.",
    )
    route.params = [url_param, *params]


NORMALIZATION_RULES: tuple[Rule, ...] = (
    rewrite_id_placeholder,
    drop_owner,
    rename_id_param,
    coerce_id_types,
    describe_known_params,
    describe_ids,
    strip_alert_notice,
    rewrite_array_types,
    synthesize_url_param,
)


def normalize_route(route: RouteRecord, rules: Iterable[Rule] = NORMALIZATION_RULES) -> RouteRecord:
    """
    Apply the normalization rules, in order, to `route` (in place).

    A record is normalized once; later calls return it unchanged.
    """
    if route.normalized:
        logger.debug("%s %s already normalized", route.verb, route.original_path)
        return route

    for rule in rules:
        rule(route)

    route.normalized = True
    return route


def normalize_routes(routes: Iterable[RouteRecord]) -> List[RouteRecord]:
    return [normalize_route(r) for r in routes]
