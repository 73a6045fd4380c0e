from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from routegen.domain.models import GenerateOptions, MalformedRouteError, RouteRecord, read_route
from routegen.naming.endpoint import NamedEndpoint, name_endpoint, sort_endpoints
from routegen.naming.normalize import normalize_route
from routegen.render.endpoint import PARAMETERIZERS, Parameterizer, render_endpoint
from routegen.render.module import namespace_for, render_module
from routegen.repo.scanner import scan_route_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedEndpoint:
    file_path: str
    route: RouteRecord          # normalized
    named: NamedEndpoint
    text: Optional[str]         # None when the verb is not generated


@dataclass(frozen=True)
class RouteFailure:
    file_path: str
    message: str


@dataclass(frozen=True)
class GenerateResult:
    routes_dir: str
    namespace: str
    endpoints: list[GeneratedEndpoint]   # priority order, generated or not
    failures: list[RouteFailure]
    module_text: str

    @property
    def generated(self) -> list[GeneratedEndpoint]:
        return [e for e in self.endpoints if e.text is not None]

    @property
    def skipped(self) -> list[GeneratedEndpoint]:
        return [e for e in self.endpoints if e.text is None]


def generate_endpoint(
    route: RouteRecord,
    directory: str,
    parameterizer: Optional[Parameterizer] = None,
    file_path: str = "",
) -> GeneratedEndpoint:
    route = normalize_route(route)
    named = name_endpoint(route, directory)
    text = render_endpoint(route, named, parameterizer)
    if text is None:
        logger.info("skipping %s %s: verb is not generated", route.verb, route.original_path)
    return GeneratedEndpoint(file_path=file_path, route=route, named=named, text=text)


def run_generate(
    routes_dir: Path,
    options: Optional[GenerateOptions] = None,
    max_files: int | None = None,
) -> GenerateResult:
    """
    Generate the client module for one directory of route descriptions.

    A malformed route file is reported in `failures` and does not stop the others.
    """
    options = options or GenerateOptions()
    routes_dir = routes_dir.resolve()
    directory = routes_dir.name
    parameterizer = PARAMETERIZERS[options.style]()

    endpoints: list[GeneratedEndpoint] = []
    failures: list[RouteFailure] = []

    for p in scan_route_files(routes_dir, max_files=max_files):
        rel_path = Path(p).name
        try:
            route = read_route(Path(p))
            endpoints.append(generate_endpoint(route, directory, parameterizer, file_path=rel_path))
        except MalformedRouteError as e:
            logger.warning("malformed route %s: %s", rel_path, e)
            failures.append(RouteFailure(file_path=rel_path, message=str(e)))

    endpoints = sort_endpoints(endpoints, key=lambda e: e.named.priority_key)

    namespace = namespace_for(directory)
    documentation_url = endpoints[0].route.documentation_url if endpoints else ""
    module_text = render_module(
        namespace,
        documentation_url,
        [e.text for e in endpoints if e.text is not None],
        client_module=options.client_module,
        client_class=options.client_class,
    )

    return GenerateResult(
        routes_dir=str(routes_dir),
        namespace=namespace,
        endpoints=endpoints,
        failures=failures,
        module_text=module_text,
    )
