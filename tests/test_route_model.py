import json

import pytest
from pydantic import ValidationError

from routegen.domain.models import MalformedRouteError, RouteRecord, load_route, parse_route, read_route


def test_load_route_maps_input_fields():
    text = json.dumps(
        {
            "name": "List hooks",
            "path": "/repos/:owner/:repo/hooks",
            "method": "get",
            "params": [{"name": "repo", "type": "string", "required": True, "description": None}],
            "documentationUrl": "https://developer.github.com/v3/repos/hooks/#list-hooks",
        }
    )
    route = load_route(text)

    assert route.verb == "GET"
    assert route.documentation_url.endswith("#list-hooks")
    assert route.original_path == "/repos/:owner/:repo/hooks"
    assert route.params[0].description == ""
    assert route.normalized is False


def test_parse_route_missing_fields():
    with pytest.raises(MalformedRouteError):
        parse_route({"path": "/repos/:owner/:repo"})
    with pytest.raises(MalformedRouteError):
        parse_route({"method": "GET"})


def test_load_route_invalid_json():
    with pytest.raises(MalformedRouteError):
        load_route("{not json")


def test_parse_route_needs_a_literal_segment():
    with pytest.raises(MalformedRouteError):
        parse_route({"path": "/:owner/:repo", "method": "GET"})


def test_parse_route_unknown_verb():
    with pytest.raises(MalformedRouteError):
        parse_route({"path": "/users", "method": "OPTIONS"})


def test_params_may_be_null():
    route = parse_route({"path": "/user/repos", "method": "GET", "params": None})
    assert route.params == []


def test_original_path_is_frozen():
    route = RouteRecord(path="/repos/:owner/:repo/hooks/:id", verb="GET")
    route.path = "/repos/:owner/:repo/hooks/:hook_id"

    with pytest.raises(ValidationError):
        route.original_path = "/elsewhere"
    assert route.original_path == "/repos/:owner/:repo/hooks/:id"


def test_read_route_rejects_bad_encoding(tmp_path):
    f = tmp_path / "bad.json"
    f.write_bytes(b'{"path": "/x\xff", "method": "GET"}')
    with pytest.raises(MalformedRouteError):
        read_route(f)


def test_read_route_missing_file(tmp_path):
    with pytest.raises(MalformedRouteError):
        read_route(tmp_path / "gone.json")
