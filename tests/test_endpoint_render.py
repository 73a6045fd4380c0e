from routegen.domain.models import RouteRecord
from routegen.naming.endpoint import name_endpoint
from routegen.naming.normalize import normalize_route
from routegen.render.endpoint import (
    KwargsParameterizer,
    PositionalParameterizer,
    api_path,
    option_overrides,
    render_endpoint,
)

DOCS = "https://developer.github.com/v3/issues/#list-issues-for-a-repository"


def param(name, type="string", required=True, description="", **extra):
    return {"name": name, "type": type, "required": required, "description": description, **extra}


def build(path, params, verb="GET", directory="issues", name=""):
    route = normalize_route(
        RouteRecord(path=path, verb=verb, params=params, documentation_url=DOCS, name=name)
    )
    return route, name_endpoint(route, directory)


def test_parameterizers():
    assert PositionalParameterizer().parameterize(["repo", "number"]) == "repo, number, options = {}"
    assert PositionalParameterizer().parameterize([]) == "options = {}"
    assert KwargsParameterizer().parameterize(["repo", "number"]) == "repo:, number:, **options"
    assert KwargsParameterizer().parameterize([]) == "**options"


def test_api_path_replaces_repository_prefix_once():
    route = RouteRecord(
        path="/repos/:owner/:repo/issues/:number/labels",
        verb="GET",
        params=[param("repo"), param("number", "integer")],
    )
    assert api_path(route) == "#{Repository.path repo}/issues/#{number}/labels"


def test_api_path_without_repository_prefix():
    route = RouteRecord(path="/orgs/:org/repos", verb="GET", params=[param("org")])
    assert api_path(route) == "/orgs/#{org}/repos"


def test_option_overrides():
    route = RouteRecord(
        path="/repos/:owner/:repo/issues",
        verb="POST",
        params=[param("repo"), param("title"), param("state", enum=["open", "closed"])],
    )
    assert option_overrides(route) == [
        "options[:title] = title",
        "options[:state] = state.to_s.downcase",
    ]


def test_render_list_endpoint():
    route, named = build(
        "/repos/:owner/:repo/issues",
        [
            param("owner"),
            param("repo"),
            param("state", required=False, description="Indicates the state of the issues to return."),
        ],
        name="List issues for a repository",
    )

    assert render_endpoint(route, named) == "\n".join(
        [
            "      # List issues for a repository",
            "      #",
            "      # @param repo [Integer, String, Repository, Hash] A GitHub repository",
            "      # @param options [String] :state Indicates the state of the issues to return.",
            "      # @return [Array<Sawyer::Resource>] A list of issues",
            f"      # @see {DOCS}",
            "      def issues(repo, options = {})",
            '        get("#{Repository.path repo}/issues", options)',
            "      end",
            "      alias :list_issues :issues",
        ]
    )


def test_render_create_endpoint_with_kwargs():
    route, named = build(
        "/repos/:owner/:repo/issues",
        [param("owner"), param("repo"), param("title", description="The title of the issue.")],
        verb="POST",
    )
    text = render_endpoint(route, named, KwargsParameterizer())
    lines = text.splitlines()

    assert "      def create_issue(repo:, title:, **options)" in lines
    assert "        options[:title] = title" in lines
    assert '        post("#{Repository.path repo}/issues", options)' in lines
    assert "alias" not in text


def test_render_subresource_follows_relation():
    route, named = build(
        "/repos/:owner/:repo/issues/:number/comments/:id",
        [param("owner"), param("repo"), param("number", "integer"), param("id")],
    )
    lines = render_endpoint(route, named).splitlines()

    assert "      def issue_comment(comment_url, number, options = {})" in lines
    assert "        issue = get(comment_url, accept: options[:accept])" in lines
    assert "        get(issue.rels[:comments].href, options)" in lines


def test_render_subresource_without_url_param_uses_path():
    route, named = build(
        "/repos/:owner/:repo/issues/comments",
        [param("owner"), param("repo")],
    )
    lines = render_endpoint(route, named).splitlines()

    assert "      def issue_comments(repo, options = {})" in lines
    assert '        get("#{Repository.path repo}/issues/comments", options)' in lines
    assert "      alias :list_issue_comments :issue_comments" in lines


def test_render_unsupported_verb():
    route, named = build(
        "/repos/:owner/:repo/issues/:number/lock",
        [param("owner"), param("repo"), param("number", "integer")],
        verb="DELETE",
    )
    assert render_endpoint(route, named) is None
