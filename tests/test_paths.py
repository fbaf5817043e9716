"""Tests for esclient.request.paths covering path layout and query encoding.

Run with coverage:
    pytest tests/test_paths.py --maxfail=1 -v --cov=esclient.request.paths --cov-report=term-missing
"""

from urllib.parse import urlsplit

from esclient.request.operation import SERVER_ASSIGNED, ExplicitId, Method, Operation
from esclient.request.paths import build_path, build_query_string, build_url, normalize_params


def test_build_url_layers_indices_types_id_and_api():
    op = Operation(method=Method.GET, indices=("i",), api="_search")
    assert build_url(op) == "/i/_search"

    op = Operation(method=Method.GET, indices=("a", "b"), api="_search")
    assert build_url(op) == "/a,b/_search"

    op = Operation(method=Method.GET, indices=("a", "b"), types=("c", "d"), api="_search")
    assert build_url(op) == "/a,b/c,d/_search"

    op = Operation(
        method=Method.GET,
        indices=("a", "b"),
        types=("c", "d"),
        api="_search",
        params=normalize_params({"version": "1"}),
    )
    assert build_url(op) == "/a,b/c,d/_search?version=1"


def test_bare_document_address_keeps_trailing_slash():
    op = Operation(
        method=Method.PUT,
        indices=("a", "b"),
        types=("c", "d"),
        doc_id=ExplicitId("1234"),
        params=(("version", "1"),),
    )
    assert build_url(op) == "/a,b/c,d/1234/?version=1"


def test_empty_params_leave_no_question_mark():
    for method in Method:
        op = Operation(method=method, indices=("i",), api="_stats")
        assert "?" not in build_url(op)


def test_empty_index_list_keeps_leading_empty_segment():
    assert build_path([], api="_bulk") == "//_bulk"
    assert build_path([], api="_search/scroll") == "//_search/scroll"


def test_query_string_preserves_order_and_repeated_keys():
    params = normalize_params({"size": 10, "routing": ["r1", "r2"], "pretty": True})
    assert params == (("size", "10"), ("routing", "r1"), ("routing", "r2"), ("pretty", "true"))
    assert build_query_string(params) == "size=10&routing=r1&routing=r2&pretty=true"


def test_query_string_percent_encodes_values():
    params = normalize_params([("q", "user:foo bar"), ("sort", "a&b")])
    assert build_query_string(params) == "q=user%3Afoo+bar&sort=a%26b"


def test_normalize_params_handles_none_and_empty():
    assert normalize_params(None) == ()
    assert normalize_params({}) == ()


def test_path_segments_are_percent_escaped():
    op = Operation(
        method=Method.GET,
        indices=("t",),
        types=("tweet",),
        doc_id=ExplicitId("a#b?c d"),
        params=(("fields", "user"),),
    )
    url = build_url(op)
    assert url == "/t/tweet/a%23b%3Fc%20d/?fields=user"
    assert urlsplit(url).path == "/t/tweet/a%23b%3Fc%20d/"
    assert urlsplit(url).query == "fields=user"


def test_slash_in_id_is_escaped_but_api_keeps_separators():
    assert build_path(["t"], ["tweet"], ExplicitId("a/b"), "_update") == "/t/tweet/a%2Fb/_update"
    assert build_path(["a b", "c"], api="_alias/x y") == "/a%20b,c/_alias/x%20y"
    assert build_path(["logs-2015.01.01"], api="_search/scroll") == "/logs-2015.01.01/_search/scroll"


def test_id_segment_follows_document_id_not_truthiness():
    assert build_path(["t"], ["tweet"], SERVER_ASSIGNED) == "/t/tweet/"
    assert build_path(["t"], ["tweet"], ExplicitId("")) == "/t/tweet//"
    assert build_path(["t"], ["tweet"], ExplicitId("0")) == "/t/tweet/0/"


def test_none_params_are_dropped():
    params = normalize_params({"routing": None, "size": 5, "preference": [None, "_local"]})
    assert params == (("size", "5"), ("preference", "_local"))
    assert "None" not in build_query_string(params)
