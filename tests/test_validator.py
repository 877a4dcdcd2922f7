import pytest

from promptfinder.search import InvalidArgumentError, SearchConfig
from promptfinder.search.validator import clamp_limit, validate_request

CONFIG = SearchConfig()


@pytest.mark.parametrize("data", [None, {}, {"query": ""}, {"query": "   "}, {"query": None}, {"query": 3}, ["query"]])
def test_invalid_queries_rejected(data):
    with pytest.raises(InvalidArgumentError) as exc:
        validate_request(data, None, CONFIG)
    assert exc.value.message == "A non-empty search query is required."
    assert exc.value.to_dict()["status"] == "INVALID_ARGUMENT"


def test_query_is_trimmed():
    query = validate_request({"query": "  hello world \n"}, None, CONFIG)
    assert query.text == "hello world"
    assert query.limit == 20


@pytest.mark.parametrize(
    "limit, expected",
    [
        (None, 20),
        ("15", 20),
        (True, 20),
        (float("nan"), 20),
        (float("inf"), 20),
        (0, 20),
        (-10, 20),
        (0.5, 20),
        (1, 1),
        (7.9, 7),
        (100, 100),
        (101, 20),
        (10_000, 20),
    ],
)
def test_limit_clamped_or_defaulted(limit, expected):
    assert clamp_limit(limit) == expected


def test_limit_bounds_come_from_config():
    cfg = SearchConfig(default_limit=10, max_limit=50)
    assert validate_request({"query": "x"}, None, cfg).limit == 10
    assert validate_request({"query": "x", "limit": 50}, None, cfg).limit == 50
    assert validate_request({"query": "x", "limit": 75}, None, cfg).limit == 10


@pytest.mark.parametrize("requester, expected", [(None, None), ("", None), ("  ", None), ("user1", "user1")])
def test_requester_identity(requester, expected):
    query = validate_request({"query": "x"}, requester, CONFIG)
    assert query.requester_id == expected
    assert query.authenticated is (expected is not None)
