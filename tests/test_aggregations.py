"""Tests for esclient.response.aggregations covering bucket traversal.

Run with coverage:
    pytest tests/test_aggregations.py --maxfail=1 -v --cov=esclient.response.aggregations --cov-report=term-missing
"""

import pytest

from esclient.errors import JsonTypeError
from esclient.response.aggregations import Aggregation, Bucket


def _user_terms() -> Aggregation:
    return Aggregation({
        "doc_count_error_upper_bound": 0.0,
        "buckets": [
            {"key": "bar", "doc_count": 1.0, "age": {"count": 1.0, "sum": 30.0}},
            {"key": "foo", "doc_count": 2.0, "age": {"count": 1.0, "sum": 25.0}},
        ],
    })


def test_buckets_in_server_order():
    buckets = _user_terms().buckets()
    assert [bucket.key() for bucket in buckets] == ["bar", "foo"]
    assert all(isinstance(bucket, Bucket) for bucket in buckets)
    assert buckets[1].doc_count() == 2


def test_missing_buckets_is_empty_not_an_error():
    assert Aggregation({"count": 2.0, "sum": 55.0}).buckets() == []
    assert Aggregation().buckets() == []


def test_nested_aggregation_lookup():
    bucket = Bucket({"key": "foo", "doc_count": 3, "age": {"count": 1, "sum": 25.0}})
    assert bucket.key() == "foo"
    assert bucket.aggregation("age")["sum"] == 25.0
    assert bucket.doc_count() == 3


def test_absent_nested_aggregation_chains_safely():
    bucket = Bucket({"key": 1.0, "doc_count": 1.0})
    assert bucket.aggregation("missing") == {}
    assert bucket.aggregation("missing").buckets() == []


def test_date_histogram_key_as_string():
    bucket = Bucket({"key": 1420070400000.0, "key_as_string": "2015-01-01", "doc_count": 4.0})
    assert bucket.key() == 1420070400000.0
    assert bucket.key_as_string() == "2015-01-01"


def test_malformed_input_fails_at_point_of_use():
    with pytest.raises(KeyError):
        Bucket({"key": "x"}).doc_count()
    with pytest.raises(JsonTypeError):
        Aggregation({"buckets": "nope"}).buckets()
    with pytest.raises(JsonTypeError):
        Aggregation({"sum": "n/a"}).value("sum").as_float()
    assert Aggregation({"sum": 25.0}).value("sum").as_float() == 25.0


def test_single_bucket_aggregation_chains_into_sub_aggregations():
    filtered = Aggregation({
        "doc_count": 3.0,
        "users": {"buckets": [{"key": "foo", "doc_count": 3.0}]},
        "age": {"value": 27.0},
    })
    assert [bucket.key() for bucket in filtered.aggregation("users").buckets()] == ["foo"]
    assert filtered.aggregation("age").value("value").as_float() == 27.0
    assert filtered.aggregation("missing").aggregation("deeper") == {}
