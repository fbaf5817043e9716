"""Tests for esclient.request.bulk covering the newline-delimited bulk body.

Run with coverage:
    pytest tests/test_bulk.py --maxfail=1 -v --cov=esclient.request.bulk --cov-report=term-missing
"""

import json
from dataclasses import dataclass

import pytest

from esclient.errors import EncodingError
from esclient.request.bulk import encode_bulk, field_payload
from esclient.request.operation import (
    SERVER_ASSIGNED,
    BulkCommand,
    DocumentOperation,
    ExplicitId,
)


@dataclass
class Tweet:
    user: str
    message: str


@dataclass
class Empty:
    pass


def _lines(payload: bytes):
    return payload.decode("utf-8").split("\n")


def test_empty_operation_list_is_a_single_empty_line():
    payload = encode_bulk([])
    assert payload == b""
    assert _lines(payload) == [""]


def test_index_operations_produce_action_and_source_lines():
    docs = [
        DocumentOperation(index="tweets", type="tweet", id=ExplicitId("123"), fields={"user": "foo"}),
        DocumentOperation(index="tweets", type="tweet", fields={"user": "bar"}),
        DocumentOperation(index="tweets", fields=Tweet("baz", "hi")),
    ]
    lines = _lines(encode_bulk(docs))
    assert len(lines) == 2 * len(docs) + 1
    assert lines[-1] == ""
    assert json.loads(lines[0]) == {"index": {"_index": "tweets", "_type": "tweet", "_id": "123"}}
    assert json.loads(lines[1]) == {"user": "foo"}
    assert json.loads(lines[2]) == {"index": {"_index": "tweets", "_type": "tweet"}}
    assert json.loads(lines[5]) == {"user": "baz", "message": "hi"}


def test_delete_and_empty_fields_are_metadata_only():
    docs = [
        DocumentOperation(index="t", id=ExplicitId("1"), command=BulkCommand.DELETE, fields={"x": 1}),
        DocumentOperation(index="t", id=ExplicitId("2"), fields={}),
        DocumentOperation(index="t", id=ExplicitId("3"), fields=Empty()),
        DocumentOperation(index="t", id=ExplicitId("4")),
    ]
    lines = _lines(encode_bulk(docs))
    assert lines == [
        '{"delete":{"_index":"t","_id":"1"}}',
        '{"index":{"_index":"t","_id":"2"}}',
        '{"index":{"_index":"t","_id":"3"}}',
        '{"index":{"_index":"t","_id":"4"}}',
        "",
    ]


def test_server_assigned_index_and_id_are_omitted():
    doc = DocumentOperation(index=None, id=SERVER_ASSIGNED, fields={"a": 1})
    lines = _lines(encode_bulk([doc]))
    assert json.loads(lines[0]) == {"index": {}}


def test_non_ascii_is_kept_verbatim():
    doc = DocumentOperation(index="t", fields={"name": "café"})
    assert "café".encode("utf-8") in encode_bulk([doc])


@pytest.mark.parametrize("fields", ["test", 42, ["a", "b"], Tweet])
def test_scalar_fields_are_rejected_before_dispatch(fields):
    with pytest.raises(EncodingError):
        encode_bulk([DocumentOperation(index="t", fields=fields)])


def test_non_string_keys_and_unserializable_values_are_rejected():
    with pytest.raises(EncodingError):
        field_payload({1: "x"})
    with pytest.raises(EncodingError):
        encode_bulk([DocumentOperation(index="t", fields={"when": object()})])
    with pytest.raises(EncodingError):
        encode_bulk([DocumentOperation(index="t", fields={"score": float("nan")})])


def test_unknown_command_is_an_encoding_error():
    with pytest.raises(EncodingError):
        encode_bulk([DocumentOperation(index="t", command="upsert", fields={"a": 1})])
