"""Tests for response decoding."""

import json
from dataclasses import dataclass

import pytest

from cayley_sdk import (
    DecodingError,
    GraphNodes,
    ResponseParseError,
    SerializationError,
    decode_nodes,
)


@dataclass
class Follower:
    id: str


class TestDecodeEmpty:
    """Envelopes that decode to no rows."""

    @pytest.mark.parametrize("body", [b'{"result": null}', b'{"result": []}', b'{}'])
    def test_empty(self, body):
        nodes = decode_nodes(body)
        assert nodes.is_empty()
        assert len(nodes) == 0


class TestDecodeRows:
    """Envelopes with rows."""

    def test_single_row(self):
        nodes = decode_nodes(b'{"result":[{"id":"1"}]}')
        assert nodes.row_count() == 1
        assert nodes[0] == {"id": "1"}

    def test_order_is_preserved(self):
        body = json.dumps({"result": [{"id": "c"}, {"id": "a"}, {"id": "b"}]}).encode()
        assert decode_nodes(body).ids() == ["c", "a", "b"]

    def test_values_taken_verbatim(self):
        nodes = decode_nodes('{"result":[{"id":"B","source":"C","target":"caf\\u00e9"}]}'.encode())
        assert nodes[0] == {"id": "B", "source": "C", "target": "café"}

    def test_accepts_text(self):
        assert decode_nodes('{"result":[{"id":"1"}]}').ids() == ["1"]


class TestDecodeErrors:
    """Invalid bodies."""

    def test_invalid_utf8(self):
        with pytest.raises(ResponseParseError):
            decode_nodes(b'{"result": ["\xff"]}')

    def test_invalid_json_keeps_text_and_cause(self):
        with pytest.raises(DecodingError) as info:
            decode_nodes(b'{"result": [')
        assert info.value.text == '{"result": ['
        assert isinstance(info.value.cause, json.JSONDecodeError)

    @pytest.mark.parametrize("body", [
        b'[]',
        b'"result"',
        b'{"result": {"id": "1"}}',
        b'{"result": ["1"]}',
        b'{"result": [{"id": 1}]}',
        b'{"result": [{"id": null}]}',
        b'{"result": [{"id": {"nested": "x"}}]}',
    ])
    def test_unexpected_shape(self, body):
        with pytest.raises(DecodingError) as info:
            decode_nodes(body)
        assert info.value.text == body.decode()


class TestGraphNodes:
    """Tests for the row collection helpers."""

    def setup_method(self):
        self.nodes = GraphNodes([{"id": "B"}, {"id": "D", "tag": "x"}])

    def test_iteration(self):
        assert [row["id"] for row in self.nodes] == ["B", "D"]

    def test_column_names(self):
        assert self.nodes.column_names() == ["id", "tag"]

    def test_get_row(self):
        assert self.nodes.get_row(1) == {"id": "D", "tag": "x"}
        assert self.nodes.get_row(2) is None
        assert self.nodes.get_row(-1) is None

    def test_rows_is_a_copy(self):
        self.nodes.rows().clear()
        assert self.nodes.row_count() == 2

    def test_equality(self):
        assert GraphNodes([{"id": "B"}]) == GraphNodes([{"id": "B"}])
        assert GraphNodes() != GraphNodes([{"id": "B"}])

    def test_deserialize_rows(self):
        followers = GraphNodes([{"id": "B"}, {"id": "D"}]).deserialize_rows(Follower)
        assert followers == [Follower("B"), Follower("D")]

    def test_deserialize_unknown_column_fails(self):
        with pytest.raises(SerializationError):
            self.nodes.deserialize_rows(Follower)

    def test_first(self):
        assert GraphNodes([{"id": "B"}, {"id": "D"}]).first(Follower) == Follower("B")

    def test_first_on_empty(self):
        with pytest.raises(SerializationError):
            GraphNodes().first(Follower)
