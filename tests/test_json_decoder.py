"""Tests for decoding the JSON request shape."""

import json

import pytest

from datatables_ssp import Direction, OrderColumn, RequestDecodeError, RequestDecoder

PAYLOAD = {
    "draw": 4,
    "start": 10,
    "length": -1,
    "search": {"value": "ann", "regex": False},
    "order": [{"column": 2, "dir": "desc"}, {"column": 0, "dir": "asc"}],
    "columns": [
        {"data": "id", "name": "", "searchable": False, "orderable": True, "search": {"value": "", "regex": False}},
        {"data": "name", "name": "name", "searchable": True, "orderable": True, "search": {"value": "a", "regex": True}},
        {"data": "email", "name": "email", "searchable": True, "orderable": False},
    ],
}


@pytest.fixture
def decoder():
    return RequestDecoder()


class TestDecodeJson:
    def test_scalars(self, decoder):
        sent = decoder.decode_json(json.dumps(PAYLOAD))
        assert (sent.draw, sent.start, sent.length) == (4, 10, -1)
        assert sent.search_value == "ann"
        assert sent.search_regex is False

    def test_columns_keyed_by_position(self, decoder):
        sent = decoder.decode_json(json.dumps(PAYLOAD))
        assert sent.columns_data == {0: "id", 1: "name", 2: "email"}
        assert sent.columns_searchable == {0: False, 1: True, 2: True}
        assert sent.columns_orderable == {0: True, 1: True, 2: False}
        assert sent.columns_search_value == {0: "", 1: "a"}
        assert sent.columns_search_regex == {0: False, 1: True}

    def test_order_clauses(self, decoder):
        sent = decoder.decode_json(json.dumps(PAYLOAD))
        assert sent.order_columns == (
            OrderColumn(column=2, dir=Direction.DESC),
            OrderColumn(column=0, dir=Direction.ASC),
        )

    def test_bytes_body(self, decoder):
        assert decoder.decode_json(json.dumps(PAYLOAD).encode("utf-8")).draw == 4

    def test_same_model_as_form_parameters(self, decoder):
        from_json = decoder.decode_payload(
            {"draw": 2, "columns": [{"data": "id"}], "order": [{"column": 0, "dir": "desc"}]}
        )
        from_form = decoder.decode(
            {"draw": ["2"], "columns[0][data]": ["id"], "order[0][column]": ["0"], "order[0][dir]": ["desc"]}
        )
        assert from_json == from_form


class TestLenientFields:
    def test_string_numbers_and_flags(self, decoder):
        sent = decoder.decode_payload(
            {"draw": "7", "start": "x", "columns": [{"searchable": "TRUE", "orderable": "no"}]}
        )
        assert sent.draw == 7
        assert sent.start == 0
        assert sent.columns_searchable == {0: True}
        assert sent.columns_orderable == {0: False}

    def test_malformed_nested_values(self, decoder):
        sent = decoder.decode_payload(
            {
                "search": "ann",
                "order": [{"column": "first", "dir": "desc"}, "junk"],
                "columns": ["junk", {"data": {"_": "name"}, "name": "name", "search": 5}],
            }
        )
        assert sent.search_value is None
        assert sent.order_columns == ()
        assert sent.order_direction == {0: Direction.DESC, 1: Direction.ASC}
        assert sent.columns_data == {}
        assert sent.columns_name == {1: "name"}

    def test_numeric_data_source(self, decoder):
        sent = decoder.decode_payload({"columns": [{"data": 0}, {"data": 1}]})
        assert sent.columns_data == {0: "0", 1: "1"}


class TestInvalidDocuments:
    @pytest.mark.parametrize("text", ["", "{", "not json"])
    def test_not_json(self, decoder, text):
        with pytest.raises(RequestDecodeError):
            decoder.decode_json(text)

    @pytest.mark.parametrize("text", ["[]", "3", '"draw"', "null"])
    def test_not_an_object(self, decoder, text):
        with pytest.raises(RequestDecodeError):
            decoder.decode_json(text)
