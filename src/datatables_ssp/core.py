import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from fastapi import Request, Response
from pydantic import ValidationError

from .enum import Direction, ParameterKind
from .exceptions import RequestDecodeError, SerializationError
from .grammar import classify
from .schema import DataTablesRequest, OrderColumn, ReturnData, SentParameters
from .utils import first_value, to_bool, to_direction, to_int

logger = logging.getLogger(__name__)

ParameterMap = Mapping[str, Union[str, Sequence[str]]]

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

_SCALAR_FIELDS = {
    ParameterKind.START: "start",
    ParameterKind.LENGTH: "length",
    ParameterKind.DRAW: "draw",
}

_COLUMN_STRING_FIELDS = {
    ParameterKind.COLUMN_SEARCH_VALUE: "columns_search_value",
    ParameterKind.COLUMN_DATA: "columns_data",
    ParameterKind.COLUMN_NAME: "columns_name",
}

_COLUMN_BOOL_FIELDS = {
    ParameterKind.COLUMN_SEARCH_REGEX: "columns_search_regex",
    ParameterKind.COLUMN_ORDERABLE: "columns_orderable",
    ParameterKind.COLUMN_SEARCHABLE: "columns_searchable",
}


def _order_columns(
    clause_columns: Dict[int, int], clause_directions: Dict[int, Direction]
) -> tuple:
    # Declaration order is the clause index, not the order keys arrived in.
    return tuple(
        OrderColumn(column=clause_columns[clause], dir=clause_directions.get(clause, Direction.ASC))
        for clause in sorted(clause_columns)
    )


class RequestDecoder:
    """
    Builds SentParameters from the widget's request.

    Decoding never fails on bad field values: unparseable integers and unknown
    keys leave the corresponding field at its default.
    """

    def decode(self, params: ParameterMap) -> SentParameters:
        """Decode URL-encoded parameters (name -> list of values)."""
        fields: Dict[str, Any] = {}
        columns: Dict[str, Dict[int, Any]] = {
            name: {} for name in (*_COLUMN_STRING_FIELDS.values(), *_COLUMN_BOOL_FIELDS.values())
        }
        clause_columns: Dict[int, int] = {}
        clause_directions: Dict[int, Direction] = {}

        for key, values in params.items():
            parsed = classify(key)
            if parsed is None:
                continue
            kind, index = parsed
            value = first_value(values)

            if kind in _SCALAR_FIELDS:
                number = to_int(value)
                if number is not None:
                    fields[_SCALAR_FIELDS[kind]] = number
            elif kind == ParameterKind.SEARCH_VALUE:
                if value is not None:
                    fields["search_value"] = value
            elif kind == ParameterKind.SEARCH_REGEX:
                flag = to_bool(value)
                if flag is not None:
                    fields["search_regex"] = flag
            elif kind in _COLUMN_STRING_FIELDS:
                if value is not None:
                    columns[_COLUMN_STRING_FIELDS[kind]][index] = value
            elif kind in _COLUMN_BOOL_FIELDS:
                flag = to_bool(value)
                if flag is not None:
                    columns[_COLUMN_BOOL_FIELDS[kind]][index] = flag
            elif kind == ParameterKind.ORDER_DIR:
                clause_directions[index] = to_direction(value)
            elif kind == ParameterKind.ORDER_COLUMN:
                column = to_int(value)
                if column is not None:
                    clause_columns[index] = column

        sent = SentParameters(
            **fields,
            **columns,
            order_direction=clause_directions,
            order_columns=_order_columns(clause_columns, clause_directions),
        )
        logger.debug(
            "Decoded parameters draw=%s start=%s length=%s", sent.draw, sent.start, sent.length
        )
        return sent

    def decode_payload(self, payload: Mapping[str, Any]) -> SentParameters:
        """Decode an already-parsed JSON request object."""
        try:
            request_data = DataTablesRequest.model_validate(payload)
        except ValidationError as exc:
            raise RequestDecodeError(f"Invalid DataTables request payload: {exc}") from exc

        fields: Dict[str, Any] = {}
        for name in ("draw", "start", "length"):
            number = getattr(request_data, name)
            if number is not None:
                fields[name] = number
        if request_data.search.value is not None:
            fields["search_value"] = request_data.search.value
        if request_data.search.regex is not None:
            fields["search_regex"] = request_data.search.regex

        clause_columns: Dict[int, int] = {}
        clause_directions: Dict[int, Direction] = {}
        for position, order in enumerate(request_data.order):
            clause_directions[position] = order.dir
            if order.column is not None:
                clause_columns[position] = order.column

        columns: Dict[str, Dict[int, Any]] = {
            "columns_data": {},
            "columns_name": {},
            "columns_searchable": {},
            "columns_orderable": {},
            "columns_search_value": {},
            "columns_search_regex": {},
        }
        for position, col in enumerate(request_data.columns):
            for name, value in (
                ("columns_data", col.data),
                ("columns_name", col.name),
                ("columns_searchable", col.searchable),
                ("columns_orderable", col.orderable),
                ("columns_search_value", col.search.value),
                ("columns_search_regex", col.search.regex),
            ):
                if value is not None:
                    columns[name][position] = value

        return SentParameters(
            **fields,
            **columns,
            order_direction=clause_directions,
            order_columns=_order_columns(clause_columns, clause_directions),
        )

    def decode_json(self, text: Union[str, bytes]) -> SentParameters:
        """Decode a JSON request document."""
        try:
            payload = json.loads(text)
        except ValueError as exc:
            raise RequestDecodeError(f"Request body is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise RequestDecodeError("Request body must be a JSON object")
        return self.decode_payload(payload)

    async def decode_request(self, request: Request) -> SentParameters:
        """
        Decode a FastAPI/Starlette request. JSON bodies go through
        ``decode_json``; form bodies are merged over the query string.
        """
        content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

        if content_type == JSON_CONTENT_TYPE:
            body = await request.body()
            if body:
                return self.decode_json(body)

        params: Dict[str, List[str]] = {
            key: request.query_params.getlist(key) for key in request.query_params.keys()
        }
        if content_type in FORM_CONTENT_TYPES:
            form = await request.form()
            for key in form.keys():
                # Uploaded files carry no protocol parameters.
                values = [value for value in form.getlist(key) if isinstance(value, str)]
                if values:
                    params[key] = values
        return self.decode(params)


class ResponseEncoder:
    """Serialises ReturnData to the widget's JSON payload."""

    def encode(self, data: ReturnData) -> bytes:
        try:
            return json.dumps(
                data.to_payload(), ensure_ascii=False, separators=(",", ":")
            ).encode("utf-8")
        except (TypeError, ValueError) as exc:
            logger.error("Could not serialise response for draw %s: %s", data.draw, exc)
            raise SerializationError(f"Could not serialise DataTables response: {exc}") from exc

    def encode_text(self, data: ReturnData) -> str:
        return self.encode(data).decode("utf-8")

    def response(self, data: ReturnData, status_code: int = 200) -> Response:
        return Response(
            content=self.encode(data), status_code=status_code, media_type=JSON_CONTENT_TYPE
        )


def encode_response(
    draw: int,
    records_total: int,
    records_filtered: int,
    rows: Sequence[Sequence[str]],
    error: Optional[str] = None,
) -> bytes:
    """Build a ReturnData from its fields and return the encoded payload."""
    data = ReturnData(
        draw=draw,
        records_total=records_total,
        records_filtered=records_filtered,
        rows=rows,
        error=error,
    )
    return ResponseEncoder().encode(data)
