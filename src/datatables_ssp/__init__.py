# datatables_ssp/__init__.py
from .core import RequestDecoder, ResponseEncoder, encode_response
from .dependencies import get_sent_parameters
from .enum import Direction, ParameterKind
from .exceptions import DataTablesError, RequestDecodeError, SerializationError
from .grammar import ParsedKey, classify, find_index
from .schema import (
    DataTablesColumn,
    DataTablesOrder,
    DataTablesRequest,
    DataTablesSearch,
    OrderColumn,
    ReturnData,
    SentParameters,
)

__version__ = "0.1.0"

__all__ = [
    "RequestDecoder",
    "ResponseEncoder",
    "encode_response",
    "get_sent_parameters",
    "Direction",
    "ParameterKind",
    "DataTablesError",
    "RequestDecodeError",
    "SerializationError",
    "ParsedKey",
    "classify",
    "find_index",
    "DataTablesColumn",
    "DataTablesOrder",
    "DataTablesRequest",
    "DataTablesSearch",
    "OrderColumn",
    "ReturnData",
    "SentParameters",
]
