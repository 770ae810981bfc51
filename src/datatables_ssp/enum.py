from enum import Enum


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ParameterKind(str, Enum):
    START = "start"
    LENGTH = "length"
    DRAW = "draw"
    SEARCH_VALUE = "search_value"
    SEARCH_REGEX = "search_regex"
    COLUMN_SEARCH_VALUE = "column_search_value"
    COLUMN_SEARCH_REGEX = "column_search_regex"
    COLUMN_ORDERABLE = "column_orderable"
    COLUMN_DATA = "column_data"
    COLUMN_NAME = "column_name"
    COLUMN_SEARCHABLE = "column_searchable"
    ORDER_DIR = "order_dir"
    ORDER_COLUMN = "order_column"
