# datatables_ssp/schema.py
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .enum import Direction
from .utils import to_bool, to_direction, to_int, to_str


def _mapping_or_empty(value: Any) -> Any:
    if isinstance(value, (dict, BaseModel)):
        return value
    return {}


class DataTablesSearch(BaseModel):
    value: Optional[str] = None
    regex: Optional[bool] = None

    @field_validator("value", mode="before")
    @classmethod
    def _lenient_str(cls, value):
        return to_str(value)

    @field_validator("regex", mode="before")
    @classmethod
    def _lenient_bool(cls, value):
        return to_bool(value)


class DataTablesColumn(BaseModel):
    data: Optional[str] = None
    name: Optional[str] = None
    searchable: Optional[bool] = None
    orderable: Optional[bool] = None
    search: DataTablesSearch = Field(default_factory=DataTablesSearch)

    @field_validator("data", "name", mode="before")
    @classmethod
    def _lenient_str(cls, value):
        return to_str(value)

    @field_validator("searchable", "orderable", mode="before")
    @classmethod
    def _lenient_bool(cls, value):
        return to_bool(value)

    @field_validator("search", mode="before")
    @classmethod
    def _lenient_search(cls, value):
        return _mapping_or_empty(value)


class DataTablesOrder(BaseModel):
    column: Optional[int] = None
    dir: Direction = Direction.ASC

    @field_validator("column", mode="before")
    @classmethod
    def _lenient_int(cls, value):
        return to_int(value)

    @field_validator("dir", mode="before")
    @classmethod
    def _lenient_direction(cls, value):
        return to_direction(value)


class DataTablesRequest(BaseModel):
    """JSON body the widget posts when ``ajax.contentType`` is JSON."""

    draw: Optional[int] = None
    start: Optional[int] = None
    length: Optional[int] = None
    search: DataTablesSearch = Field(default_factory=DataTablesSearch)
    order: List[DataTablesOrder] = Field(default_factory=list)
    columns: List[DataTablesColumn] = Field(default_factory=list)

    @field_validator("draw", "start", "length", mode="before")
    @classmethod
    def _lenient_int(cls, value):
        return to_int(value)

    @field_validator("search", mode="before")
    @classmethod
    def _lenient_search(cls, value):
        return _mapping_or_empty(value)

    @field_validator("order", "columns", mode="before")
    @classmethod
    def _lenient_list(cls, value):
        # Keep positions: the list index is the clause / column index.
        if not isinstance(value, (list, tuple)):
            return []
        return [_mapping_or_empty(item) for item in value]


class OrderColumn(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: int
    dir: Direction = Direction.ASC


_INDEXED_FIELDS = (
    "order_direction",
    "columns_data",
    "columns_name",
    "columns_searchable",
    "columns_orderable",
    "columns_search_value",
    "columns_search_regex",
)


class SentParameters(BaseModel):
    """
    Decoded server-side processing request.

    ``draw`` must be re-validated as an integer before it is echoed back to
    the browser. ``length == -1`` asks for every row. Per-column maps are
    sparse and keyed by column index; a column may appear in some maps and
    not in others.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    draw: int = 0
    start: int = 0
    length: int = 0
    search_value: Optional[str] = None
    search_regex: bool = False
    order_columns: Tuple[OrderColumn, ...] = ()
    order_direction: Dict[int, Direction] = Field(default_factory=dict)
    columns_data: Dict[int, str] = Field(default_factory=dict)
    columns_name: Dict[int, str] = Field(default_factory=dict)
    columns_searchable: Dict[int, bool] = Field(default_factory=dict)
    columns_orderable: Dict[int, bool] = Field(default_factory=dict)
    columns_search_value: Dict[int, str] = Field(default_factory=dict)
    columns_search_regex: Dict[int, bool] = Field(default_factory=dict)

    @field_validator(*_INDEXED_FIELDS, mode="after")
    @classmethod
    def _read_only(cls, value):
        # frozen=True only blocks reassignment; the maps must not change either.
        return MappingProxyType(dict(value))

    @field_serializer(*_INDEXED_FIELDS)
    def _plain_dict(self, value):
        return dict(value)

    @property
    def is_all_rows(self) -> bool:
        return self.length == -1

    @property
    def column_indices(self) -> List[int]:
        indices = set()
        for mapping in (
            self.columns_data,
            self.columns_name,
            self.columns_searchable,
            self.columns_orderable,
            self.columns_search_value,
            self.columns_search_regex,
        ):
            indices.update(mapping)
        return sorted(indices)

    def column(self, index: int) -> DataTablesColumn:
        """Collect everything known about one column into a single view."""
        return DataTablesColumn(
            data=self.columns_data.get(index),
            name=self.columns_name.get(index),
            searchable=self.columns_searchable.get(index),
            orderable=self.columns_orderable.get(index),
            search=DataTablesSearch(
                value=self.columns_search_value.get(index),
                regex=self.columns_search_regex.get(index),
            ),
        )


class ReturnData(BaseModel):
    """
    Response to a server-side processing request.

    ``draw`` must be copied from the request being answered. ``error`` is
    left out of the payload entirely when it is None.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    draw: int
    records_total: int = Field(alias="recordsTotal", ge=0)
    records_filtered: int = Field(alias="recordsFiltered", ge=0)
    rows: Tuple[Tuple[str, ...], ...] = Field(default=(), alias="data")
    error: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        exclude = {"error"} if self.error is None else None
        return self.model_dump(by_alias=True, exclude=exclude)
