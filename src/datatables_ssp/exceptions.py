class DataTablesError(Exception):
    """Base class for errors raised by datatables_ssp."""


class RequestDecodeError(DataTablesError):
    """The JSON entry point was handed something that is not a JSON object."""


class SerializationError(DataTablesError):
    """A ReturnData value could not be encoded as UTF-8 JSON."""
