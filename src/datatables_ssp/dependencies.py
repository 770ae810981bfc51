# datatables_ssp/dependencies.py
from fastapi import HTTPException, Request

from .core import RequestDecoder
from .exceptions import RequestDecodeError
from .schema import SentParameters


async def get_sent_parameters(request: Request) -> SentParameters:
    """FastAPI dependency: ``params: SentParameters = Depends(get_sent_parameters)``."""
    try:
        return await RequestDecoder().decode_request(request)
    except RequestDecodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
