from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from api_responses.result import Err, Ok, Result

GENERIC_SUCCESS = "Success"


def envelope(status_code: int, data: Any = None, message: str = GENERIC_SUCCESS) -> JSONResponse:
    """Every response body has the same shape: `{status, data, message}`."""
    body = {
        "status": status_code,
        "data": jsonable_encoder(data) if data is not None else {},
        "message": message,
    }
    return JSONResponse(status_code=status_code, content=body)


def respond(result: Result,
            success_status: int = status.HTTP_200_OK,
            success_message: Optional[str] = None) -> JSONResponse:
    if isinstance(result, Ok):
        return envelope(success_status, result.value, success_message or GENERIC_SUCCESS)
    return envelope(result.status_code, result.data, result.message)


def error_response(err: Err) -> JSONResponse:
    return envelope(err.status_code, err.data, err.message)
