"""Translate service results into HTTP responses."""

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ...core.result import Result, ResultStatus
from .schemas import BaseResponse

STATUS_CODES = {
    ResultStatus.SUCCESS: status.HTTP_200_OK,
    ResultStatus.FAILURE: status.HTTP_400_BAD_REQUEST,
    ResultStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def result_response(result: Result) -> JSONResponse:
    """Render a Result as a BaseResponse with the matching status code.

    Failure payloads are kept, since validation errors ride on them.
    """
    body = BaseResponse(
        success=result.is_success,
        status=result.status,
        message=result.message,
        data=result.entity,
        error=None if result.is_success else result.message,
    )
    return JSONResponse(
        status_code=STATUS_CODES[result.status],
        content=jsonable_encoder(body),
    )
