import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from app.schemas.error_schema import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status: int, code: str, reason: str, path: str) -> JSONResponse:

    error = ErrorResponse(
        success=False,
        status=status,
        code=code,
        reason=reason,
        timeStamp=datetime.now(timezone.utc).isoformat(),
        path=path
    )

    return JSONResponse(
        status_code=status,
        content=error.model_dump()
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """라우터에서 처리되지 않은 예외 -> 500 JSON 응답"""
    logger.exception("Unhandled error on %s", request.url.path)
    return error_response(500, "SERVER_500", "서버 내부 오류가 발생했습니다.", request.url.path)
