import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pawwalk.core.time_utils import utc_now
from pawwalk.schemas.error_schema import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status: int, code: str, reason: str, path: str) -> JSONResponse:

    error = ErrorResponse(
        success=False,
        status=status,
        code=code,
        reason=reason,
        timeStamp=utc_now().isoformat(),
        path=path
    )

    return JSONResponse(
        status_code=status,
        content=error.model_dump()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """도메인 예외 / 요청 검증 오류를 공통 ErrorResponse 형식으로 변환"""
    # 순환 import 방지
    from pawwalk.domains.walk.exception import WalkException

    @app.exception_handler(WalkException)
    async def handle_walk_exception(request: Request, exc: WalkException):
        if exc.status >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.reason)
        return error_response(exc.status, exc.code, exc.reason, request.url.path)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "잘못된 요청입니다.")
        reason = f"요청 값이 올바르지 않습니다. ({location}: {message})" if location else message
        return error_response(400, "COMMON_400_1", reason, request.url.path)
