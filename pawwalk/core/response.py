from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from pawwalk.core.time_utils import utc_now


def success_response(request: Request, status: int = 200, **payload) -> JSONResponse:
    """성공 응답 공통 형식 (success/status/…/timeStamp/path)"""
    response_content = {
        "success": True,
        "status": status,
        **payload,
        "timeStamp": utc_now().isoformat(),
        "path": request.url.path,
    }

    encoded = jsonable_encoder(response_content)
    return JSONResponse(status_code=status, content=encoded)
