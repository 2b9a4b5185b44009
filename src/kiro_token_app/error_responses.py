import traceback
from typing import Any, Optional

from fastapi.responses import JSONResponse

from .security_config import expose_error_details

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=NO_STORE_HEADERS)


def error_response(
    *,
    status_code: int,
    message: str,
    exc: Optional[BaseException] = None,
) -> JSONResponse:
    payload = {"error": message}
    if exc is not None and expose_error_details():
        payload["details"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return json_response(payload, status_code=status_code)
