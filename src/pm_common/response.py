"""Response envelope for the read gateway.

`code` is 0 on success or the AppError code (see pm_common.errors ranges);
`data` is null on error. `request_id` is overwritten with the id the
request-log middleware put on request.state.
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field

from src.pm_common.datetime_utils import utc_now


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(code=0, message="success", data=data)


def error_response(code: int, message: str) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None)
