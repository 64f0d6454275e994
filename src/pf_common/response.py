"""Unified API response envelope.

Every endpoint, success or error, answers with:
{
    "code": 0,           // 0=success, otherwise an AppError code
    "message": "success",
    "data": { ... },     // null on error
    "timestamp": "...",
    "request_id": "..."  // same id as the request log line and X-Request-ID
}
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def request_id_of(request: Request) -> str:
    """Id assigned by RequestLogMiddleware; a fresh one outside the middleware."""
    return getattr(request.state, "request_id", None) or new_request_id()


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=new_request_id)


def success_response(
    data: Any = None, request_id: str | None = None, message: str = "success"
) -> ApiResponse:
    resp = ApiResponse(code=0, message=message, data=data)
    if request_id:
        resp.request_id = request_id
    return resp


def error_response(code: int, message: str, request_id: str | None = None) -> ApiResponse:
    resp = ApiResponse(code=code, message=message, data=None)
    if request_id:
        resp.request_id = request_id
    return resp
