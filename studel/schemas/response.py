from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
import uuid


def _rid():
    return uuid.uuid4().hex


class SuccessResponse(BaseModel):
    """Simple success response wrapper with just data, success, and request_id"""
    success: Optional[bool] = Field(default=True)
    request_id: str = Field(default_factory=_rid)
    data: Optional[Any] = None


class ErrorDetail(BaseModel):
    code: str
    message: Any


class ErrorResponse(BaseModel):
    """Envelope produced by core.exception_handlers, declared for the API docs."""
    success: bool = False
    error: ErrorDetail
    request_id: str


def ok(payload: Any) -> SuccessResponse:
    """Wraps a schema, a list of schemas, or plain data in the success envelope."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    elif isinstance(payload, list):
        payload = [p.model_dump(mode="json") if isinstance(p, BaseModel) else p for p in payload]
    return SuccessResponse(data=payload)


ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Role or ownership does not permit the action"},
    404: {"model": ErrorResponse, "description": "Record not found"},
    409: {"model": ErrorResponse, "description": "Order changed state; refresh and retry"},
}
