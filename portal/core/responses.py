"""
Uniform response envelope helpers.

Every endpoint answers with ``{success, data?, error?, message?}``.
"""
from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

class ErrorEnvelope(BaseModel):
    """
    Error envelope, referenced by the routes for OpenAPI documentation.
    """
    success: bool = False
    error: str


def _encode(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_encode(item) for item in data]
    if isinstance(data, dict):
        return {key: _encode(value) for key, value in data.items()}
    return jsonable_encoder(data)


def success_response(data: Any, message: Optional[str] = None, status_code: int = 200) -> JSONResponse:
    """
    Build a success envelope.

    Args:
        data: Payload (pydantic models are dumped with their camelCase aliases)
        message: Optional message, omitted from the body when None
        status_code: HTTP status code

    Returns:
        JSONResponse: ``{"success": true, "data": ..., "message": ...}``
    """
    content = {"success": True, "data": _encode(data)}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def error_response(error: str, status_code: int = 400) -> JSONResponse:
    """Build an error envelope: ``{"success": false, "error": error}``."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})
