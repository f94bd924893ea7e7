"""
ServiceResult -> HTTP response mapping.

Status codes are chosen from the result kind only:
    success                 -> success_status (201 on create, 204 on delete, else 200)
    UNAUTHORIZED            -> 403 (login passes unauthorized_status=401)
    CONFLICT                -> 409 where the route allows it, else failure_status
    anything else           -> failure_status (400 on mutations, 404 on public reads)
"""

from typing import Any

from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from shared.utils.exceptions import ErrorKind
from shared.utils.result import ServiceResult


def failure_status_for(
    result: ServiceResult,
    failure_status: int = status.HTTP_400_BAD_REQUEST,
    allow_conflict: bool = False,
    unauthorized_status: int = status.HTTP_403_FORBIDDEN,
) -> int:
    """HTTP status for a failed result."""
    if result.kind is ErrorKind.UNAUTHORIZED:
        return unauthorized_status
    if result.kind is ErrorKind.CONFLICT and allow_conflict:
        return status.HTTP_409_CONFLICT
    return failure_status


def envelope_response(
    result: ServiceResult,
    success_status: int = status.HTTP_200_OK,
    failure_status: int = status.HTTP_400_BAD_REQUEST,
    allow_conflict: bool = False,
    unauthorized_status: int = status.HTTP_403_FORBIDDEN,
    message: str | None = None,
) -> Response:
    """
    Render a ServiceResult as the JSON envelope.

    Success: {"success": true, "data": ..., "message": ...}
    Failure: {"success": false, "error": "...", "kind": "..."}
    """
    if not result.success:
        return JSONResponse(
            status_code=failure_status_for(result, failure_status, allow_conflict, unauthorized_status),
            content={
                "success": False,
                "error": result.error,
                "kind": result.kind.value if result.kind else ErrorKind.INTERNAL.value,
            },
        )

    if success_status == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    body: dict[str, Any] = {"success": True, "data": jsonable_encoder(result.data)}
    if message or result.message:
        body["message"] = message or result.message
    return JSONResponse(status_code=success_status, content=body)
