"""Mapping of service errors onto HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from freightdesk.app.core.errors import ConflictError, NotFoundError


def http_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
