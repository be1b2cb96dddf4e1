"""Translate inventory service errors into HTTP errors."""

from fastapi import HTTPException
from starlette import status

from services.errors import ConflictError, NotFoundError, ValidationError


def validation_http_error(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=[{"field": e.field, "constraint": e.constraint}],
    )


def not_found_http_error(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def conflict_http_error(e: ConflictError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
