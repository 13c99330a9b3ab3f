"""
Error kinds raised by services and dependencies.

Every kind is an HTTPException so routes can let them propagate untouched;
main.py renders them as {"error": detail}.
"""

import logging
from fastapi import HTTPException, status
from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes surfaced by PostgREST
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidArgumentError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


def raise_for_store_error(exc: Exception, entity: str = "Record"):
    """Translate constraint violations reported by the store; re-raise anything else."""
    if isinstance(exc, APIError):
        if exc.code == UNIQUE_VIOLATION:
            raise ConflictError(f"{entity} already exists: {exc.details or exc.message}") from exc
        if exc.code == FOREIGN_KEY_VIOLATION:
            raise ConflictError(f"{entity} references or is referenced by another record: {exc.details or exc.message}") from exc
        if exc.code == NOT_NULL_VIOLATION:
            raise ValidationError(f"{entity} is missing a required field: {exc.message}") from exc
        logger.error(f"Unhandled store error ({exc.code}): {exc.message}")
    raise exc
