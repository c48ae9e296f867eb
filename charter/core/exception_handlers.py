"""
Translate domain exceptions into JSON error responses.

Body shape: ``{"detail": <one message>, "error_type": ..., "details": {...}}``.
``detail`` is in the caller's language (``Accept-Language``, Arabic or English).
Database driver text goes to the log only.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from charter.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    BackendError,
    BusinessRuleViolationError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    FieldValidationError,
    ValidationError,
)
from charter.core.i18n import MESSAGES, message, normalize_language

logger = logging.getLogger(__name__)

# Substring of the driver message -> message key the admin is told
INTEGRITY_MESSAGES = (
    ("unique", "record_exists"),
    ("foreign key", "reference_missing"),
    ("not null", "required_missing"),
)


def request_language(request: Request) -> str:
    return normalize_language(request.headers.get("accept-language"))


def create_error_response(
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    error_type: Optional[str] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"detail": message}
    if error_type:
        content["error_type"] = error_type
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def localized_response(
    request: Request,
    status_code: int,
    key: str,
    error_type: str,
    details: Optional[Dict[str, Any]] = None,
    **params,
) -> JSONResponse:
    return create_error_response(
        status_code, message(key, request_language(request), **params), details, error_type
    )


async def entity_not_found_handler(
    request: Request, exc: EntityNotFoundError
) -> JSONResponse:
    logger.info("%s %s not found (%s)", exc.entity_name, exc.entity_id, request.url.path)
    return localized_response(
        request, status.HTTP_404_NOT_FOUND, "not_found", "entity_not_found", exc.details
    )


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    logger.info("Rejected token on %s: %s", request.url.path, exc.message)
    response = localized_response(
        request, status.HTTP_401_UNAUTHORIZED, "not_authenticated", "not_authenticated"
    )
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


async def access_denied_handler(
    request: Request, exc: AccessDeniedError
) -> JSONResponse:
    logger.warning("Access denied on %s: %s", request.url.path, exc.message)
    return localized_response(
        request, status.HTTP_403_FORBIDDEN, "access_denied", "access_denied", exc.details
    )


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """
    400 for rejected input.

    Booking forms raise ``FieldValidationError`` whose message and per-field
    errors are already localized; ``details.field_errors`` carries them.
    """
    if isinstance(exc, FieldValidationError):
        logger.info("Booking form rejected, fields: %s", ", ".join(exc.field_errors))
        return create_error_response(
            status.HTTP_400_BAD_REQUEST, exc.message, exc.details, "validation_error"
        )
    logger.warning("Validation error on %s: %s", exc.field, exc.message)
    return localized_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        exc.key,
        "validation_error",
        exc.details,
        **exc.params,
    )


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning("Conflict: %s", exc.message)
    return localized_response(
        request,
        status.HTTP_409_CONFLICT,
        exc.key,
        "conflict_error",
        exc.details,
        **exc.params,
    )


async def business_rule_violation_handler(
    request: Request, exc: BusinessRuleViolationError
) -> JSONResponse:
    logger.warning("Business rule %s violated: %s", exc.rule_name, exc.message)
    if exc.rule_name in MESSAGES:
        return localized_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            exc.rule_name,
            "business_rule_violation",
            exc.details,
        )
    return create_error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        exc.message,
        exc.details,
        "business_rule_violation",
    )


async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
    """503 when trying again may help, 500 otherwise. No automatic retry."""
    logger.error(
        "Backend failure in %s (transient=%s): %s", exc.operation, exc.transient, exc.message
    )
    if exc.transient:
        return localized_response(
            request,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "backend_transient",
            "backend_unavailable",
            {"retryable": True},
        )
    return localized_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "backend_failed",
        "backend_error",
        {"retryable": False},
    )


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    logger.error("Unhandled %s: %s", type(exc).__name__, exc.message)
    return localized_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "backend_failed", "domain_error"
    )


async def integrity_error_handler(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    logger.error("Integrity error on %s: %s", request.url.path, exc.orig)
    driver_text = str(exc.orig).lower()
    key = next(
        (key for needle, key in INTEGRITY_MESSAGES if needle in driver_text),
        "constraint_violation",
    )
    return localized_response(request, status.HTTP_400_BAD_REQUEST, key, "integrity_error")


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning("Malformed request to %s: %s", request.url.path, exc.errors())
    return localized_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "request_invalid",
        "request_validation_error",
        {"validation_errors": exc.errors()},
    )


EXCEPTION_HANDLERS = {
    EntityNotFoundError: entity_not_found_handler,
    AuthenticationError: authentication_error_handler,
    AccessDeniedError: access_denied_handler,
    ValidationError: validation_error_handler,
    ConflictError: conflict_error_handler,
    BusinessRuleViolationError: business_rule_violation_handler,
    BackendError: backend_error_handler,
    DomainException: domain_exception_handler,
    IntegrityError: integrity_error_handler,
    RequestValidationError: request_validation_error_handler,
}
