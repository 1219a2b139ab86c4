"""Translation of domain errors into HTTP problem responses.

Every handled error is rendered as ``application/problem+json`` with a
``type``, ``title``, ``status`` and ``detail``. Errors that point at fields
also carry an ``errors`` map of field name to messages.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from brewery.shared.errors import BusinessRuleViolation, UniquenessConflict
from brewery.utils.logging import get_logger

logger = get_logger(__name__)

PROBLEM_JSON = "application/problem+json"


def problem_response(
    request: Request,
    status: int,
    kind: str,
    title: str,
    detail: str,
    errors: dict[str, list[str]] | None = None,
) -> JSONResponse:
    content = {
        "type": f"about:blank#{kind}",
        "title": title,
        "status": status,
        "detail": detail,
        "instance": request.url.path,
    }
    if errors:
        content["errors"] = errors

    logger.warning(title, status=status, kind=kind, detail=detail, path=request.url.path)
    return JSONResponse(status_code=status, content=content, media_type=PROBLEM_JSON)


def _field_messages(messages) -> dict[str, list[str]]:
    if not isinstance(messages, dict):
        return {}
    return {
        str(field): [str(message) for message in (value if isinstance(value, list | tuple) else [value])]
        for field, value in messages.items()
    }


def _detail(errors: dict[str, list[str]], fallback: str) -> str:
    flattened = [f"{field}: {message}" for field, messages in errors.items() for message in messages]
    return "; ".join(flattened) or fallback


def _exception_text(exc: Exception, fallback: str) -> str:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, str) and messages:
        return messages
    if isinstance(messages, dict) and messages:
        return "; ".join(message for values in _field_messages(messages).values() for message in values)
    return str(exc.args[0]) if exc.args else fallback


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return problem_response(request, 404, "not-found", "Not Found", _exception_text(exc, "Resource not found"))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    errors = _field_messages(exc.messages)
    return problem_response(
        request, 400, "validation-error", "Validation Error", _detail(errors, "Invalid request"), errors
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" marker from the location
        location = [str(part) for part in error["loc"][1:]] or [str(part) for part in error["loc"]]
        errors.setdefault(".".join(location), []).append(error["msg"])

    return problem_response(
        request, 400, "validation-error", "Validation Error", _detail(errors, "Invalid request"), errors
    )


async def business_rule_handler(request: Request, exc: BusinessRuleViolation) -> JSONResponse:
    return problem_response(
        request, 409, "business-rule-violation", "Business Rule Violation", exc.detail, exc.messages
    )


async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    return problem_response(
        request, 409, "optimistic-lock-conflict", "Optimistic Lock Conflict", _exception_text(exc, "Version conflict")
    )


async def uniqueness_conflict_handler(request: Request, exc: UniquenessConflict) -> JSONResponse:
    return problem_response(
        request, 409, "uniqueness-conflict", "Uniqueness Conflict", exc.detail, exc.messages
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the brewery error handlers with a FastAPI application."""
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(BusinessRuleViolation, business_rule_handler)
    app.add_exception_handler(UniquenessConflict, uniqueness_conflict_handler)
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
