"""
Domain errors and the handlers that turn them into JSON responses.

Every error leaves the service as {"error": <code>, "message": <text>, ...}
so the storefront can tell "wait and retry" (429) apart from "fix the form"
(422) and "something broke" (500).
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class StoreError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def payload(self) -> dict:
        return {"error": self.code, "message": self.message}


class RateLimited(StoreError):
    """A recent order from the same phone number is still inside its cooldown."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(f"Please wait {retry_after} seconds before placing another order")

    def payload(self) -> dict:
        return {**super().payload(), "retry_after": self.retry_after}


class ValidationFailed(StoreError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_failed"

    def __init__(self, fields: dict[str, str]):
        self.fields = fields
        super().__init__("Some fields are invalid")

    def payload(self) -> dict:
        return {**super().payload(), "fields": self.fields}


class PersistenceFailed(StoreError):
    code = "persistence_failed"

    def __init__(self, message: str = "Something went wrong. Please try again."):
        super().__init__(message)


class NotFound(StoreError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class AuthenticationFailed(StoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_failed"

    def __init__(self, message: str = "Invalid credentials", challenge: bool = False):
        # Bearer-protected routes must answer with a WWW-Authenticate challenge.
        self.challenge = challenge
        super().__init__(message)


class TransitionDenied(StoreError):
    status_code = status.HTTP_409_CONFLICT
    code = "transition_denied"

    def __init__(self, current: str, requested: str, subject: str = "order"):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move {subject} from '{current}' to '{requested}'")


def _field_name(loc: tuple) -> str:
    # ("body", "items", 0, "quantity") -> "items.0.quantity"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.retry_after)}
    elif isinstance(exc, AuthenticationFailed) and exc.challenge:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.payload(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = {}
    for err in exc.errors():
        message = err.get("msg", "Invalid value")
        if err.get("type") == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        fields.setdefault(_field_name(tuple(err.get("loc", ()))), message)
    return await store_error_handler(request, ValidationFailed(fields))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return await store_error_handler(request, PersistenceFailed())


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
