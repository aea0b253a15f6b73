"""
Request pipeline for the Product API.

Interceptors run in order ahead of routing. Each one gets the request and a
continuation; it either awaits the continuation or raises an ``ApiError`` to
stop the request. Whatever is raised, from an interceptor or from the route
behind them, is handed to ``error_response``.

Validation is route-specific, so it is a FastAPI dependency rather than a
pipeline stage: only the create and update routes declare it.
"""

from __future__ import annotations

import logging
import math
import secrets
from datetime import datetime, timezone
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Iterable

from fastapi import Request
from starlette.responses import Response

from .config import Settings
from .core import ProductIn
from .errors import AuthenticationError, ValidationError, error_response

logger = logging.getLogger("product_api.requests")

Continuation = Callable[[Request], Awaitable[Response]]
Interceptor = Callable[[Request, Continuation], Awaitable[Response]]

REQUIRED_FIELDS = ("name", "description", "price", "category", "inStock")
TEXT_FIELDS = ("name", "description", "category")


class RequestPipeline:
    """Chains interceptors in front of the application and translates failures."""

    def __init__(self, interceptors: Iterable[Interceptor]):
        self.interceptors = list(interceptors)

    async def __call__(self, request: Request, call_next: Continuation) -> Response:
        try:
            return await self._run(0, call_next, request)
        except Exception as exc:
            return error_response(exc)

    async def _run(self, index: int, call_next: Continuation, request: Request) -> Response:
        if index == len(self.interceptors):
            return await call_next(request)
        proceed = partial(self._run, index + 1, call_next)
        return await self.interceptors[index](request, proceed)


async def log_request(request: Request, proceed: Continuation) -> Response:
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    logger.info("[%s] %s %s", datetime.now(timezone.utc).isoformat(), request.method, target)
    return await proceed(request)


def require_api_key(settings: Settings) -> Interceptor:
    """Build the interceptor guarding every path under ``settings.api_prefix``."""

    prefix = settings.api_prefix.rstrip("/")
    expected = settings.api_key.encode("utf-8") if settings.api_key else None

    async def authenticate(request: Request, proceed: Continuation) -> Response:
        path = request.url.path
        if path == prefix or path.startswith(prefix + "/"):
            supplied = request.headers.get(settings.api_key_header)
            # header values arrive latin-1 decoded; compare the raw bytes
            if (
                not supplied
                or expected is None
                or not secrets.compare_digest(supplied.encode("latin-1"), expected)
            ):
                raise AuthenticationError("Unauthorized: Invalid or missing API key")
        return await proceed(request)

    return authenticate


def build_pipeline(settings: Settings) -> RequestPipeline:
    return RequestPipeline([log_request, require_api_key(settings)])


def _is_number(value: Any) -> bool:
    # bool is an int subclass in Python but not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def check_product_fields(body: Any) -> ProductIn:
    """Apply the create/update field rules to a decoded JSON body."""

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    missing = [
        f for f in REQUIRED_FIELDS
        if f not in body
        or (f != "inStock" and body[f] in (None, ""))
        # zero price counts as missing; False goes on to the price check
        or (f == "price" and body[f] == 0 and body[f] is not False)
    ]
    if missing:
        raise ValidationError(
            "All fields (name, description, price, category, inStock) are required"
        )

    price = body["price"]
    if not _is_number(price) or price < 0:
        raise ValidationError("Price must be a positive number")

    if not isinstance(body["inStock"], bool):
        raise ValidationError("inStock must be a boolean")

    if not all(isinstance(body[f], str) for f in TEXT_FIELDS):
        raise ValidationError("name, description and category must be strings")

    fields: Dict[str, Any] = {f: body[f] for f in REQUIRED_FIELDS}
    return ProductIn(**fields)


async def validated_product(request: Request) -> ProductIn:
    """FastAPI dependency: the validation interceptor for create and update."""
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Request body must be a JSON object")
    return check_product_fields(body)
