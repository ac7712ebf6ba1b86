"""Response processing shared by every resource operation."""

from functools import lru_cache
from typing import Any, TypeVar, overload

import httpx
from pydantic import TypeAdapter, ValidationError

from podbind.errors import DecodeError, ErrorModel, StatusError, api_error_for

T = TypeVar("T")

_ERROR_ADAPTER = TypeAdapter(ErrorModel)


@lru_cache(maxsize=32)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def raise_for_error(response: httpx.Response) -> None:
    """Raise the error matching a non-success response.

    Structured engine payloads become APIError subclasses; anything else
    becomes StatusError so a failure status is never mistaken for success.
    """
    if is_success(response):
        return
    try:
        payload = _ERROR_ADAPTER.validate_json(response.content)
    except ValidationError:
        raise StatusError(response.status_code, response.text.strip()) from None
    raise api_error_for(response.status_code, payload)


@overload
def process(response: httpx.Response, target: None) -> None: ...


@overload
def process(response: httpx.Response, target: type[T]) -> T: ...


def process(response: httpx.Response, target: Any) -> Any:
    """Decode a response into ``target``, or raise its error.

    With ``target=None`` only the status is checked and the body is ignored.
    Unknown fields in the body are ignored; a success body that does not
    match ``target`` raises DecodeError.
    """
    raise_for_error(response)
    if target is None:
        return None
    try:
        return _adapter(target).validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(
            response.status_code,
            f"Unable to decode response: {exc.error_count()} validation error(s)",
        ) from exc
