"""Request encoding: path templates, query parameters and streamed bodies."""

import asyncio
import re
from collections.abc import AsyncIterable, AsyncIterator, Mapping
from dataclasses import dataclass, field
from typing import BinaryIO, Protocol, TypeAlias
from urllib.parse import quote

_SLOT = re.compile(r"\{[^{}]*\}")
_DOT_SEGMENTS = frozenset({".", ".."})


class SupportsParams(Protocol):
    """Anything that encodes itself into query parameters."""

    def to_params(self) -> Mapping[str, str]: ...


Body: TypeAlias = BinaryIO | AsyncIterable[bytes]


@dataclass(frozen=True)
class Request:
    """One fully encoded request, owned by the call that built it."""

    method: str
    path_template: str
    path: str
    params: dict[str, str] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: Body | None = None


def render_path(template: str, *args: str) -> str:
    """Substitute path arguments into template slots, in order.

    Each argument is percent-encoded as a single path segment, so names
    containing ``/``, ``?`` or ``#`` cannot change routing. ``.`` and ``..``
    survive percent-encoding and would be collapsed by URL normalization,
    so they are refused.

    Raises:
        ValueError: If the number of arguments does not match the slots, or
            an argument is a dot segment.
    """
    slots = _SLOT.findall(template)
    if len(slots) != len(args):
        raise ValueError(
            f"Path template {template!r} expects {len(slots)} argument(s), got {len(args)}"
        )
    for arg in args:
        if str(arg) in _DOT_SEGMENTS:
            raise ValueError(f"Path argument {arg!r} is a dot segment")
    parts = iter(quote(str(arg), safe="") for arg in args)
    return _SLOT.sub(lambda _: next(parts), template)


def encode_params(options: SupportsParams | None) -> dict[str, str] | None:
    """Encode options into query parameters.

    Returns None when there is nothing to send, so no query string is
    attached at all.
    """
    if options is None:
        return None
    params = dict(options.to_params())
    return params or None


def build_request(
    method: str,
    path_template: str,
    *path_args: str,
    params: Mapping[str, str] | None = None,
    body: Body | None = None,
    headers: Mapping[str, str] | None = None,
) -> Request:
    """Build a Request. The body is passed through untouched and unread."""
    return Request(
        method=method,
        path_template=path_template,
        path=render_path(path_template, *path_args),
        params=dict(params) if params else None,
        headers=dict(headers or {}),
        body=body,
    )


async def iter_body(body: Body, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield the body chunk by chunk without materializing it.

    Blocking readers (files, pipes such as stdin) are read in a worker
    thread so a slow read does not stall the event loop.
    """
    if isinstance(body, AsyncIterable):
        async for chunk in body:
            yield chunk
        return

    while True:
        chunk = await asyncio.to_thread(body.read, chunk_size)
        if not chunk:
            break
        yield chunk
