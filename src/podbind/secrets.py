"""Secrets API operations.

Each operation is one request/response round trip: no caching, no retries,
no pagination. Errors from the connection provider, the transport and the
response processor propagate unchanged.
"""

import logging

from podbind.connection import ConnectionProvider
from podbind.encoder import Body, encode_params
from podbind.errors import InvalidArgumentError
from podbind.logging_schema import LogEvent
from podbind.models import SecretCreateReport, SecretInfoReport
from podbind.options import CreateOptions, InspectOptions, ListOptions
from podbind.response import process

logger = logging.getLogger(__name__)

LIST_PATH = "/secrets/json"
INSPECT_PATH = "/secrets/{name}/json"
CREATE_PATH = "/secrets/create"
REMOVE_PATH = "/secrets/{name}"


def _require_name(name_or_id: str) -> None:
    if not name_or_id:
        raise InvalidArgumentError("Secret name or ID must not be empty")
    if name_or_id in (".", ".."):
        raise InvalidArgumentError(f"Secret name or ID must not be {name_or_id!r}")


class SecretsAPI:
    """Engine Secrets API operations."""

    def __init__(self, provider: ConnectionProvider) -> None:
        self._provider = provider

    async def list(self, options: ListOptions | None = None) -> list[SecretInfoReport]:
        """List secrets in server order. Empty when none exist."""
        conn = await self._provider.acquire()
        resp = await conn.issue(None, "GET", LIST_PATH, encode_params(options), None)
        secrets = process(resp, list[SecretInfoReport] | None) or []
        logger.debug(
            "Listed %d secret(s)",
            len(secrets),
            extra={"event": LogEvent.SECRET_LISTED},
        )
        return secrets

    async def inspect(
        self, name_or_id: str, options: InspectOptions | None = None
    ) -> SecretInfoReport:
        """Inspect a secret.

        Raises:
            NotFoundError: If no secret has this name or ID.
        """
        _require_name(name_or_id)
        conn = await self._provider.acquire()
        resp = await conn.issue(
            None, "GET", INSPECT_PATH, encode_params(options), None, name_or_id
        )
        secret = process(resp, SecretInfoReport)
        logger.debug(
            "Inspected secret: %s",
            name_or_id,
            extra={"event": LogEvent.SECRET_INSPECTED, "secret_id": secret.id},
        )
        return secret

    async def create(
        self, reader: Body | None, options: CreateOptions | None = None
    ) -> SecretCreateReport:
        """Create a secret from a binary stream.

        The stream is read once, end to end. A failed create is not retried;
        callers that retry must pass a fresh stream.
        """
        if reader is None:
            raise InvalidArgumentError("Secret data stream is required")
        conn = await self._provider.acquire()
        resp = await conn.issue(reader, "POST", CREATE_PATH, encode_params(options), None)
        report = process(resp, SecretCreateReport)
        logger.info(
            "Created secret: %s",
            options.name if options and options.name else report.id,
            extra={"event": LogEvent.SECRET_CREATED, "secret_id": report.id},
        )
        return report

    async def remove(self, name_or_id: str) -> None:
        """Remove a secret.

        Raises:
            NotFoundError: If no secret has this name or ID.
        """
        _require_name(name_or_id)
        conn = await self._provider.acquire()
        resp = await conn.issue(None, "DELETE", REMOVE_PATH, None, None, name_or_id)
        process(resp, None)
        logger.info(
            "Removed secret: %s",
            name_or_id,
            extra={"event": LogEvent.SECRET_REMOVED},
        )
