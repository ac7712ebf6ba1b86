"""Typed async bindings for the container engine Secrets API."""

import logging as _logging

from podbind.config import ConnectionConfig, LoggingConfig, PodbindConfig, get_config
from podbind.connection import Connection, ConnectionProvider, EngineClient
from podbind.errors import (
    APIError,
    BadRequestError,
    ConflictError,
    DecodeError,
    EngineConnectionError,
    ErrorCode,
    InvalidArgumentError,
    NotFoundError,
    PodbindError,
    ServerError,
    StatusError,
)
from podbind.models import (
    SecretCreateReport,
    SecretDriverSpec,
    SecretInfoReport,
    SecretSpec,
)
from podbind.options import CreateOptions, InspectOptions, ListOptions
from podbind.result import Result, settle
from podbind.secrets import SecretsAPI

__all__ = [
    # Config
    "ConnectionConfig",
    "LoggingConfig",
    "PodbindConfig",
    "get_config",
    # Connection
    "Connection",
    "ConnectionProvider",
    "EngineClient",
    # Errors
    "APIError",
    "BadRequestError",
    "ConflictError",
    "DecodeError",
    "EngineConnectionError",
    "ErrorCode",
    "InvalidArgumentError",
    "NotFoundError",
    "PodbindError",
    "ServerError",
    "StatusError",
    # Models
    "SecretCreateReport",
    "SecretDriverSpec",
    "SecretInfoReport",
    "SecretSpec",
    # Options
    "CreateOptions",
    "InspectOptions",
    "ListOptions",
    # Operations
    "Result",
    "SecretsAPI",
    "settle",
]

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
