"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    BadRequestError,
    ConfigurationError,
    NotFoundError,
    ProxyError,
    ServiceError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "BadRequestError",
    "ConfigurationError",
    "NotFoundError",
    "ProxyError",
    "ServiceError",
    "UpstreamError",
    "ValidationError",
]
