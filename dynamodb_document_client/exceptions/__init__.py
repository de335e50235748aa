# Base exception class
from .base import DocumentClientError

from .domain_exceptions import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    InvalidArgumentError,
    ItemNotFoundError,
    RequestError,
)

__all__ = [
    # Base exception
    "DocumentClientError",

    # Domain exceptions (alphabetically ordered)
    "ConfigurationError",
    "DecodeError",
    "EncodeError",
    "InvalidArgumentError",
    "ItemNotFoundError",
    "RequestError",
]
