"""
Resource-access primitives shared by every API resource.
"""

from .client import Client, RawResponse, Transport, decode_json
from .config import (
    ClientConfig,
    ClientParameters,
    ConfigError,
    load_client_config,
)
from .enums import ApiEnum
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    ApiError,
    AuthenticationError,
    CardError,
    DecodeError,
    EncodingError,
    ErrorType,
    IdempotencyError,
    InvalidCursor,
    InvalidRequestError,
    RateLimitError,
    RequestError,
    StripeError,
    TransportError,
)
from .pagination import PagedList
from .params import (
    Identifiable,
    Metadata,
    RangeQuery,
    Timestamp,
    encode_body,
    encode_params,
    encode_query,
)

__all__ = [
    "ApiEnum",
    "ApiError",
    "AuthenticationError",
    "CardError",
    "Client",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "DecodeError",
    "EncodingError",
    "ErrorType",
    "IdempotencyError",
    "Identifiable",
    "InvalidCursor",
    "InvalidRequestError",
    "Metadata",
    "PagedList",
    "RangeQuery",
    "RateLimitError",
    "RawResponse",
    "RequestError",
    "StripeError",
    "Timestamp",
    "Transport",
    "TransportError",
    "build_environment",
    "decode_json",
    "encode_body",
    "encode_params",
    "encode_query",
    "load_client_config",
    "load_env_file",
]
