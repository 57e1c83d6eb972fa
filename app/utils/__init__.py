"""
Utility modules for the Flow proxy.
"""
from .logging_config import setup_logging
from .errors import (
    ErrorCode,
    error_response,
    internal_error,
    describe_exception
)
from .exceptions import (
    ProxyError,
    ValidationError,
    InvalidShopDomainError,
    ShopNotConfiguredError,
    MissingFieldError,
    AuthenticationError,
    ConfigurationError,
    UpstreamError,
    SealAPIError,
    ShopifyError
)
