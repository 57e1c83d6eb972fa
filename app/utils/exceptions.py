"""
Custom exceptions for the Seal Flow proxy.

Each exception carries the HTTP status the Flow endpoint should answer with,
so views can raise and let the registered error handler shape the response.
"""


class ProxyError(Exception):
    """Base exception for all proxy errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "PROXY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(ProxyError):
    """Invalid input data."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"INVALID_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)


class InvalidShopDomainError(ValidationError):
    """Shop domain missing or not a *.myshopify.com domain."""

    def __init__(self, shop_domain=None):
        self.shop_domain = shop_domain
        super().__init__("Missing or invalid shopDomain", "shop_domain")


class ShopNotConfiguredError(ValidationError):
    """Well-formed shop domain with no region configured for it."""

    def __init__(self, shop_domain: str):
        self.shop_domain = shop_domain
        super().__init__(f"Shop not recognized: {shop_domain}")
        self.code = "SHOP_NOT_FOUND"


class MissingFieldError(ValidationError):
    """A required field is neither provided nor resolvable."""

    def __init__(self, field: str, message: str = None):
        super().__init__(message or f"{field} is required", field)
        self.code = "MISSING_FIELD"


class AuthenticationError(ProxyError):
    """Shared secret did not match."""

    status_code = 401

    def __init__(self, message: str = "Bad X-Flow-Secret"):
        super().__init__(message, "INVALID_SIGNATURE")


class ConfigurationError(ProxyError):
    """Application configuration error."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


class UpstreamError(ProxyError):
    """A remote API answered with an error or could not be reached."""

    def __init__(self, message: str, status: int = None, body: str = None,
                 code: str = "EXTERNAL_SERVICE_ERROR", original_error: Exception = None):
        self.status = status
        self.body = body
        self.original_error = original_error
        super().__init__(message, code)


class SealAPIError(UpstreamError):
    """Error communicating with the Seal Subscriptions API."""

    def __init__(self, message: str, status: int = None, body: str = None,
                 original_error: Exception = None):
        super().__init__(message, status, body, "SEAL_ERROR", original_error)


class ShopifyError(UpstreamError):
    """Error communicating with the Shopify Admin API."""

    def __init__(self, message: str, status: int = None, body: str = None,
                 original_error: Exception = None):
        super().__init__(message, status, body, "SHOPIFY_ERROR", original_error)
