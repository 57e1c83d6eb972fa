"""
Standardized error response utilities for the Flow proxy.

Every error leaves the proxy in the same shape:
{
    "error": {
        "message": "User-friendly error message",
        "code": "ERROR_CODE"
    }
}

Server errors may also carry a "details" object, but only when the
DEBUG_ERRORS flag is switched on.

Usage:
    from app.utils.errors import error_response, ErrorCode

    return error_response("Shop not recognized", ErrorCode.SHOP_NOT_FOUND, 400)
"""
import logging
import traceback
from enum import Enum
from flask import jsonify, current_app
from typing import Optional

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Authentication (401)
    INVALID_SIGNATURE = "INVALID_SIGNATURE"

    # Validation Errors (400)
    INVALID_REQUEST = "INVALID_REQUEST"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_SHOP_DOMAIN = "INVALID_SHOP_DOMAIN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SHOP_NOT_FOUND = "SHOP_NOT_FOUND"

    # Payload too large (413)
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # External Service Errors
    SEAL_ERROR = "SEAL_ERROR"
    SHOPIFY_ERROR = "SHOPIFY_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"

    # Server Errors (500)
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def debug_errors_enabled() -> bool:
    return bool(current_app.config.get('DEBUG_ERRORS'))


def describe_exception(error: BaseException) -> dict:
    """Short diagnostic description of an exception (message + top of the stack)."""
    stack = traceback.format_exception(type(error), error, error.__traceback__)
    return {
        'message': str(error),
        'stack': ''.join(stack).splitlines()[:3],
    }


def error_response(
    message: str,
    code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    status_code: int = 500,
    log_error: bool = True,
    details: Optional[dict] = None
) -> tuple:
    """
    Create a standardized error response.

    Args:
        message: User-friendly error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code
        log_error: Whether to log the error
        details: Optional diagnostics; returned only for 5xx with DEBUG_ERRORS on

    Returns:
        Tuple of (response, status_code) for Flask
    """
    code_value = code.value if isinstance(code, ErrorCode) else code

    if log_error and status_code >= 500:
        logger.error(f"API Error [{code_value}]: {message}", extra={"details": details})
    elif log_error and status_code >= 400:
        logger.warning(f"API Error [{code_value}]: {message}", extra={"details": details})

    response = {
        "error": {
            "message": message,
            "code": code_value
        }
    }

    if details and status_code >= 500 and debug_errors_enabled():
        response["details"] = details

    return jsonify(response), status_code


def internal_error(message: str = "Server error", details: Optional[dict] = None) -> tuple:
    """500 Internal Server Error."""
    return error_response(message, ErrorCode.INTERNAL_ERROR, 500, log_error=True, details=details)
