"""
Seal Flow Proxy
Flask application factory
"""
import os
import logging
from flask import Flask

from .extensions import regions
from .config import get_config, validate_config
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    # Setup logging before anything else
    setup_logging()

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    validate_config(app.config)

    # Region registry (read-only after this point)
    regions.init_app(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {
            'ok': True,
            **regions.registry.health_summary(),
            'mode': app.config['PROXY_MODE'],
        }

    logger.info(f"Seal Flow proxy ready ({config_name}, mode={app.config['PROXY_MODE']})")

    return app


def register_blueprints(app: Flask) -> None:
    """Register all API blueprints."""
    # Shopify Flow integration
    from .api.flow import flow_bp
    app.register_blueprint(flow_bp, url_prefix='/flow')


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from .utils.errors import error_response, describe_exception, ErrorCode
    from .utils.exceptions import ProxyError, UpstreamError

    @app.errorhandler(ProxyError)
    def proxy_error(error):
        if isinstance(error, UpstreamError):
            details = describe_exception(error)
            details['upstreamStatus'] = error.status
            details['upstreamBody'] = error.body
            return error_response('Upstream service error', error.code, error.status_code,
                                  details=details)
        return error_response(error.message, error.code, error.status_code)

    @app.errorhandler(400)
    def bad_request(error):
        return error_response('Bad request', ErrorCode.INVALID_REQUEST, 400)

    @app.errorhandler(404)
    def not_found(error):
        return error_response('Not found', 'NOT_FOUND', 404, log_error=False)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response('Method not allowed', 'METHOD_NOT_ALLOWED', 405, log_error=False)

    @app.errorhandler(413)
    def payload_too_large(error):
        return error_response('Request body too large', ErrorCode.PAYLOAD_TOO_LARGE, 413)

    @app.errorhandler(500)
    def internal_error(error):
        return error_response('Server error', ErrorCode.INTERNAL_ERROR, 500)
