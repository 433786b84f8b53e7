from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
import os
import sys
import logging
from pathlib import Path
from typing import Optional

# Add backend directory to Python path if running from project root
current_dir = Path(__file__).parent.resolve()
if str(current_dir) not in sys.path:
    sys.path.insert(0, str(current_dir))

from auth.session import SessionStore
from calendars.service import CalendarProxy
from config.settings import AppSettings
from config.rate_limit import RateLimitConfig
from utils.logging_utils import setup_logger

# Import route blueprints
from calendars.routes import events_bp
from auth.routes import auth_bp

# Request bodies are small JSON documents
MAX_CONTENT_LENGTH = 1024 * 1024

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    calendar_proxy: Optional[CalendarProxy] = None,
    strict_config: Optional[bool] = None
) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Server settings; read from the environment when omitted
        calendar_proxy: Proxy instance (tests inject one with a fake Google
            service builder)
        strict_config: Fail at startup when configuration is incomplete.
            Defaults to the REQUIRE_CONFIG environment variable.

    Returns:
        Configured Flask app
    """
    if settings is None:
        settings = AppSettings.from_env()
    if strict_config is None:
        strict_config = os.getenv('REQUIRE_CONFIG', 'false').lower() == 'true'

    # Configure logging on the root logger so every module logger is covered
    setup_logger(None, settings.log_file, settings.log_level)

    settings.validate(strict=strict_config)

    app = Flask(__name__)
    app.config.update(
        SETTINGS=settings,
        SECRET_KEY=settings.cookie_secret,
        SESSION_COOKIE_NAME=settings.session_cookie_name,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=settings.is_production,
        SESSION_COOKIE_SAMESITE=settings.cookie_samesite,
        MAX_CONTENT_LENGTH=MAX_CONTENT_LENGTH,
    )

    # Trust one proxy hop for scheme/host (secure cookies behind a load balancer)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Only the client application's origin may call the API, with cookies
    CORS(app,
         origins=[settings.frontend_origin],
         supports_credentials=True,
         allow_headers=['Content-Type'],
         methods=['GET', 'POST', 'PATCH', 'DELETE', 'OPTIONS'])

    # Configure rate limiting
    # OPTIONS is always exempt (CORS preflight).
    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        storage_uri=RateLimitConfig.get_storage_uri(settings.redis_url),
        default_limits=RateLimitConfig.DEFAULT_LIMITS,
        default_limits_exempt_when=lambda: request.method == 'OPTIONS'
    )
    limiter.limit(RateLimitConfig.AUTH_LIMIT)(auth_bp)

    app.extensions['session_store'] = SessionStore(settings.cookie_secret)
    app.extensions['calendar_proxy'] = calendar_proxy or CalendarProxy(settings)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(events_bp)

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({'ok': True})

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        """Convert anything a route did not handle into a JSON error body."""
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({'error': 'Internal server error'}), 500

    logger.info(f"Calendar proxy ready (origin: {settings.frontend_origin}, environment: {settings.environment})")
    return app


if __name__ == '__main__':
    create_app().run(debug=True, port=int(os.getenv('PORT', '4000')))
