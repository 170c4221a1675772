"""
Middleware for request logging and security headers
"""
from flask import request
import logging
import time

logger = logging.getLogger(__name__)


def setup_middleware(app):
    """Setup request logging and response headers"""

    @app.before_request
    def before_request():
        request.environ['heal_together.start'] = time.perf_counter()

    @app.after_request
    def after_request(response):
        started = request.environ.get('heal_together.start')
        if started is not None and not app.testing:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.path} {response.status_code} {elapsed_ms:.1f}ms - {request.remote_addr}")

        if not app.debug:
            # Prevent clickjacking
            response.headers['X-Frame-Options'] = 'DENY'
            # Prevent MIME type sniffing
            response.headers['X-Content-Type-Options'] = 'nosniff'
            # Referrer policy
            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
            if request.is_secure:
                response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response
