from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate, bcrypt, jwt
from .errors import ServiceError
import logging
import os

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    from app.config import config, get_config
    config_cls = config.get(config_name, config['default']) if config_name else get_config()
    app.config.from_object(config_cls())

    # Ensure production mode if FLASK_ENV is production
    if os.getenv('FLASK_ENV') == 'production':
        app.config['DEBUG'] = False
        app.config['TESTING'] = False

    logging.getLogger().setLevel(str(app.config.get('LOG_LEVEL') or 'INFO').upper())

    # Initialize extensions first (before error handlers)
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    jwt.init_app(app)

    # Initialize CORS
    from app.utils.cors import init_cors
    init_cors(app)

    from app.middleware import setup_middleware
    setup_middleware(app)

    register_error_handlers(app)
    register_jwt_handlers()

    # Setup file logging
    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_file = app.config['LOG_FILE']
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10240000,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)
        app.logger.info('Application startup')

    # Import models to register them with SQLAlchemy
    with app.app_context():
        from . import models  # noqa: F401

        # Register blueprints
        from .routes import (
            auth_bp,
            users_bp,
            appointment_bp,
            medication_bp,
            caretaker_request_bp,
            medical_visit_bp,
            health_bp,
        )
        app.register_blueprint(health_bp)  # Register health check first
        app.register_blueprint(auth_bp)
        app.register_blueprint(users_bp)
        app.register_blueprint(appointment_bp)
        app.register_blueprint(medication_bp)
        app.register_blueprint(caretaker_request_bp)
        app.register_blueprint(medical_visit_bp)

    return app


def register_error_handlers(app):
    """Render every error as the {'success': False, 'error': ...} envelope."""

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        message = 'Endpoint not found' if error.code == 404 else error.description
        return jsonify({
            'success': False,
            'error': message
        }), error.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        db.session.rollback()
        return jsonify({
            'success': False,
            'error': 'Internal server error. Check server logs for details.'
        }), 500


def register_jwt_handlers():
    """JWT failures use the same JSON envelope as the rest of the API."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({
            'success': False,
            'error': 'Access token required'
        }), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({
            'success': False,
            'error': 'Invalid token'
        }), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({
            'success': False,
            'error': 'Token has expired'
        }), 401
