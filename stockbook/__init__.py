"""
Application factory for the Stockbook inventory service
"""
import os
import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from stockbook.extensions import db, login_manager
from stockbook.models.user import find_user


def setup_logging(app):
    """Configure logging for the application"""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        # Application logger
        file_handler = logging.FileHandler('logs/app.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        logging.getLogger('stockbook').addHandler(file_handler)
        logging.getLogger('stockbook').setLevel(logging.INFO)

        # Security logger
        security_handler = logging.FileHandler('logs/security.log')
        security_handler.setFormatter(logging.Formatter(
            '%(asctime)s [SECURITY] %(levelname)s: %(message)s'
        ))
        security_handler.setLevel(logging.INFO)
        security_logger = logging.getLogger('security')
        security_logger.addHandler(security_handler)
        security_logger.setLevel(logging.INFO)
        app.security_logger = security_logger

        app.logger.setLevel(logging.INFO)
        app.logger.info('Stockbook startup')
    else:
        # Development/Testing logging
        app.logger.setLevel(logging.DEBUG)
        logging.getLogger('stockbook').setLevel(logging.DEBUG)


def _load_config(app, config):
    from config import get_config

    if config is None:
        config = get_config()

    if isinstance(config, dict):
        # Test overrides on top of the environment's config class
        base = get_config()
        app.config.from_object(base)
        app.config.update(config)
        config = base
    else:
        app.config.from_object(config)

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        if hasattr(config, 'init_db_uri'):
            app.config['SQLALCHEMY_DATABASE_URI'] = config.init_db_uri()
        else:
            project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
            instance_path = os.path.join(project_root, 'instance')
            os.makedirs(instance_path, exist_ok=True)
            app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{os.path.join(instance_path, 'stockbook.db')}"


def create_app(config=None):
    """
    Create and configure the Flask application

    Args:
        config: a config class, or a dict of overrides applied on top of
            the class chosen by FLASK_ENV
    """
    app = Flask(__name__, instance_relative_config=True)
    _load_config(app, config)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from stockbook.services.context import get_users
        return find_user(get_users(), user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Please log in to access this page.'}), 401

    # Register blueprints
    from stockbook.blueprints.auth.routes import auth_bp
    from stockbook.blueprints.core.routes import core_bp
    from stockbook.blueprints.inventory.routes import inventory_bp
    from stockbook.blueprints.backup.routes import backup_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(core_bp, url_prefix='')
    app.register_blueprint(inventory_bp, url_prefix='/inventory')
    app.register_blueprint(backup_bp, url_prefix='/backup')

    setup_logging(app)

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        if not app.debug:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    # Trust proxy headers in production
    if not app.debug:
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # JSON error handlers
    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.exception('Unhandled error: %s', error)
        return jsonify({'success': False, 'message': 'Internal server error'}), 500

    with app.app_context():
        db.create_all()
        initialize_database(app)

    return app


def initialize_database(app):
    """
    Seed the blob store with the default collections if it is empty
    """
    from stockbook.services.persistence import SqlBlobStore
    from stockbook.services.store import InventoryStore

    store = InventoryStore(
        SqlBlobStore(),
        sku_prefix=app.config.get('SKU_PREFIX', 'V254'),
        default_category=app.config.get('DEFAULT_CATEGORY', ''),
    ).load()
    app.logger.debug('Inventory store ready: %s products, %s movements', len(store.products), len(store.movements))
