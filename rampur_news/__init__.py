"""
Rampur News CMS Gateway - Application Factory

Builds the Flask application that sits between the news frontend and the
Strapi CMS: the admin session endpoints, the CMS proxy, and the public
site API backed by the configured provider.
"""

import os

from flask import Flask

from rampur_news.config import Config
from rampur_news.errors import register_error_handlers
from rampur_news.extensions import db, login_manager
from rampur_news.logging_utils import setup_logging


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app, app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Register blueprints
    from rampur_news.admin import admin_bp
    from rampur_news.proxy import proxy_bp
    from rampur_news.site import site_bp

    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(proxy_bp, url_prefix='/api/cms')
    app.register_blueprint(site_bp)

    register_error_handlers(app)

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and \
                not app.config['SQLALCHEMY_DATABASE_URI'].endswith(':memory:'):
            os.makedirs(os.path.dirname(app.config['SQLALCHEMY_DATABASE_URI'][len('sqlite:///'):]), exist_ok=True)
        db.create_all()
        if app.config.get('SEED_DEFAULT_DATA'):
            _ensure_default_data(app)

    return app


def _ensure_default_data(app):
    """Seed sample articles and content items into an empty database."""
    from rampur_news.models import Article, ContentItem
    from rampur_news.providers.local import LocalCMSProvider, LocalExtendedProvider
    from rampur_news.seed import DEFAULT_ARTICLES, DEFAULT_CONTENT

    if not Article.query.first():
        articles = LocalCMSProvider()
        for values in DEFAULT_ARTICLES:
            articles.create_article(values)
        app.logger.info('Seeded %d default articles', len(DEFAULT_ARTICLES))

    if not ContentItem.query.first():
        content = LocalExtendedProvider()
        for collection, items in DEFAULT_CONTENT.items():
            for values in items:
                content.create(collection, values)
        app.logger.info('Seeded default content for %d collections', len(DEFAULT_CONTENT))
