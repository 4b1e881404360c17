"""
Configuration settings for the Rampur News CMS gateway
"""
import os


def _env_list(*names):
    """Return the values of the given environment variables, in order, skipping unset ones."""
    return [os.environ[name] for name in names if os.environ.get(name) is not None]


class Config:
    """Flask application configuration"""

    # Flask secret key (used by flash/session helpers, not by the admin cookie)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'
    ENV_NAME = os.environ.get('FLASK_ENV') or os.environ.get('NODE_ENV') or 'development'

    # Database configuration (backs the local provider)
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'rampur_news.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SEED_DEFAULT_DATA = True

    # Strapi API base URL candidates, first usable one wins
    STRAPI_API_URL_CANDIDATES = _env_list(
        'STRAPI_API_URL',
        'NEXT_PUBLIC_STRAPI_API_URL',
        'NEXT_PUBLIC_STRAPI_BASE_URL',
        'NEXT_PUBLIC_STRAPI_URL',
    ) + ['http://localhost:1337/api', 'http://127.0.0.1:1337/api']

    # Read token for public content, write token for admin writes
    STRAPI_API_TOKEN = os.environ.get('STRAPI_API_TOKEN') or \
        os.environ.get('NEXT_PUBLIC_STRAPI_API_TOKEN') or \
        os.environ.get('NEXT_PUBLIC_STRAPI_API_KEY')
    STRAPI_WRITE_TOKEN = os.environ.get('STRAPI_WRITE_TOKEN') or STRAPI_API_TOKEN

    # REST collections whose writes go through the Content-Manager API
    CONTENT_MANAGER_TYPES = [
        t.strip() for t in (os.environ.get('CONTENT_MANAGER_TYPES') or 'articles').split(',') if t.strip()
    ]

    # Admin session signing
    ADMIN_SESSION_SECRET = os.environ.get('ADMIN_JWT_SECRET') or os.environ.get('ADMIN_SESSION_SECRET')
    ADMIN_SESSION_MAX_AGE = 24 * 60 * 60
    ADMIN_SESSION_COOKIE = 'admin_session'
    STRAPI_JWT_COOKIE = 'strapi_jwt'

    # Provider facade: local | strapi | rest | auto
    CMS_PROVIDER = os.environ.get('CMS_PROVIDER') or 'local'
    PROVIDER_PROBE_TIMEOUT = float(os.environ.get('PROVIDER_PROBE_TIMEOUT') or 3)
    UPSTREAM_TIMEOUT = float(os.environ.get('UPSTREAM_TIMEOUT') or 15)

    # Public site
    SITE_URL = (os.environ.get('SITE_URL') or 'https://rampurnews.com').rstrip('/')

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_DEFAULT_DATA = False
    ENV_NAME = 'test'
    STRAPI_API_URL_CANDIDATES = ['http://cms.test:1337']
    STRAPI_API_TOKEN = 'read-token'
    STRAPI_WRITE_TOKEN = 'write-token'
    CONTENT_MANAGER_TYPES = ['articles']
    ADMIN_SESSION_SECRET = 'test-session-secret'
    CMS_PROVIDER = 'local'
    SITE_URL = 'https://rampurnews.com'
    LOG_LEVEL = 'INFO'
