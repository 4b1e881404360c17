"""
Error types

Every error carries the HTTP status it maps to, so routes can let them
propagate and the app-level handler renders `{"error": message}`.
"""

from flask import jsonify


class CMSError(Exception):
    status_code = 500

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or 'Internal error'
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(CMSError):
    status_code = 500


class UnauthorizedError(CMSError):
    status_code = 401

    def __init__(self, message='Unauthorized'):
        super().__init__(message)


class ForbiddenError(CMSError):
    status_code = 403

    def __init__(self, message='Forbidden'):
        super().__init__(message)


class NotFoundError(CMSError):
    status_code = 404

    def __init__(self, message='Not found'):
        super().__init__(message)


class UpstreamError(CMSError):
    """Network-level failure talking to the CMS."""
    status_code = 502

    def __init__(self, message='Upstream request failed'):
        super().__init__(message)


class HttpError(CMSError):
    """Non-OK response from the CMS."""

    def __init__(self, status, message, body=None):
        super().__init__(message, status_code=status)
        self.status = status
        self.body = body


def register_error_handlers(app):
    """Render CMS errors as JSON."""

    @app.errorhandler(CMSError)
    def handle_cms_error(error):
        if error.status_code >= 500:
            app.logger.error('%s: %s', error.__class__.__name__, error.message)
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'Not found'}), 404
