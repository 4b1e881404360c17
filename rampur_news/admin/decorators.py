"""
Admin Session Access

The admin identity lives in the signed `admin_session` cookie. Flask-Login
rebuilds it on every request through a request loader, so `current_user`
is an `AdminUser` whenever the cookie verifies.
"""

from functools import wraps

from flask import current_app, jsonify, request
from flask_login import UserMixin, current_user

from rampur_news.extensions import login_manager
from rampur_news.services.session import ALLOWED_ROLES, verify_admin_session_token


class AdminUser(UserMixin):
    """Identity carried by a verified admin session cookie."""

    def __init__(self, session):
        self.id = session['id']
        self.email = session['email']
        self.role = session['role']
        self.name = session['name']

    @property
    def role_allowed(self):
        return self.role in ALLOWED_ROLES

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'email': self.email, 'role': self.role}


def get_admin_session():
    """Verified session payload from the request cookie, or None."""
    config = current_app.config
    token = request.cookies.get(config['ADMIN_SESSION_COOKIE'])
    return verify_admin_session_token(token, config.get('ADMIN_SESSION_SECRET'),
                                      config.get('ADMIN_SESSION_MAX_AGE', 24 * 60 * 60))


@login_manager.request_loader
def load_admin_from_request(req):
    session = get_admin_session()
    return AdminUser(session) if session else None


def admin_required(f):
    """Require a verified admin session with an allowed role.

    Responds 401 without a session and 403 when the session's role is not
    one of the admin roles.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'error': 'Unauthorized'}), 401
        if not current_user.role_allowed:
            return jsonify({'error': 'Forbidden'}), 403
        return f(*args, **kwargs)
    return wrapper
