"""
Admin Session Tokens

Signed, time-limited tokens carrying the admin identity. The token is
stored in the HTTP-only `admin_session` cookie; the upstream Strapi JWT
travels separately in `strapi_jwt`.
"""

import logging

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

logger = logging.getLogger(__name__)

SESSION_SALT = 'rampur-news-admin-session'
SESSION_FIELDS = ('id', 'email', 'role', 'name')
ALLOWED_ROLES = frozenset(['admin', 'editor', 'author', 'contributor'])
DEFAULT_ROLE = 'author'


def _serializer(secret):
    return URLSafeTimedSerializer(secret, salt=SESSION_SALT)


def create_admin_session_token(user, secret, max_age=None):
    """Sign `{id, email, role, name}`.

    `max_age` is enforced on verification; it is accepted here so callers
    can pass the same value they use for the cookie.
    """
    payload = {field: str(user.get(field) or '') for field in SESSION_FIELDS}
    return _serializer(secret).dumps(payload)


def verify_admin_session_token(token, secret, max_age=24 * 60 * 60):
    """Return the session payload, or None for a bad, expired or malformed token."""
    if not token or not secret:
        return None
    try:
        payload = _serializer(secret).loads(token, max_age=max_age)
    except SignatureExpired:
        logger.info('Admin session token expired')
        return None
    except BadSignature:
        logger.warning('Rejected admin session token with bad signature')
        return None
    if not isinstance(payload, dict) or not all(isinstance(payload.get(f), str) for f in SESSION_FIELDS):
        return None
    return payload


def normalize_role_type(value):
    if not isinstance(value, str):
        return None
    trimmed = value.strip().lower()
    if not trimmed:
        return None
    if trimmed == 'administrator':
        return 'admin'
    return trimmed


def role_from_user(user, fallback=None):
    """Role of a Strapi users-permissions user: role.type, then role.name, then fallback."""
    role = user.get('role') if isinstance(user, dict) else None
    role = role if isinstance(role, dict) else {}
    return (normalize_role_type(role.get('type'))
            or normalize_role_type(role.get('name'))
            or normalize_role_type(fallback)
            or DEFAULT_ROLE)
