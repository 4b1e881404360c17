"""
Admin Routes

Admin login goes through Strapi's users-permissions plugin. A successful
login sets two HTTP-only cookies: the signed `admin_session` identity and
the upstream `strapi_jwt` used for authenticated proxy reads.
"""

import logging

import requests
from flask import current_app, jsonify, request

from rampur_news.admin import admin_bp
from rampur_news.admin.decorators import get_admin_session
from rampur_news.services.session import (
    ALLOWED_ROLES, DEFAULT_ROLE, create_admin_session_token, normalize_role_type, role_from_user,
)
from rampur_news.services.strapi_url import get_strapi_api_base_url

logger = logging.getLogger(__name__)

MISSING_CMS_USER = ('This account does not exist in CMS users. '
                    'Please create the user under Strapi Users & Permissions.')


def _set_session_cookies(response, token, jwt):
    config = current_app.config
    options = dict(
        max_age=config['ADMIN_SESSION_MAX_AGE'],
        httponly=True,
        secure=config.get('ENV_NAME') == 'production',
        samesite='Lax',
        path='/',
    )
    response.set_cookie(config['ADMIN_SESSION_COOKIE'], token, **options)
    response.set_cookie(config['STRAPI_JWT_COOKIE'], jwt, **options)


def _session_user(session):
    return {
        'id': session['id'],
        'name': session['name'],
        'email': session['email'],
        'role': normalize_role_type(session['role']) or DEFAULT_ROLE,
    }


@admin_bp.route('/login', methods=['POST'])
def admin_login():
    """Exchange CMS credentials for an admin session."""
    config = current_app.config
    secret = config.get('ADMIN_SESSION_SECRET')
    if not secret:
        logger.error('Admin login attempted without ADMIN_JWT_SECRET configured')
        return jsonify({'error': 'Server configuration error: ADMIN_JWT_SECRET is missing'}), 500

    payload = request.get_json(silent=True) or {}
    email = payload.get('email')
    password = payload.get('password')
    email = email.strip().lower() if isinstance(email, str) else ''
    password = password.strip() if isinstance(password, str) else ''
    if not email or not password:
        return jsonify({'error': 'Email and password are required'}), 400

    try:
        upstream = requests.post(
            f'{get_strapi_api_base_url(config)}/auth/local',
            json={'identifier': email, 'password': password},
            timeout=config.get('UPSTREAM_TIMEOUT', 15),
        )
    except requests.exceptions.RequestException as e:
        logger.warning('Strapi login request failed: %s', e)
        return jsonify({'error': str(e) or 'Strapi login failed'}), 502

    if not upstream.ok:
        if upstream.status_code in (400, 401, 403):
            logger.info('Strapi rejected login for %s (%s)', email, upstream.status_code)
            return jsonify({'error': MISSING_CMS_USER}), 401
        return jsonify({'error': upstream.text or f'Strapi login failed ({upstream.status_code})'}), 502

    try:
        data = upstream.json()
    except ValueError:
        data = {}
    data = data if isinstance(data, dict) else {}
    jwt = data.get('jwt') if isinstance(data.get('jwt'), str) else None
    user = data.get('user') if isinstance(data.get('user'), dict) else None
    if not jwt or not user:
        return jsonify({'error': MISSING_CMS_USER}), 401

    if user.get('blocked') is True:
        return jsonify({'error': 'User is disabled'}), 403

    role = role_from_user(user)
    if role not in ALLOWED_ROLES:
        logger.warning('Login refused for %s with role %s', email, role)
        return jsonify({'error': 'Unauthorized'}), 403

    user_id = user.get('id')
    session_user = {
        'id': str(user_id) if isinstance(user_id, (int, str)) and not isinstance(user_id, bool) else '',
        'name': user['username'] if isinstance(user.get('username'), str) else 'User',
        'email': user['email'] if isinstance(user.get('email'), str) else email,
        'role': role,
    }
    token = create_admin_session_token(session_user, secret, config['ADMIN_SESSION_MAX_AGE'])

    response = jsonify({'user': session_user})
    _set_session_cookies(response, token, jwt)
    logger.info('Admin %s logged in as %s', session_user['email'], role)
    return response


@admin_bp.route('/me', methods=['GET'])
def admin_me():
    """Current admin, refreshed from Strapi when it answers."""
    config = current_app.config
    session = get_admin_session()
    jwt = request.cookies.get(config['STRAPI_JWT_COOKIE'])
    if not session or not jwt:
        return jsonify({'user': None}), 401

    try:
        upstream = requests.get(
            f'{get_strapi_api_base_url(config)}/users/me',
            headers={'Authorization': f'Bearer {jwt}'},
            timeout=config.get('UPSTREAM_TIMEOUT', 15),
        )
        me = upstream.json() if upstream.ok else None
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.info('Could not refresh admin from Strapi: %s', e)
        me = None

    if not isinstance(me, dict):
        return jsonify({'user': _session_user(session)})

    me_id = me.get('id')
    return jsonify({'user': {
        'id': str(me_id) if isinstance(me_id, (int, str)) and not isinstance(me_id, bool) else session['id'],
        'name': me['username'] if isinstance(me.get('username'), str) else session['name'],
        'email': me['email'] if isinstance(me.get('email'), str) else session['email'],
        'role': role_from_user(me, session['role']),
    }})


@admin_bp.route('/logout', methods=['POST'])
def admin_logout():
    """Clear both session cookies."""
    config = current_app.config
    response = jsonify({'success': True})
    response.delete_cookie(config['ADMIN_SESSION_COOKIE'], path='/')
    response.delete_cookie(config['STRAPI_JWT_COOKIE'], path='/')
    return response


@admin_bp.route('/env-check', methods=['GET'])
def env_check():
    """Which secrets and URLs are configured, without their values."""
    config = current_app.config
    return jsonify({
        'env': config.get('ENV_NAME'),
        'hasAdminSessionSecret': bool(config.get('ADMIN_SESSION_SECRET')),
        'hasStrapiApiToken': bool(config.get('STRAPI_API_TOKEN')),
        'hasStrapiWriteToken': bool(config.get('STRAPI_WRITE_TOKEN')),
        'hasStrapiApiUrl': bool(config.get('STRAPI_API_URL_CANDIDATES')),
        'cmsProvider': config.get('CMS_PROVIDER'),
    })
