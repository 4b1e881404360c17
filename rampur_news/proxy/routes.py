"""
CMS Proxy Routes

`/api/cms/strapi/<path>` forwards browser requests to the Strapi REST API.
Public reads go out with the server read token; everything else needs an
admin session. Writes use the server write token when one is configured,
and for the collections in `CONTENT_MANAGER_TYPES` they are rewritten to
Strapi's Content-Manager API, which expects the bare entity instead of the
`{data: ...}` envelope.

`/api/cms/strapi-extended/<path>` is a read-only variant that returns
normalized, flat records.
"""

import json
import logging
from urllib.parse import quote

import requests
from flask import Response, current_app, jsonify, request

from rampur_news.admin.decorators import get_admin_session
from rampur_news.errors import UpstreamError
from rampur_news.proxy import proxy_bp
from rampur_news.providers.http import bearer
from rampur_news.services.normalizer import to_paginated_response, to_single
from rampur_news.services.session import ALLOWED_ROLES
from rampur_news.services.strapi_url import get_origin, get_strapi_api_base_url

logger = logging.getLogger(__name__)

PROXY_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE']
READ_METHODS = ('GET', 'HEAD')
PRIVATE_PREFIXES = ('upload', 'users', 'auth')

DROPPED_REQUEST_HEADERS = {'host', 'connection', 'content-length', 'cookie',
                           'authorization', 'origin', 'referer'}
DROPPED_RESPONSE_HEADERS = {'set-cookie', 'content-encoding', 'content-length', 'transfer-encoding',
                            'connection', 'keep-alive'}


def is_public_get_path(path):
    """Paths anonymous GETs may reach: nothing admin, upload, users or auth."""
    parts = [p for p in path.split('/') if p]
    if path.startswith('admin/') or 'admin' in parts:
        return False
    return not (parts and parts[0] in PRIVATE_PREFIXES)


def singularize(collection):
    if collection.endswith('ies'):
        return collection[:-3] + 'y'
    if collection.endswith('s'):
        return collection[:-1]
    return collection


def content_manager_target(origin, path, content_types):
    """Content-Manager URL for `<collection>[/<id>]`, or None when the path is not rewritten."""
    parts = [p for p in path.split('/') if p]
    if not parts or len(parts) > 2 or parts[0] not in content_types:
        return None
    singular = singularize(parts[0])
    target = f'{origin}/content-manager/collection-types/api::{singular}.{singular}'
    if len(parts) == 2:
        target = f"{target}/{quote(parts[1], safe='')}"
    return target


def _forward_headers():
    return {k: v for k, v in request.headers.items() if k.lower() not in DROPPED_REQUEST_HEADERS}


def _read_json_body():
    if not request.is_json:
        return None
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else None


@proxy_bp.route('/strapi/<path:path>', methods=PROXY_METHODS)
def strapi_proxy(path):
    """Forward a request to Strapi with the credentials it is entitled to."""
    config = current_app.config
    method = request.method.upper()
    api_base = get_strapi_api_base_url(config)
    target = f'{api_base}/{path}'

    session = get_admin_session()
    public_read = method in READ_METHODS and is_public_get_path(path)
    if not session and not public_read:
        return jsonify({'error': 'Unauthorized'}), 401
    if session and not public_read and session['role'] not in ALLOWED_ROLES:
        return jsonify({'error': 'Forbidden'}), 403

    jwt = request.cookies.get(config['STRAPI_JWT_COOKIE'])
    headers = _forward_headers()
    data = None

    if public_read:
        headers.update(bearer(config.get('STRAPI_API_TOKEN')))
    elif method in READ_METHODS:
        if not jwt:
            return jsonify({'error': 'Unauthorized'}), 401
        headers.update(bearer(jwt))
    else:
        write_token = config.get('STRAPI_WRITE_TOKEN')
        token = write_token or jwt
        if not token:
            return jsonify({'error': 'Unauthorized'}), 401
        headers.update(bearer(token))

        body = _read_json_body()
        rewritten = None
        if write_token:
            rewritten = content_manager_target(get_origin(api_base), path, config.get('CONTENT_MANAGER_TYPES') or [])
        if rewritten:
            target = rewritten
            if body is not None and 'data' in body:
                body = body['data']
            logger.info('Rewrote %s /%s to %s', method, path, target)
        elif body is not None and 'data' not in body:
            body = {'data': body}

        if body is not None:
            data = json.dumps(body)
            headers['Content-Type'] = 'application/json'
        else:
            data = request.get_data() or None

    try:
        upstream = requests.request(
            method,
            target,
            params=list(request.args.items(multi=True)),
            headers=headers,
            data=data,
            timeout=config.get('UPSTREAM_TIMEOUT', 15),
            allow_redirects=False,
        )
    except requests.exceptions.RequestException as e:
        logger.warning('Proxy %s %s failed: %s', method, target, e)
        return jsonify({'error': str(e) or 'Upstream request failed'}), 502

    if not upstream.ok:
        logger.info('Proxy %s %s -> %s', method, target, upstream.status_code)
    response_headers = [(k, v) for k, v in upstream.headers.items()
                        if k.lower() not in DROPPED_RESPONSE_HEADERS]
    return Response(upstream.content, status=upstream.status_code, headers=response_headers)


@proxy_bp.route('/strapi-extended/<path:path>', methods=['GET'])
def strapi_extended(path):
    """Read from Strapi and return normalized records."""
    config = current_app.config
    api_base = get_strapi_api_base_url(config)
    params = list(request.args.items(multi=True))
    if 'publicationState' not in request.args:
        params.append(('publicationState', 'live'))
    force_single = (request.args.get('single') or '').lower() in ('1', 'true', 'yes')

    try:
        upstream = requests.get(
            f'{api_base}/{path}',
            params=params,
            headers=bearer(config.get('STRAPI_API_TOKEN')),
            timeout=config.get('UPSTREAM_TIMEOUT', 15),
        )
    except requests.exceptions.RequestException as e:
        logger.warning('Extended read %s failed: %s', path, e)
        raise UpstreamError(str(e) or 'Upstream request failed')

    is_json = 'application/json' in upstream.headers.get('content-type', '')
    if not upstream.ok:
        if is_json:
            return jsonify(upstream.json()), upstream.status_code
        return Response(upstream.text, status=upstream.status_code, mimetype='text/plain')

    body = upstream.json() if is_json else None
    origin = get_origin(api_base)
    if isinstance(body, dict) and isinstance(body.get('data'), list) and not force_single:
        return jsonify(to_paginated_response(body, origin))
    return jsonify(to_single(body, origin))
