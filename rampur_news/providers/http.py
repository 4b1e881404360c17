"""
Upstream HTTP helpers

Thin wrapper over `requests` used by the CMS providers.
"""

import logging

import requests

from rampur_news.errors import HttpError, UpstreamError

logger = logging.getLogger(__name__)


def encode_params(params):
    """Query pairs for `requests`, dropping None and lowercasing booleans."""
    if not params:
        return None
    items = params.items() if isinstance(params, dict) else params
    encoded = []
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        encoded.append((key, str(value)))
    return encoded


def bearer(token):
    return {'Authorization': f'Bearer {token}'} if token else {}


def _error_message(response):
    message = f'Request failed with status {response.status_code}'
    body = None
    content_type = response.headers.get('content-type', '')
    if 'application/json' in content_type:
        try:
            body = response.json()
        except ValueError:
            return message, None
        candidate = None
        if isinstance(body, dict):
            error = body.get('error')
            if isinstance(error, dict):
                candidate = error.get('message')
            candidate = candidate or body.get('message') or (error if isinstance(error, str) else None)
        if isinstance(candidate, str) and candidate.strip():
            message = candidate
    else:
        text = response.text or ''
        if text.strip():
            body = text
            message = text
    return message, body


def fetch_json(method, url, params=None, headers=None, json=None, files=None,
               allow_not_found=True, timeout=15):
    """Send a request and decode its JSON body.

    Returns None for 204, and for 404 unless `allow_not_found` is False.
    Raises HttpError for other non-OK statuses and UpstreamError when the
    request never reaches the CMS.
    """
    try:
        response = requests.request(
            method,
            url,
            params=encode_params(params),
            headers=headers or {},
            json=json,
            files=files,
            timeout=timeout,
        )
    except requests.exceptions.Timeout:
        logger.warning('%s %s timed out', method, url)
        raise UpstreamError('Upstream request timed out')
    except requests.exceptions.RequestException as e:
        logger.warning('%s %s failed: %s', method, url, e)
        raise UpstreamError(str(e) or 'Upstream request failed')

    if response.status_code == 204:
        return None
    if not response.ok:
        if response.status_code == 404 and allow_not_found:
            return None
        message, body = _error_message(response)
        logger.debug('%s %s -> %s: %s', method, url, response.status_code, message)
        raise HttpError(response.status_code, message, body)
    if not response.content:
        return None
    return response.json()
