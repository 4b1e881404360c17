"""
Strapi URL helpers

Resolve the configured Strapi API base URL and turn relative media paths
into absolute URLs on the CMS origin.
"""

import re
from urllib.parse import urljoin, urlsplit, urlunsplit

from rampur_news.errors import ConfigurationError

_BARE_ORIGIN = re.compile(r'^https?://[^/]+$', re.IGNORECASE)


def normalize_strapi_api_url(value):
    """Normalize a Strapi URL so that it points at the `/api` root.

    A bare origin gets `/api` appended, a URL already ending in `/api` is
    kept, and any other path is left as configured.
    """
    trimmed = (value or '').strip().rstrip('/')
    if not trimmed:
        return ''
    if trimmed.endswith('/api'):
        return trimmed
    if _BARE_ORIGIN.match(trimmed):
        return f'{trimmed}/api'
    return trimmed


def normalize_strapi_base_url(value):
    """Like `normalize_strapi_api_url`, but cut everything after an `api` path segment."""
    trimmed = (value or '').strip().rstrip('/')
    if not trimmed:
        return trimmed
    parts = urlsplit(trimmed)
    if parts.scheme and parts.netloc:
        segments = [s for s in parts.path.split('/') if s]
        if 'api' in segments:
            path = '/' + '/'.join(segments[:segments.index('api') + 1])
            return urlunsplit((parts.scheme, parts.netloc, path, '', '')).rstrip('/')
    return normalize_strapi_api_url(trimmed)


def get_strapi_api_base_url(config):
    """Return the first usable Strapi API URL from the configured candidates."""
    candidates = config.get('STRAPI_API_URL_CANDIDATES') or []
    for candidate in candidates:
        if not isinstance(candidate, str):
            continue
        normalized = normalize_strapi_api_url(candidate)
        if normalized:
            return normalized
    raise ConfigurationError('Strapi API URL is not configured')


def get_origin(api_url):
    """`scheme://host[:port]` of the URL, or an empty string."""
    try:
        parts = urlsplit(api_url or '')
    except ValueError:
        return ''
    if not parts.scheme or not parts.netloc:
        return ''
    return f'{parts.scheme}://{parts.netloc}'


def to_absolute_url(origin, url):
    if not url:
        return url
    if url.startswith('http://') or url.startswith('https://'):
        return url
    if not origin:
        return url
    try:
        return urljoin(origin + '/', url)
    except ValueError:
        return url
