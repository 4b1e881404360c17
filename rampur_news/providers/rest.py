"""
REST CMS Provider

Article, taxonomy, media and settings access against a REST backend. With
`provider='strapi'` the backend is Strapi with the custom article
controllers (`/articles`, `/articles/admin`, `/articles/slug/<slug>`), and
reads fall back between the admin and public surfaces depending on what the
configured API key is allowed to see.
"""

import logging
from urllib.parse import quote

from rampur_news.errors import HttpError, UpstreamError
from rampur_news.providers.http import bearer, fetch_json
from rampur_news.services.normalizer import (
    empty_page, normalize_upload_file, to_paginated_response, to_single,
)
from rampur_news.services.strapi_url import get_origin

logger = logging.getLogger(__name__)

ARTICLE_QUERY_KEYS = ['category', 'status', 'featured', 'breaking', 'limit', 'offset',
                      'search', 'author', 'orderBy', 'order']

DEFAULT_SETTINGS = {
    'siteName': 'Rampur News',
    'siteNameHindi': 'रामपुर न्यूज़',
    'tagline': '',
    'logo': '/logo.png',
    'favicon': '/favicon.ico',
    'socialLinks': {},
}


def _is_strapi_envelope(result):
    if not isinstance(result, dict) or 'data' not in result:
        return False
    data = result['data']
    if 'meta' in result:
        return True
    if isinstance(data, list):
        return any(isinstance(item, dict) and 'attributes' in item for item in data)
    return isinstance(data, dict) and 'attributes' in data


class RestCMSProvider:
    """Article provider for Strapi and generic REST backends."""

    def __init__(self, base_url, api_key=None, provider='strapi', timeout=15):
        self.base_url = (base_url or '').rstrip('/')
        self.api_key = api_key
        self.provider = provider
        self.timeout = timeout
        self.is_strapi = provider == 'strapi'
        self.origin = get_origin(self.base_url)

    @property
    def can_use_admin(self):
        return self.is_strapi and bool(self.api_key)

    def _request(self, method, path, params=None, include_key=True, allow_not_found=True, json=None):
        headers = bearer(self.api_key) if include_key else {}
        return fetch_json(method, f'{self.base_url}{path}', params=params, headers=headers, json=json,
                          allow_not_found=allow_not_found, timeout=self.timeout)

    def _read_with_admin_fallback(self, admin_path, public_path, params=None):
        """Admin surface with the key, then public without it, then public with it."""
        if not self.can_use_admin:
            return self._request('GET', public_path, params, include_key=False)
        try:
            return self._request('GET', admin_path, params, include_key=True, allow_not_found=False)
        except HttpError as e:
            if e.status not in (401, 403, 404):
                raise
            logger.info('Admin read %s refused (%s), retrying public path', admin_path, e.status)
        except UpstreamError as e:
            logger.info('Admin read %s failed (%s), retrying public path', admin_path, e.message)
        try:
            return self._request('GET', public_path, params, include_key=False)
        except HttpError as e:
            if e.status in (401, 403):
                return self._request('GET', public_path, params, include_key=True)
            raise

    def _read_with_key_fallback(self, path, params=None):
        """Anonymous first; Strapi 401/403 retries with the API key."""
        try:
            return self._request('GET', path, params, include_key=False)
        except HttpError as e:
            if self.is_strapi and self.api_key and e.status in (401, 403):
                return self._request('GET', path, params, include_key=True)
            raise

    def _coerce_single(self, result):
        if _is_strapi_envelope(result):
            return to_single(result, self.origin)
        return result

    # -- articles -------------------------------------------------------

    def get_articles(self, params=None):
        params = params or {}
        query = {k: params[k] for k in ARTICLE_QUERY_KEYS if params.get(k) is not None}
        result = self._read_with_admin_fallback('/articles/admin', '/articles', query)
        if not result:
            return empty_page(params.get('limit') or 10)
        if _is_strapi_envelope(result):
            return to_paginated_response(result, self.origin, params.get('limit') or 10, params.get('offset') or 0)
        return result

    def get_article_by_id(self, article_id):
        quoted = quote(str(article_id), safe='')
        return self._coerce_single(
            self._read_with_admin_fallback(f'/articles/admin/{quoted}', f'/articles/{quoted}'))

    def get_article_by_slug(self, slug):
        quoted = quote(slug, safe='')
        return self._coerce_single(
            self._read_with_admin_fallback(f'/articles/admin/slug/{quoted}', f'/articles/slug/{quoted}'))

    def create_article(self, values):
        result = self._request('POST', '/articles', json=values, allow_not_found=False)
        if not result:
            raise UpstreamError('Article creation failed')
        return self._coerce_single(result)

    def update_article(self, article_id, values):
        result = self._request('PATCH', f"/articles/{quote(str(article_id), safe='')}", json=values,
                               allow_not_found=False)
        if not result:
            raise UpstreamError('Article update failed')
        return self._coerce_single(result)

    def delete_article(self, article_id):
        self._request('DELETE', f"/articles/{quote(str(article_id), safe='')}", allow_not_found=False)

    def get_featured_articles(self, limit=5):
        return self.get_articles({'featured': True, 'status': 'published', 'limit': limit})['data']

    def get_breaking_news(self, limit=5):
        return self.get_articles({'breaking': True, 'status': 'published', 'limit': limit})['data']

    def get_trending_articles(self, limit=5):
        return self.get_articles({'status': 'published', 'orderBy': 'views', 'order': 'desc', 'limit': limit})['data']

    def get_articles_by_category(self, category, limit=10):
        return self.get_articles({'category': category, 'status': 'published', 'limit': limit})['data']

    def search_articles(self, query, limit=20):
        return self.get_articles({'search': query, 'status': 'published', 'limit': limit})['data']

    # -- taxonomy -------------------------------------------------------

    def get_categories(self):
        return self._read_with_key_fallback('/categories') or []

    def get_category_by_id(self, category_id):
        return self._read_with_key_fallback(f"/categories/{quote(str(category_id), safe='')}")

    def get_category_by_slug(self, slug):
        return self._read_with_key_fallback(f"/categories/slug/{quote(slug, safe='')}")

    def get_authors(self):
        return self._read_with_key_fallback('/authors') or []

    def get_author_by_id(self, author_id):
        return self._read_with_key_fallback(f"/authors/{quote(str(author_id), safe='')}")

    def get_tags(self):
        return self._read_with_key_fallback('/tags') or []

    # -- media and settings ----------------------------------------------

    def get_media(self, limit=None):
        params = {'limit': limit} if limit else None
        if self.is_strapi:
            try:
                files = self._request('GET', '/upload/files', params, allow_not_found=False) or []
                return [m for m in (normalize_upload_file(f, self.origin) for f in files) if m]
            except HttpError as e:
                if e.status not in (401, 403, 404):
                    raise
                logger.info('Upload plugin refused media listing (%s), using /media', e.status)
        return self._request('GET', '/media', params) or []

    def get_settings(self):
        return self._read_with_key_fallback('/settings') or dict(DEFAULT_SETTINGS)
