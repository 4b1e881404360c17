"""
Strapi Extended Provider

Exams, results, institutions, holidays, restaurants, fashion stores,
shopping centres, famous places and events read from Strapi's REST API
and normalized into flat records.
"""

import logging
from urllib.parse import quote

from rampur_news.errors import NotFoundError, UpstreamError
from rampur_news.providers.collections import (
    COLLECTIONS, DEFAULT_LIMIT, EQUALITY_FILTERS, FLAG_FILTERS, build_calendar_events, month_bounds,
)
from rampur_news.providers.http import bearer, fetch_json
from rampur_news.services.normalizer import normalize_entity, to_paginated_response, to_single
from rampur_news.services.strapi_url import get_origin, normalize_strapi_api_url

logger = logging.getLogger(__name__)

CALENDAR_FETCH_LIMIT = 200


def build_list_query(collection, params=None):
    """Strapi v4 query pairs for a collection listing."""
    params = params or {}
    limit = params.get('limit', DEFAULT_LIMIT)
    offset = params.get('offset', 0)
    query = [
        ('publicationState', 'live'),
        ('pagination[withCount]', True),
        ('pagination[start]', offset),
        ('pagination[limit]', limit),
    ]
    if params.get('orderBy'):
        query.append(('sort[0]', f"{params['orderBy']}:{params.get('order') or 'desc'}"))
    for key in EQUALITY_FILTERS:
        if params.get(key):
            query.append((f'filters[{key}][$eq]', params[key]))
    for key, field in FLAG_FILTERS.items():
        if params.get(key) is not None:
            query.append((f'filters[{field}][$eq]', params[key]))
    date_field = COLLECTIONS[collection]['date_field'] or 'date'
    if params.get('dateFrom'):
        query.append((f'filters[{date_field}][$gte]', params['dateFrom']))
    if params.get('dateTo'):
        query.append((f'filters[{date_field}][$lte]', params['dateTo']))
    if params.get('search'):
        for index, field in enumerate(COLLECTIONS[collection]['search_fields']):
            query.append((f'filters[$or][{index}][{field}][$containsi]', params['search']))
    query.append(('populate[image]', '*'))
    return query


def build_slug_query(slug):
    return [
        ('publicationState', 'live'),
        ('filters[slug][$eq]', slug),
        ('pagination[withCount]', False),
        ('pagination[start]', 0),
        ('pagination[limit]', 1),
        ('populate[image]', '*'),
        ('populate[gallery]', '*'),
        ('populate[seo]', '*'),
    ]


class StrapiExtendedProvider:
    """Extended content provider backed by Strapi."""

    def __init__(self, base_url, api_token=None, write_token=None, timeout=15):
        self.base_url = normalize_strapi_api_url(base_url)
        self.origin = get_origin(self.base_url)
        self.api_token = api_token
        self.write_token = write_token or api_token
        self.timeout = timeout

    def _url(self, collection, item_id=None):
        path = COLLECTIONS[collection]['path']
        if item_id is not None:
            path = f"{path}/{quote(str(item_id), safe='')}"
        return f'{self.base_url}{path}'

    def list(self, collection, params=None):
        params = params or {}
        result = fetch_json('GET', self._url(collection), params=build_list_query(collection, params),
                            headers=bearer(self.api_token), timeout=self.timeout)
        return to_paginated_response(result, self.origin, params.get('limit', DEFAULT_LIMIT), params.get('offset', 0))

    def get_by_slug(self, collection, slug):
        result = fetch_json('GET', self._url(collection), params=build_slug_query(slug),
                            headers=bearer(self.api_token), timeout=self.timeout)
        return to_single(result, self.origin)

    def create(self, collection, values):
        result = fetch_json('POST', self._url(collection), json={'data': values or {}},
                            headers=bearer(self.write_token), allow_not_found=False, timeout=self.timeout)
        if not result or not result.get('data'):
            raise UpstreamError('Failed to create item')
        return normalize_entity(result['data'], self.origin)

    def update(self, collection, item_id, values):
        result = fetch_json('PUT', self._url(collection, item_id), json={'data': values or {}},
                            headers=bearer(self.write_token), allow_not_found=False, timeout=self.timeout)
        if not result or not result.get('data'):
            raise NotFoundError(f'{collection} item {item_id} not found')
        return normalize_entity(result['data'], self.origin)

    def delete(self, collection, item_id):
        fetch_json('DELETE', self._url(collection, item_id), headers=bearer(self.write_token),
                   allow_not_found=False, timeout=self.timeout)

    def get_holidays_by_month(self, year, month):
        first, last = month_bounds(year, month)
        page = self.list('holidays', {'limit': CALENDAR_FETCH_LIMIT, 'offset': 0,
                                      'dateFrom': first.isoformat(), 'dateTo': last.isoformat()})
        return page['data']

    def get_upcoming_events(self, limit=5):
        page = self.list('events', {'limit': limit, 'offset': 0, 'status': 'upcoming',
                                    'orderBy': 'date', 'order': 'asc'})
        return page['data']

    def get_calendar_events(self, year, month):
        items = {}
        for collection in ('exams', 'results', 'holidays', 'events'):
            items[collection] = self.list(collection, {'limit': CALENDAR_FETCH_LIMIT, 'offset': 0})['data']
        return build_calendar_events(items, year, month)
