"""
CMS Provider Facade

Selects the article and extended-content providers from configuration:

- `local`  database-backed providers
- `strapi` Strapi REST API (articles through the custom controllers)
- `rest`   any other REST backend speaking the flat article format
- `auto`   probe Strapi once, use it when it answers, `local` otherwise

Instances are memoized per `provider:baseUrl:apiKey` key.
"""

import logging

import requests
from flask import current_app

from rampur_news.providers.http import bearer
from rampur_news.providers.local import LocalCMSProvider, LocalExtendedProvider
from rampur_news.providers.rest import RestCMSProvider
from rampur_news.providers.strapi_extended import StrapiExtendedProvider
from rampur_news.services.strapi_url import get_strapi_api_base_url, normalize_strapi_base_url

logger = logging.getLogger(__name__)

PROVIDER_TYPES = ('local', 'strapi', 'rest')

_registry = {}
_overrides = {}
_cache = {'key': None, 'cms': None, 'extended': None}
_detected = {}


def register_provider(provider_type, cms_provider, extended_provider=None):
    """Register custom implementations for a provider name."""
    _registry[provider_type] = (cms_provider, extended_provider)
    reset_provider_cache()


def configure_cms(provider=None, base_url=None, api_key=None):
    """Override the configured provider settings at runtime."""
    if base_url:
        base_url = normalize_strapi_base_url(base_url)
    _overrides.clear()
    _overrides.update({k: v for k, v in
                       (('provider', provider), ('base_url', base_url), ('api_key', api_key)) if v is not None})
    reset_provider_cache()


def reset_provider_cache():
    _cache.update({'key': None, 'cms': None, 'extended': None})
    _detected.clear()


def detect_provider(base_url, api_key=None, timeout=3):
    """Probe Strapi with a single time-limited request."""
    try:
        response = requests.get(
            f'{base_url}/articles',
            params={'pagination[limit]': 1},
            headers=bearer(api_key),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        logger.warning('Strapi probe at %s failed: %s; using local provider', base_url, e)
        return 'local'
    if response.status_code < 500:
        logger.info('Strapi answered probe at %s with %s', base_url, response.status_code)
        return 'strapi'
    logger.warning('Strapi probe at %s returned %s; using local provider', base_url, response.status_code)
    return 'local'


def get_cms_config(config=None):
    """Effective provider settings: app config plus runtime overrides."""
    config = config if config is not None else current_app.config
    provider = _overrides.get('provider') or config.get('CMS_PROVIDER') or 'local'
    base_url = _overrides.get('base_url') or get_strapi_api_base_url(config)
    api_key = _overrides.get('api_key') or config.get('STRAPI_API_TOKEN')

    if provider == 'auto':
        probe_key = f'{base_url}:{api_key or ""}'
        if probe_key not in _detected:
            _detected[probe_key] = detect_provider(base_url, api_key, config.get('PROVIDER_PROBE_TIMEOUT', 3))
        provider = _detected[probe_key]

    return {'provider': provider, 'base_url': base_url, 'api_key': api_key}


def _build(settings, config):
    provider = settings['provider']
    if provider in _registry:
        return _registry[provider]
    if provider not in PROVIDER_TYPES:
        logger.warning('CMS provider "%s" not available, falling back to local', provider)
        provider = 'local'
    timeout = config.get('UPSTREAM_TIMEOUT', 15)
    if provider == 'strapi':
        return (
            RestCMSProvider(settings['base_url'], settings['api_key'], 'strapi', timeout),
            StrapiExtendedProvider(settings['base_url'], settings['api_key'],
                                   config.get('STRAPI_WRITE_TOKEN'), timeout),
        )
    if provider == 'rest':
        return RestCMSProvider(settings['base_url'], settings['api_key'], 'rest', timeout), LocalExtendedProvider()
    return LocalCMSProvider(), LocalExtendedProvider()


def _providers(config=None):
    config = config if config is not None else current_app.config
    settings = get_cms_config(config)
    key = f"{settings['provider']}:{settings['base_url']}:{settings['api_key'] or ''}"
    if _cache['key'] != key:
        cms, extended = _build(settings, config)
        _cache.update({'key': key, 'cms': cms, 'extended': extended or LocalExtendedProvider()})
        logger.info('Using %s CMS provider', settings['provider'])
    return _cache['cms'], _cache['extended']


def get_cms_provider(config=None):
    return _providers(config)[0]


def get_extended_provider(config=None):
    return _providers(config)[1]


__all__ = [
    'PROVIDER_TYPES',
    'configure_cms',
    'detect_provider',
    'get_cms_config',
    'get_cms_provider',
    'get_extended_provider',
    'register_provider',
    'reset_provider_cache',
]
