"""
Services Package

Exports the URL, normalization, session, SEO and sitemap helpers.
"""

from rampur_news.services.strapi_url import (
    normalize_strapi_api_url, normalize_strapi_base_url, get_strapi_api_base_url, get_origin, to_absolute_url
)
from rampur_news.services.normalizer import normalize_entity, to_paginated_response, to_single
from rampur_news.services.session import create_admin_session_token, verify_admin_session_token
from rampur_news.services.seo import derive_ai_seo_signals, get_category_hindi
from rampur_news.services.sitemap import build_sitemap_entries, render_sitemap

__all__ = [
    'normalize_strapi_api_url',
    'normalize_strapi_base_url',
    'get_strapi_api_base_url',
    'get_origin',
    'to_absolute_url',
    'normalize_entity',
    'to_paginated_response',
    'to_single',
    'create_admin_session_token',
    'verify_admin_session_token',
    'derive_ai_seo_signals',
    'get_category_hindi',
    'build_sitemap_entries',
    'render_sitemap'
]
