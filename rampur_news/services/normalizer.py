"""
Entity Normalizer

Reshape Strapi's `{data: {id, attributes: {...}}}` envelopes into the flat
records the frontend consumes.
"""

from datetime import datetime, timezone

from rampur_news.services.strapi_url import to_absolute_url


def extract_media_url(value, origin):
    """Absolute URL of a media field, following nested `data` wrappers."""
    if not value or not isinstance(value, dict):
        return None

    url = value.get('url')
    if not isinstance(url, str):
        attributes = value.get('attributes')
        url = attributes.get('url') if isinstance(attributes, dict) else None
    if isinstance(url, str) and url:
        return to_absolute_url(origin, url)

    nested = value.get('data')
    if not nested:
        return None
    if isinstance(nested, list):
        return extract_media_url(nested[0], origin) if nested else None
    return extract_media_url(nested, origin)


def extract_media_urls(value, origin):
    """List form of `extract_media_url`; `None` when nothing resolves."""
    if not value or not isinstance(value, dict):
        return None
    nested = value.get('data')
    if not nested:
        single = extract_media_url(value, origin)
        return [single] if single else None
    if isinstance(nested, list):
        urls = [u for u in (extract_media_url(item, origin) for item in nested) if u]
        return urls or None
    single = extract_media_url(nested, origin)
    return [single] if single else None


def _first_string(mapping, *keys):
    for key in keys:
        value = mapping.get(key)
        if isinstance(value, str):
            return value
    return None


def _normalize_seo(seo, origin):
    keywords = seo.get('keywords')
    if isinstance(keywords, str):
        keywords = [k.strip() for k in keywords.split(',') if k.strip()]
    else:
        keywords = None
    canonical = seo.get('canonical')
    return {
        'title': _first_string(seo, 'title', 'metaTitle'),
        'description': _first_string(seo, 'description', 'metaDescription'),
        'keywords': keywords,
        'canonical': canonical if isinstance(canonical, str) else None,
        'imageUrl': extract_media_url(seo.get('image') or seo.get('metaImage'), origin),
    }


def normalize_entity(entity, origin):
    """Flatten one Strapi entity.

    Attributes are lifted to the top level next to a string `id`, `image`
    and `gallery` become absolute URLs, and the `seo` component is reduced
    to `{title, description, keywords, canonical, imageUrl}` with title and
    description also promoted to `seoTitle` / `seoDescription`.
    """
    attributes = entity.get('attributes')
    if not isinstance(attributes, dict):
        attributes = {k: v for k, v in entity.items() if k != 'id'}
    normalized = {'id': str(entity.get('id')), **attributes}

    if normalized.get('image'):
        url = extract_media_url(normalized['image'], origin)
        if url:
            normalized['image'] = url

    if normalized.get('gallery'):
        urls = extract_media_urls(normalized['gallery'], origin)
        if urls:
            normalized['gallery'] = urls

    if isinstance(normalized.get('seo'), dict):
        seo = _normalize_seo(normalized['seo'], origin)
        normalized['seo'] = seo
        if seo['title'] and not normalized.get('seoTitle'):
            normalized['seoTitle'] = seo['title']
        if seo['description'] and not normalized.get('seoDescription'):
            normalized['seoDescription'] = seo['description']

    return normalized


def _int_or(value, default):
    # bool is an int subclass; Strapi never sends booleans here
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def to_paginated_response(raw, origin, default_page_size=None, offset=0):
    """Normalize a Strapi collection response into a paginated record."""
    raw = raw if isinstance(raw, dict) else {}
    items = raw.get('data') if isinstance(raw.get('data'), list) else []
    data = [normalize_entity(e, origin) for e in items if isinstance(e, dict)]

    pagination = (raw.get('meta') or {}).get('pagination') or {}
    total = _int_or(pagination.get('total'), len(data))
    page_size = _int_or(pagination.get('pageSize'), default_page_size if default_page_size else len(data))
    if page_size > 0:
        page = _int_or(pagination.get('page'), offset // page_size + 1)
    else:
        page = _int_or(pagination.get('page'), 1)
    if isinstance(pagination.get('pageCount'), int):
        total_pages = pagination['pageCount']
    elif page_size > 0:
        total_pages = max(1, -(-total // page_size))
    else:
        total_pages = 1

    return {
        'data': data,
        'total': total,
        'page': page,
        'pageSize': page_size,
        'totalPages': total_pages,
    }


def to_single(raw, origin):
    """Normalize a Strapi single response, or the first item of a list response."""
    if not isinstance(raw, dict):
        return None
    data = raw.get('data')
    if isinstance(data, dict):
        return normalize_entity(data, origin)
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return normalize_entity(data[0], origin)
    return None


def normalize_upload_file(file, origin):
    """Map a Strapi upload-plugin file to a media record."""
    if not file or not isinstance(file, dict):
        return None
    return {
        'id': str(file.get('id')),
        'url': to_absolute_url(origin, str(file.get('url') or '')),
        'title': str(file.get('name') or file.get('hash') or 'file'),
        'altText': file.get('alternativeText') if isinstance(file.get('alternativeText'), str) else '',
        'mimeType': file.get('mime') if isinstance(file.get('mime'), str) else '',
        'size': file.get('size') if isinstance(file.get('size'), (int, float)) else 0,
        'width': file.get('width') if isinstance(file.get('width'), int) else None,
        'height': file.get('height') if isinstance(file.get('height'), int) else None,
        'uploadedAt': file.get('createdAt') if isinstance(file.get('createdAt'), str)
        else datetime.now(timezone.utc).isoformat(),
        'uploadedBy': 'strapi',
    }


def empty_page(page_size=10):
    return {'data': [], 'total': 0, 'page': 1, 'pageSize': page_size, 'totalPages': 0}
