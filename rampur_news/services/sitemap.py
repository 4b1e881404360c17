"""
Sitemap

Static section pages plus one entry per published article, rendered as a
sitemaps.org `urlset` document.
"""

import logging
from datetime import datetime, timezone
from xml.etree import ElementTree

from rampur_news.errors import CMSError

logger = logging.getLogger(__name__)

SITEMAP_NS = 'http://www.sitemaps.org/schemas/sitemap/0.9'

STATIC_PATHS = [
    '',
    '/rampur',
    '/up',
    '/national',
    '/politics',
    '/crime',
    '/education-jobs',
    '/business',
    '/entertainment',
    '/sports',
    '/health',
    '/religion-culture',
    '/food-lifestyle',
    '/nearby',
    '/about',
    '/contact',
    '/privacy',
    '/terms',
    '/disclaimer',
    '/ownership',
    '/editorial-policy',
    '/corrections-policy',
    '/grievance',
]

ARTICLE_FETCH_LIMIT = 1000


def _parse_lastmod(value, fallback):
    if not isinstance(value, str) or not value:
        return fallback
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return fallback
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def build_sitemap_entries(provider, site_url, now=None):
    """Sitemap entries as dicts with url, lastModified, changeFrequency, priority."""
    now = now or datetime.now(timezone.utc)
    entries = [
        {'url': f'{site_url}{path}', 'lastModified': now, 'changeFrequency': 'daily',
         'priority': 1.0 if path == '' else 0.7}
        for path in STATIC_PATHS
    ]

    try:
        page = provider.get_articles({'status': 'published', 'limit': ARTICLE_FETCH_LIMIT})
    except CMSError as e:
        logger.error('Sitemap article fetch failed: %s', e.message)
        return entries

    for article in (page or {}).get('data') or []:
        if not article.get('slug') or not article.get('category'):
            continue
        entries.append({
            'url': f"{site_url}/{article['category']}/{article['slug']}",
            'lastModified': _parse_lastmod(article.get('modifiedDate') or article.get('publishedDate'), now),
            'changeFrequency': 'hourly',
            'priority': 0.9,
        })
    return entries


def render_sitemap(entries):
    """Serialize entries to sitemap XML bytes."""
    urlset = ElementTree.Element('urlset', xmlns=SITEMAP_NS)
    for entry in entries:
        node = ElementTree.SubElement(urlset, 'url')
        ElementTree.SubElement(node, 'loc').text = entry['url']
        ElementTree.SubElement(node, 'lastmod').text = entry['lastModified'].isoformat()
        ElementTree.SubElement(node, 'changefreq').text = entry['changeFrequency']
        ElementTree.SubElement(node, 'priority').text = f"{entry['priority']:.1f}"
    return ElementTree.tostring(urlset, encoding='utf-8', xml_declaration=True)
