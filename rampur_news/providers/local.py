"""
Local Providers

Database-backed article and extended content providers used when no CMS
is configured (development, tests, or a CMS outage with `CMS_PROVIDER=local`).
Filtering happens before pagination, mirroring what the CMS does.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from rampur_news.errors import CMSError, NotFoundError
from rampur_news.extensions import db
from rampur_news.models import Article, ContentItem
from rampur_news.providers.collections import (
    COLLECTIONS, DEFAULT_LIMIT, EQUALITY_FILTERS, FLAG_FILTERS, build_calendar_events, month_bounds, parse_date,
)
from rampur_news.providers.rest import DEFAULT_SETTINGS
from rampur_news.services.seo import VALID_NEWS_CATEGORIES, get_category_hindi

logger = logging.getLogger(__name__)


def commit():
    """Commit the session, rolling back when the database refuses the change."""
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning('Rejected write: %s', e.orig)
        raise CMSError('Item conflicts with an existing one', 409)
    except SQLAlchemyError:
        db.session.rollback()
        raise


def paginate(items, limit, offset):
    limit = limit or DEFAULT_LIMIT
    total = len(items)
    return {
        'data': items[offset:offset + limit],
        'total': total,
        'page': offset // limit + 1,
        'pageSize': limit,
        'totalPages': -(-total // limit),
    }


class LocalCMSProvider:
    """Article provider backed by the `articles` table."""

    ORDERABLE = {'views': Article.views, 'publishedDate': Article.published_at,
                 'modifiedDate': Article.modified_at, 'title': Article.title}

    def get_articles(self, params=None):
        params = params or {}
        query = Article.query
        if params.get('category'):
            query = query.filter(Article.category == params['category'])
        if params.get('status'):
            query = query.filter(Article.status == params['status'])
        if params.get('author'):
            query = query.filter(Article.author == params['author'])
        if params.get('featured') is not None:
            query = query.filter(Article.is_featured == bool(params['featured']))
        if params.get('breaking') is not None:
            query = query.filter(Article.is_breaking == bool(params['breaking']))
        if params.get('search'):
            pattern = f"%{params['search']}%"
            query = query.filter(or_(Article.title.ilike(pattern), Article.excerpt.ilike(pattern)))

        column = self.ORDERABLE.get(params.get('orderBy'), Article.published_at)
        query = query.order_by(column.asc() if params.get('order') == 'asc' else column.desc())

        articles = [a.to_dict() for a in query.all()]
        return paginate(articles, params.get('limit') or DEFAULT_LIMIT, params.get('offset') or 0)

    def get_article_by_id(self, article_id):
        try:
            article = db.session.get(Article, int(article_id))
        except (TypeError, ValueError):
            return None
        return article.to_dict() if article else None

    def get_article_by_slug(self, slug):
        article = Article.query.filter_by(slug=slug).first()
        return article.to_dict() if article else None

    def create_article(self, values):
        if not values.get('slug') or not values.get('title') or not values.get('category'):
            raise CMSError('title, slug and category are required', 400)
        if Article.query.filter_by(slug=values['slug']).first():
            raise CMSError(f"Article slug '{values['slug']}' already exists", 409)
        article = Article()
        article.apply(values)
        db.session.add(article)
        commit()
        logger.info('Created article %s', article.slug)
        return article.to_dict()

    def _get_article(self, article_id):
        try:
            article = db.session.get(Article, int(article_id))
        except (TypeError, ValueError):
            article = None
        if not article:
            raise NotFoundError('Article not found')
        return article

    def update_article(self, article_id, values):
        article = self._get_article(article_id)
        slug = values.get('slug')
        if slug and slug != article.slug and Article.query.filter_by(slug=slug).first():
            raise CMSError(f"Article slug '{slug}' already exists", 409)
        article.apply(values)
        commit()
        return article.to_dict()

    def delete_article(self, article_id):
        try:
            article = self._get_article(article_id)
        except NotFoundError:
            return
        db.session.delete(article)
        commit()

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

    def get_categories(self):
        return [
            {'id': slug, 'slug': slug, 'name': slug, 'nameHindi': get_category_hindi(slug)}
            for slug in VALID_NEWS_CATEGORIES
        ]

    def get_category_by_id(self, category_id):
        return self.get_category_by_slug(category_id)

    def get_category_by_slug(self, slug):
        return next((c for c in self.get_categories() if c['slug'] == slug), None)

    def get_authors(self):
        names = sorted({a.author for a in Article.query.all() if a.author})
        return [{'id': name, 'name': name} for name in names]

    def get_author_by_id(self, author_id):
        return next((a for a in self.get_authors() if a['id'] == author_id), None)

    def get_tags(self):
        tags = sorted({t for a in Article.query.all() for t in (a.tags or []) if isinstance(t, str)})
        return [{'id': t, 'name': t, 'slug': t} for t in tags]

    def get_media(self, limit=None):
        media = [{'id': str(a.id), 'url': a.image, 'title': a.title} for a in Article.query.all() if a.image]
        return media[:limit] if limit else media

    def get_settings(self):
        return dict(DEFAULT_SETTINGS)


def _matches(item, collection, params):
    for key in EQUALITY_FILTERS:
        if params.get(key) and item.get(key) != params[key]:
            return False
    for key, field in FLAG_FILTERS.items():
        if params.get(key) is not None and bool(item.get(field)) != bool(params[key]):
            return False
    if params.get('dateFrom') or params.get('dateTo'):
        when = parse_date(item.get(COLLECTIONS[collection]['date_field'] or 'date'))
        if when is None:
            return False
        start, end = parse_date(params.get('dateFrom')), parse_date(params.get('dateTo'))
        if (start and when < start) or (end and when > end):
            return False
    if params.get('search'):
        needle = params['search'].lower()
        fields = COLLECTIONS[collection]['search_fields']
        if not any(needle in str(item.get(f) or '').lower() for f in fields):
            return False
    return True


class LocalExtendedProvider:
    """Extended content provider backed by the `content_items` table."""

    def _items(self, collection):
        rows = ContentItem.query.filter_by(collection=collection).order_by(ContentItem.id).all()
        return [row.to_dict() for row in rows]

    def list(self, collection, params=None):
        params = params or {}
        items = [i for i in self._items(collection) if _matches(i, collection, params)]
        if params.get('orderBy'):
            key = params['orderBy']
            items.sort(key=lambda i: (i.get(key) is None, str(i.get(key) or '')),
                       reverse=params.get('order', 'desc') == 'desc')
        return paginate(items, params.get('limit', DEFAULT_LIMIT), params.get('offset', 0))

    def get_by_slug(self, collection, slug):
        row = ContentItem.query.filter_by(collection=collection, slug=slug).first()
        return row.to_dict() if row else None

    def _apply(self, row, collection, values):
        data = dict(row.data or {})
        data.update({k: v for k, v in values.items() if k not in ('id', 'slug', 'isFeatured')})
        row.data = data
        if values.get('slug'):
            row.slug = values['slug']
        if 'isFeatured' in values:
            row.is_featured = bool(values['isFeatured'])
        date_field = COLLECTIONS[collection]['date_field']
        row.date = data.get(date_field) if date_field else None

    def create(self, collection, values):
        if not values.get('slug'):
            raise CMSError('slug is required', 400)
        if ContentItem.query.filter_by(collection=collection, slug=values['slug']).first():
            raise CMSError(f"{collection} slug '{values['slug']}' already exists", 409)
        row = ContentItem(collection=collection, slug=values['slug'], data={})
        self._apply(row, collection, values)
        db.session.add(row)
        commit()
        logger.info('Created %s item %s', collection, row.slug)
        return row.to_dict()

    def _get_row(self, collection, item_id):
        try:
            row = db.session.get(ContentItem, int(item_id))
        except (TypeError, ValueError):
            row = None
        if not row or row.collection != collection:
            raise NotFoundError(f'{collection} item {item_id} not found')
        return row

    def update(self, collection, item_id, values):
        row = self._get_row(collection, item_id)
        slug = values.get('slug')
        if slug and slug != row.slug and ContentItem.query.filter_by(collection=collection, slug=slug).first():
            raise CMSError(f"{collection} slug '{slug}' already exists", 409)
        self._apply(row, collection, values)
        commit()
        return row.to_dict()

    def delete(self, collection, item_id):
        try:
            row = self._get_row(collection, item_id)
        except NotFoundError:
            return
        db.session.delete(row)
        commit()

    def get_holidays_by_month(self, year, month):
        first, last = month_bounds(year, month)
        return self.list('holidays', {'limit': 200, 'offset': 0,
                                      'dateFrom': first.isoformat(), 'dateTo': last.isoformat()})['data']

    def get_upcoming_events(self, limit=5, now=None):
        today = (now or datetime.now(timezone.utc)).date()
        events = [e for e in self._items('events')
                  if e.get('status') == 'upcoming' and (parse_date(e.get('date')) or today) >= today]
        events.sort(key=lambda e: parse_date(e.get('date')) or today)
        return events[:limit]

    def get_calendar_events(self, year, month):
        items = {c: self._items(c) for c in ('exams', 'results', 'holidays', 'events')}
        return build_calendar_events(items, year, month)
