"""
Site Routes

Sitemap and the JSON read API the frontend renders from, all served
through the configured CMS providers. Writes require an admin session.
"""

from flask import Response, current_app, jsonify, request

from rampur_news.admin.decorators import admin_required
from rampur_news.errors import CMSError, NotFoundError
from rampur_news.providers import get_cms_provider, get_extended_provider
from rampur_news.providers.collections import get_collection, parse_query_params
from rampur_news.services.seo import derive_ai_seo_signals
from rampur_news.services.sitemap import build_sitemap_entries, render_sitemap
from rampur_news.site import site_bp

ARTICLE_TEXT_PARAMS = ['category', 'status', 'search', 'author', 'orderBy']


def _article_params(args):
    params = parse_query_params(args)
    article_params = {'limit': params['limit'], 'offset': params['offset'], 'status': 'published'}
    for key in ARTICLE_TEXT_PARAMS:
        if args.get(key):
            article_params[key] = args[key]
    if params.get('order'):
        article_params['order'] = params['order']
    if 'featured' in params:
        article_params['featured'] = params['featured']
    if args.get('breaking'):
        article_params['breaking'] = args['breaking'].lower() in ('1', 'true', 'yes')
    return article_params


def _require_collection(collection):
    if not get_collection(collection):
        raise NotFoundError(f'Unknown collection: {collection}')


def _check_month(year, month):
    if not 1 <= year <= 9999:
        raise CMSError('year must be between 1 and 9999', 400)
    if not 1 <= month <= 12:
        raise CMSError('month must be between 1 and 12', 400)


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise CMSError('JSON object body required', 400)
    return body


@site_bp.route('/sitemap.xml')
def sitemap():
    entries = build_sitemap_entries(get_cms_provider(), current_app.config['SITE_URL'])
    return Response(render_sitemap(entries), mimetype='application/xml')


# -- articles -----------------------------------------------------------

@site_bp.route('/api/articles', methods=['GET'])
def list_articles():
    return jsonify(get_cms_provider().get_articles(_article_params(request.args)))


@site_bp.route('/api/articles/<slug>', methods=['GET'])
def get_article(slug):
    article = get_cms_provider().get_article_by_slug(slug)
    if not article:
        raise NotFoundError('Article not found')
    return jsonify(article)


@site_bp.route('/api/articles/<slug>/signals', methods=['GET'])
def article_signals(slug):
    """AI/SEO signals for an article."""
    article = get_cms_provider().get_article_by_slug(slug)
    if not article:
        raise NotFoundError('Article not found')
    return jsonify(derive_ai_seo_signals(article))


@site_bp.route('/api/articles', methods=['POST'])
@admin_required
def create_article():
    article = get_cms_provider().create_article(_json_body())
    return jsonify(article), 201


@site_bp.route('/api/articles/<article_id>', methods=['PATCH'])
@admin_required
def update_article(article_id):
    return jsonify(get_cms_provider().update_article(article_id, _json_body()))


@site_bp.route('/api/articles/<article_id>', methods=['DELETE'])
@admin_required
def delete_article(article_id):
    get_cms_provider().delete_article(article_id)
    return '', 204


# -- extended content ---------------------------------------------------

@site_bp.route('/api/content/<collection>', methods=['GET'])
def list_content(collection):
    _require_collection(collection)
    return jsonify(get_extended_provider().list(collection, parse_query_params(request.args)))


@site_bp.route('/api/content/<collection>/<slug>', methods=['GET'])
def get_content(collection, slug):
    _require_collection(collection)
    item = get_extended_provider().get_by_slug(collection, slug)
    if not item:
        raise NotFoundError(f'{collection} item not found')
    return jsonify(item)


@site_bp.route('/api/content/<collection>', methods=['POST'])
@admin_required
def create_content(collection):
    _require_collection(collection)
    return jsonify(get_extended_provider().create(collection, _json_body())), 201


@site_bp.route('/api/content/<collection>/<item_id>', methods=['PUT'])
@admin_required
def update_content(collection, item_id):
    _require_collection(collection)
    return jsonify(get_extended_provider().update(collection, item_id, _json_body()))


@site_bp.route('/api/content/<collection>/<item_id>', methods=['DELETE'])
@admin_required
def delete_content(collection, item_id):
    _require_collection(collection)
    get_extended_provider().delete(collection, item_id)
    return '', 204


@site_bp.route('/api/holidays/<int:year>/<int:month>', methods=['GET'])
def holidays_by_month(year, month):
    _check_month(year, month)
    return jsonify(get_extended_provider().get_holidays_by_month(year, month))


@site_bp.route('/api/events/upcoming', methods=['GET'])
def upcoming_events():
    limit = parse_query_params({'limit': request.args.get('limit', 5)})['limit']
    return jsonify(get_extended_provider().get_upcoming_events(limit))


@site_bp.route('/api/calendar/<int:year>/<int:month>', methods=['GET'])
def calendar(year, month):
    """Exams, results, holidays and events of one month, colour-coded."""
    _check_month(year, month)
    return jsonify(get_extended_provider().get_calendar_events(year, month))
