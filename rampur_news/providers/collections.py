"""
Extended content collections

Registry of the non-article collections, the query-parameter parsing they
share, and the calendar view that merges exams, results, holidays and
events.
"""

from datetime import date

COLLECTIONS = {
    'exams': {
        'path': '/exams',
        'search_fields': ['titleHindi', 'title', 'organizationHindi', 'organization'],
        'date_field': 'examDate',
    },
    'results': {
        'path': '/results',
        'search_fields': ['titleHindi', 'title', 'organizationHindi', 'organization'],
        'date_field': 'resultDate',
    },
    'institutions': {
        'path': '/institutions',
        'search_fields': ['nameHindi', 'name', 'city', 'district', 'state'],
        'date_field': None,
    },
    'holidays': {
        'path': '/holidays',
        'search_fields': ['nameHindi', 'name', 'descriptionHindi', 'description'],
        'date_field': 'date',
    },
    'restaurants': {
        'path': '/restaurants',
        'search_fields': ['nameHindi', 'name', 'city', 'district', 'descriptionHindi', 'description'],
        'date_field': None,
    },
    'fashion-stores': {
        'path': '/fashion-stores',
        'search_fields': ['nameHindi', 'name', 'city', 'district', 'descriptionHindi', 'description'],
        'date_field': None,
    },
    'shopping-centres': {
        'path': '/shopping-centres',
        'search_fields': ['nameHindi', 'name', 'city', 'district', 'descriptionHindi', 'description'],
        'date_field': None,
    },
    'places': {
        'path': '/places',
        'search_fields': ['nameHindi', 'name', 'city', 'district', 'descriptionHindi', 'description'],
        'date_field': None,
    },
    'events': {
        'path': '/events',
        'search_fields': ['titleHindi', 'title', 'city', 'district', 'venueHindi', 'venue',
                          'descriptionHindi', 'description'],
        'date_field': 'date',
    },
}

# Query parameters matched by equality against the field of the same name
EQUALITY_FILTERS = ['category', 'subcategory', 'type', 'city', 'district', 'status',
                    'applicationStatus', 'resultStatus']
# Boolean query parameters and the item flag they filter on
FLAG_FILTERS = {'featured': 'isFeatured', 'popular': 'isPopular'}

DEFAULT_LIMIT = 10

CALENDAR_SOURCES = [
    # collection, calendar type, date field, title field, hindi title field, category field, link prefix
    ('exams', 'exam', 'examDate', 'title', 'titleHindi', 'category', '/education-jobs/exams/'),
    ('results', 'result', 'resultDate', 'title', 'titleHindi', 'category', '/education-jobs/results/'),
    ('holidays', 'holiday', 'date', 'name', 'nameHindi', 'type', '/religion-culture/holidays/'),
    ('events', 'event', 'date', 'title', 'titleHindi', 'category', '/food-lifestyle/events/'),
]

CALENDAR_COLORS = {
    'exam': '#3b82f6',
    'result': '#22c55e',
    'holiday': '#f59e0b',
    'national_holiday': '#ef4444',
    'event': '#a855f7',
}


def get_collection(name):
    """Registry entry for a collection, or None."""
    return COLLECTIONS.get(name)


def _to_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes')


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_query_params(args):
    """Build extended query params from request args (or any mapping)."""
    params = {
        'limit': max(0, _to_int(args.get('limit'), DEFAULT_LIMIT)),
        'offset': max(0, _to_int(args.get('offset'), 0)),
    }
    for key in EQUALITY_FILTERS + ['search', 'orderBy', 'dateFrom', 'dateTo']:
        value = args.get(key)
        if value:
            params[key] = value
    order = (args.get('order') or '').lower()
    if order in ('asc', 'desc'):
        params['order'] = order
    for key in FLAG_FILTERS:
        if args.get(key) is not None and args.get(key) != '':
            params[key] = _to_bool(args.get(key))
    return params


def parse_date(value):
    """Calendar date of an ISO date/datetime string, or None."""
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def month_bounds(year, month):
    """First and last day of a 1-based month."""
    first = date(year, month, 1)
    if month == 12:
        last = date(year, 12, 31)
    else:
        last = date.fromordinal(date(year, month + 1, 1).toordinal() - 1)
    return first, last


def build_calendar_events(items_by_collection, year, month):
    """Merge dated items from exams/results/holidays/events into one sorted month view."""
    calendar = []
    for collection, kind, date_field, title_field, hindi_field, category_field, link in CALENDAR_SOURCES:
        for item in items_by_collection.get(collection) or []:
            when = parse_date(item.get(date_field))
            if when is None or when.year != year or when.month != month:
                continue
            color = CALENDAR_COLORS[kind]
            if kind == 'holiday' and item.get('type') == 'national':
                color = CALENDAR_COLORS['national_holiday']
            entry = {
                'id': item.get('id'),
                'title': item.get(title_field),
                'titleHindi': item.get(hindi_field),
                'date': item.get(date_field),
                'type': kind,
                'category': item.get(category_field),
                'color': color,
                'link': f"{link}{item.get('slug')}",
            }
            if item.get('endDate'):
                entry['endDate'] = item['endDate']
            if kind == 'event' and item.get('status'):
                entry['status'] = item['status']
            calendar.append(entry)
    calendar.sort(key=lambda e: parse_date(e['date']))
    return calendar
