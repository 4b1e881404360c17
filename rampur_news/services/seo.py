"""
SEO Signal Services

Heuristics that derive search/AI-answer-engine signals from an article:
entities, keywords, read time, freshness, trending and geo relevance.
"""

import json
import math
import re
import unicodedata
from datetime import datetime, timezone

VALID_NEWS_CATEGORIES = [
    'rampur',
    'up',
    'national',
    'politics',
    'crime',
    'education-jobs',
    'business',
    'entertainment',
    'sports',
    'health',
    'religion-culture',
    'food-lifestyle',
    'nearby',
]

CATEGORY_HINDI = {
    'rampur': 'रामपुर',
    'up': 'उत्तर प्रदेश',
    'national': 'देश',
    'politics': 'राजनीति',
    'crime': 'अपराध',
    'education-jobs': 'शिक्षा और नौकरियां',
    'business': 'व्यापार',
    'entertainment': 'मनोरंजन',
    'sports': 'खेल',
    'health': 'स्वास्थ्य',
    'religion-culture': 'धर्म-संस्कृति',
    'food-lifestyle': 'खान-पान और जीवनशैली',
    'nearby': 'आस-पास',
}

GEO_TOKENS = [
    'रामपुर',
    'Rampur',
    'उत्तर प्रदेश',
    'यूपी',
    'Uttar Pradesh',
    'UP',
    'भारत',
    'India',
]

ORG_HINTS = ['सरकार', 'पुलिस', 'कोर्ट', 'न्यायालय', 'मंत्रालय', 'विभाग', 'कमेटी', 'संगठन']

STOP_WORDS = {
    'और', 'का', 'की', 'के', 'में', 'से', 'पर', 'को', 'लिए', 'यह', 'वह', 'था', 'थे', 'है', 'हैं',
    'ने', 'भी', 'तो', 'कि',
    'as', 'at', 'be', 'by', 'for', 'from', 'in', 'is', 'it', 'of', 'on', 'or', 'the', 'to', 'with',
}

BRAND_KEYWORDS = ['Rampur News', 'रामपुर न्यूज़']

WORDS_PER_MINUTE = 200

# Devanagari block without the danda punctuation marks
_DEVANAGARI = '[\u0900-\u0963\u0966-\u097F]'
_HINDI_PHRASE = re.compile(rf'{_DEVANAGARI}{{2,}}(?:\s+{_DEVANAGARI}{{2,}}){{0,2}}')
_ENGLISH_PROPER = re.compile(r'\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,2}\b')

_HTML_CLEANUP = [
    (re.compile(r'<script[\s\S]*?</script>', re.IGNORECASE), ' '),
    (re.compile(r'<style[\s\S]*?</style>', re.IGNORECASE), ' '),
    (re.compile(r'<[^>]+>'), ' '),
]
_ENTITIES = [('&nbsp;', ' '), ('&amp;', '&'), ('&quot;', '"'), ('&#39;', "'")]


def get_category_hindi(category):
    return CATEGORY_HINDI.get(category, category)


def strip_html_to_text(value):
    if not value:
        return ''
    text = value
    for pattern, repl in _HTML_CLEANUP:
        text = pattern.sub(repl, text)
    for entity, repl in _ENTITIES:
        text = text.replace(entity, repl)
    return re.sub(r'\s+', ' ', text).strip()


def truncate_text(value, max_chars):
    """Clip to `max_chars`, preferring a word boundary in the last 30 characters."""
    text = (value or '').strip()
    if not text:
        return ''
    if len(text) <= max_chars:
        return text
    clipped = text[:max_chars]
    last_space = clipped.rfind(' ')
    if last_space >= max(0, max_chars - 30):
        return f'{clipped[:last_space].strip()}…'
    return f'{clipped.strip()}…'


def compute_read_time_minutes(text):
    words = len((text or '').split())
    if words <= 0:
        return 1
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def _parse_iso(value):
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _now(now):
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def compute_freshness_score(published_iso, modified_iso=None, now=None):
    basis = _parse_iso(modified_iso or published_iso)
    if basis is None:
        return 0
    age_hours = max(0.0, (_now(now) - basis).total_seconds() / 3600)
    if age_hours <= 6:
        return 1
    if age_hours <= 24:
        return 0.85
    if age_hours <= 72:
        return 0.65
    if age_hours <= 168:
        return 0.45
    if age_hours <= 720:
        return 0.2
    return 0.1


def compute_trending_score(views, published_iso, now=None):
    if isinstance(views, (int, float)) and not isinstance(views, bool) and math.isfinite(views):
        v = max(0, views)
    else:
        v = 0
    published = _parse_iso(published_iso)
    if published is None:
        return 0.2 if v > 0 else 0
    age_hours = max(1.0, (_now(now) - published).total_seconds() / 3600)
    velocity = v / age_hours
    if age_hours <= 6 and v >= 200:
        return 1
    if age_hours <= 24 and v >= 500:
        return 0.9
    if velocity >= 100:
        return 0.85
    if velocity >= 40:
        return 0.65
    if velocity >= 15:
        return 0.45
    if v >= 100:
        return 0.3
    return 0.1


def _uniq(items):
    seen = set()
    out = []
    for item in items:
        key = item.lower() if isinstance(item, str) else json.dumps(item, sort_keys=True, ensure_ascii=False)
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def _keep_char(ch):
    return ch.isspace() or ch == '-' or unicodedata.category(ch)[0] in 'LNM'


def _token_keywords(text):
    cleaned = ''.join(ch if _keep_char(ch) else ' ' for ch in (text or ''))
    cleaned = re.sub(r'\s+', ' ', cleaned).strip()
    if not cleaned:
        return []
    return [t for t in cleaned.split(' ') if len(t) >= 3 and t.lower() not in STOP_WORDS]


def _geo_relevance(corpus, category):
    hits = sum(1 for token in GEO_TOKENS if token in corpus)
    if 'रामपुर' in corpus or 'Rampur' in corpus or category == 'rampur':
        return {'region': 'rampur', 'score': 1}
    if 'उत्तर प्रदेश' in corpus or 'यूपी' in corpus or 'Uttar Pradesh' in corpus or category == 'up':
        return {'region': 'up', 'score': 0.7}
    if 'भारत' in corpus or 'India' in corpus:
        return {'region': 'india', 'score': 0.45}
    return {'region': 'unknown', 'score': min(0.35, round(hits * 0.1, 2))}


def _entity(name, kind, score):
    return {'name': name, 'type': kind, 'score': score}


def derive_ai_seo_signals(article, now=None):
    """Derive SEO/AI signals for an article record.

    `article` uses the frontend field names (`title`, `excerpt`, `content`,
    `category`, `categoryHindi`, `tags`, `views`, `publishedDate`,
    `modifiedDate`). The result only depends on the article and `now`.
    """
    title = article.get('title') or ''
    body = strip_html_to_text(article.get('content') or article.get('excerpt') or '')
    corpus = f'{title} {body}'.strip()
    category = article.get('category')
    category_hindi = article.get('categoryHindi')
    published = article.get('publishedDate') or ''

    raw_entities = []
    for phrase in _uniq([m.strip() for m in _HINDI_PHRASE.findall(title) if m.strip()])[:8]:
        if any(h in phrase for h in ('सरकार', 'पुलिस', 'कोर्ट', 'मंत्रालय')):
            kind = 'Organization'
        elif phrase in GEO_TOKENS:
            kind = 'Place'
        else:
            kind = 'Thing'
        raw_entities.append(_entity(phrase, kind, 0.6))

    for noun in _uniq([m.strip() for m in _ENGLISH_PROPER.findall(title) if m.strip()])[:6]:
        raw_entities.append(_entity(noun, 'Person', 0.55))

    for token in GEO_TOKENS:
        if token in corpus:
            raw_entities.append(_entity(token, 'Place', 0.7))

    if category_hindi:
        raw_entities.append(_entity(category_hindi, 'Thing', 0.45))
    if category:
        raw_entities.append(_entity(category, 'Thing', 0.35))
    for tag in (article.get('tags') or [])[:8]:
        if isinstance(tag, str):
            raw_entities.append(_entity(tag, 'Thing', 0.4))

    entities = sorted(
        (e for e in _uniq(raw_entities) if len(e['name']) >= 2),
        key=lambda e: e['score'],
        reverse=True,
    )

    primary = entities[0] if entities else None
    if primary and primary['type'] == 'Place' and any(h in corpus for h in ORG_HINTS):
        primary = _entity(primary['name'], 'Organization', min(1, round(primary['score'] + 0.15, 2)))

    mentions = [e for e in entities if not primary or e['name'] != primary['name']][:8]

    candidates = []
    if category_hindi:
        candidates.append(category_hindi)
    if category:
        candidates.append(category)
    candidates += _token_keywords(title)[:12]
    candidates += _token_keywords(body)[:20]
    if primary:
        candidates.append(primary['name'])
    candidates += [m['name'] for m in mentions]
    candidates += BRAND_KEYWORDS
    keywords = [k.strip() for k in _uniq(candidates) if k.strip()][:30]

    return {
        'primaryEntity': primary,
        'mentions': mentions,
        'keywords': keywords,
        'readTimeMinutes': compute_read_time_minutes(corpus),
        'freshnessScore': compute_freshness_score(published, article.get('modifiedDate'), now=now),
        'trendingScore': compute_trending_score(article.get('views'), published, now=now),
        'geoRelevance': _geo_relevance(corpus, category),
    }
