from datetime import datetime, timedelta, timezone

from rampur_news.services.seo import (
    compute_freshness_score, compute_read_time_minutes, compute_trending_score, derive_ai_seo_signals,
    get_category_hindi, strip_html_to_text, truncate_text,
)

NOW = datetime(2024, 6, 3, 12, 0, tzinfo=timezone.utc)


def _iso(delta):
    return (NOW - delta).isoformat().replace('+00:00', 'Z')


def test_strip_html_and_truncate():
    html = '<p>रामपुर&nbsp;में <b>बारिश</b></p><script>alert(1)</script>'
    assert strip_html_to_text(html) == 'रामपुर में बारिश'
    assert truncate_text('aaa bbb ccc', 9) == 'aaa bbb…'
    assert truncate_text('short', 10) == 'short'
    assert truncate_text('   ', 10) == ''


def test_read_time():
    assert compute_read_time_minutes('') == 1
    assert compute_read_time_minutes('शब्द ' * 450) == 3


def test_freshness_buckets():
    assert compute_freshness_score(_iso(timedelta(hours=2)), now=NOW) == 1
    assert compute_freshness_score(_iso(timedelta(hours=30)), now=NOW) == 0.65
    assert compute_freshness_score(_iso(timedelta(days=60)), now=NOW) == 0.1
    assert compute_freshness_score(_iso(timedelta(days=60)), _iso(timedelta(hours=3)), now=NOW) == 1
    assert compute_freshness_score('not a date', now=NOW) == 0


def test_trending_buckets():
    assert compute_trending_score(300, _iso(timedelta(hours=2)), now=NOW) == 1
    assert compute_trending_score(600, _iso(timedelta(hours=20)), now=NOW) == 0.9
    assert compute_trending_score(150, _iso(timedelta(days=10)), now=NOW) == 0.3
    assert compute_trending_score(5, None, now=NOW) == 0.2
    assert compute_trending_score(None, None, now=NOW) == 0


def test_category_hindi():
    assert get_category_hindi('crime') == 'अपराध'
    assert get_category_hindi('unknown-section') == 'unknown-section'


def test_signals_for_local_police_story():
    article = {
        'title': 'रामपुर पुलिस ने चोरी का खुलासा किया',
        'content': '<p>रामपुर पुलिस ने बाजार में हुई चोरी के मामले में दो आरोपियों को गिरफ्तार किया।</p>',
        'category': 'crime',
        'categoryHindi': 'अपराध',
        'tags': ['पुलिस'],
        'views': 300,
        'publishedDate': _iso(timedelta(hours=2)),
    }
    signals = derive_ai_seo_signals(article, now=NOW)

    assert signals['primaryEntity'] == {'name': 'रामपुर', 'type': 'Organization', 'score': 0.85}
    assert all(m['name'] != 'रामपुर' for m in signals['mentions'])
    assert signals['keywords'][:2] == ['अपराध', 'crime']
    assert 'Rampur News' in signals['keywords']
    assert len(signals['keywords']) <= 30
    assert signals['readTimeMinutes'] == 1
    assert signals['freshnessScore'] == 1
    assert signals['trendingScore'] == 1
    assert signals['geoRelevance'] == {'region': 'rampur', 'score': 1}


def test_signals_are_deterministic_for_fixed_now():
    article = {'title': 'India Today Report', 'content': 'Delhi news', 'views': 10,
               'publishedDate': '2024-05-01T00:00:00Z'}
    assert derive_ai_seo_signals(article, now=NOW) == derive_ai_seo_signals(article, now=NOW)
    assert derive_ai_seo_signals(article, now=NOW)['geoRelevance'] == {'region': 'india', 'score': 0.45}
