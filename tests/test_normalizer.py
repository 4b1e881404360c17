from rampur_news.services.normalizer import (
    empty_page, normalize_entity, normalize_upload_file, to_paginated_response, to_single,
)

ORIGIN = 'http://localhost:1337'


def test_normalize_entity_flattens_attributes_media_and_seo():
    normalized = normalize_entity({
        'id': 5,
        'attributes': {
            'titleHindi': 'शीर्षक',
            'image': {'data': {'attributes': {'url': '/uploads/x.jpg'}}},
            'gallery': {'data': [
                {'id': 1, 'attributes': {'url': '/uploads/g1.jpg'}},
                {'id': 2, 'url': '/uploads/g2.jpg'},
            ]},
            'seo': {
                'metaTitle': 'SEO Title',
                'metaDescription': 'SEO Description',
                'keywords': 'a, b ,  c',
                'metaImage': {'data': {'attributes': {'url': '/uploads/seo.jpg'}}},
            },
        },
    }, ORIGIN)

    assert normalized['id'] == '5'
    assert normalized['titleHindi'] == 'शीर्षक'
    assert normalized['image'] == 'http://localhost:1337/uploads/x.jpg'
    assert normalized['gallery'] == [
        'http://localhost:1337/uploads/g1.jpg',
        'http://localhost:1337/uploads/g2.jpg',
    ]
    assert normalized['seo'] == {
        'title': 'SEO Title',
        'description': 'SEO Description',
        'keywords': ['a', 'b', 'c'],
        'canonical': None,
        'imageUrl': 'http://localhost:1337/uploads/seo.jpg',
    }
    assert normalized['seoTitle'] == 'SEO Title'
    assert normalized['seoDescription'] == 'SEO Description'


def test_existing_seo_title_is_not_overwritten():
    normalized = normalize_entity({'id': 1, 'seoTitle': 'Own', 'seo': {'title': 'Component'}}, ORIGIN)
    assert normalized['seoTitle'] == 'Own'
    assert normalized['seo']['title'] == 'Component'


def test_flat_entity_and_unresolvable_image_are_kept():
    normalized = normalize_entity({'id': 3, 'name': 'x', 'image': {'data': None}}, ORIGIN)
    assert normalized == {'id': '3', 'name': 'x', 'image': {'data': None}}


def test_paginated_response_uses_meta_pagination():
    raw = {
        'data': [{'id': 1, 'attributes': {'slug': 'a'}}, {'id': 2, 'attributes': {'slug': 'b'}}],
        'meta': {'pagination': {'page': 2, 'pageSize': 2, 'pageCount': 4, 'total': 7}},
    }
    page = to_paginated_response(raw, ORIGIN)
    assert [item['slug'] for item in page['data']] == ['a', 'b']
    assert (page['total'], page['page'], page['pageSize'], page['totalPages']) == (7, 2, 2, 4)


def test_paginated_response_derives_missing_pagination():
    raw = {'data': [{'id': i, 'attributes': {}} for i in range(3)]}
    page = to_paginated_response(raw, ORIGIN, default_page_size=10, offset=20)
    assert (page['total'], page['page'], page['pageSize'], page['totalPages']) == (3, 3, 10, 1)
    assert to_paginated_response(None, ORIGIN)['data'] == []


def test_to_single():
    assert to_single({'data': {'id': 9, 'attributes': {'slug': 'x'}}}, ORIGIN) == {'id': '9', 'slug': 'x'}
    assert to_single({'data': [{'id': 1, 'attributes': {'slug': 'first'}}]}, ORIGIN)['slug'] == 'first'
    assert to_single({'data': []}, ORIGIN) is None
    assert to_single(None, ORIGIN) is None


def test_upload_file_and_empty_page():
    media = normalize_upload_file({'id': 4, 'url': '/uploads/a.png', 'name': 'a.png', 'mime': 'image/png',
                                   'size': 12.5, 'createdAt': '2024-01-01T00:00:00.000Z'}, ORIGIN)
    assert media['id'] == '4'
    assert media['url'] == 'http://localhost:1337/uploads/a.png'
    assert media['mimeType'] == 'image/png'
    assert media['uploadedAt'] == '2024-01-01T00:00:00.000Z'
    assert normalize_upload_file(None, ORIGIN) is None
    assert empty_page(5) == {'data': [], 'total': 0, 'page': 1, 'pageSize': 5, 'totalPages': 0}


def test_upload_file_without_timestamp_gets_current_utc_time():
    from datetime import datetime

    media = normalize_upload_file({'id': 5, 'url': '/uploads/b.png', 'hash': 'b_hash'}, ORIGIN)
    assert media['title'] == 'b_hash'
    uploaded = datetime.fromisoformat(media['uploadedAt'])
    assert uploaded.utcoffset().total_seconds() == 0
