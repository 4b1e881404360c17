import json

import requests

from conftest import FakeResponse, make_session_token

API = 'http://cms.test:1337/api'


def test_public_read_is_forwarded_with_read_token(client, upstream):
    upstream.queue(FakeResponse(200, {'data': []}, headers={'Set-Cookie': 'strapi=1', 'X-Request-Id': 'abc'}))

    r = client.get('/api/cms/strapi/articles?filters[slug][$eq]=x&populate=*',
                   headers={'Cookie': 'other=1', 'Referer': 'https://rampurnews.com/'})

    assert r.status_code == 200
    assert r.get_json() == {'data': []}
    assert r.headers.get('X-Request-Id') == 'abc'
    assert 'Set-Cookie' not in r.headers
    call = upstream.last
    assert call['method'] == 'GET'
    assert call['url'] == f'{API}/articles'
    assert call['params'] == [('filters[slug][$eq]', 'x'), ('populate', '*')]
    assert call['headers']['Authorization'] == 'Bearer read-token'
    lowered = {k.lower() for k in call['headers']}
    assert not lowered & {'cookie', 'referer', 'host'}


def test_upstream_status_is_passed_through(client, upstream):
    upstream.queue(FakeResponse(404, {'error': {'message': 'Not Found'}}))
    r = client.get('/api/cms/strapi/articles/999')
    assert r.status_code == 404
    assert r.get_json()['error']['message'] == 'Not Found'


def test_private_paths_need_a_session(client, upstream):
    for path in ('articles/admin', 'admin/stats', 'upload/files', 'users/me', 'auth/local'):
        assert client.get(f'/api/cms/strapi/{path}').status_code == 401
    assert client.post('/api/cms/strapi/articles', json={'data': {}}).status_code == 401
    assert client.delete('/api/cms/strapi/articles/1').status_code == 401
    assert upstream.calls == []


def test_authenticated_read_uses_session_jwt(admin_client, upstream):
    upstream.queue(FakeResponse(200, {'data': []}))
    r = admin_client.get('/api/cms/strapi/articles/admin?page=2')
    assert r.status_code == 200
    assert upstream.last['url'] == f'{API}/articles/admin'
    assert upstream.last['headers']['Authorization'] == 'Bearer user-jwt'


def test_session_without_jwt_cannot_read_private_paths(client, upstream):
    client.set_cookie('admin_session', make_session_token())
    assert client.get('/api/cms/strapi/users/me').status_code == 401
    assert upstream.calls == []


def test_disallowed_role_is_forbidden(client, upstream):
    client.set_cookie('admin_session', make_session_token(role='public'))
    client.set_cookie('strapi_jwt', 'user-jwt')
    assert client.post('/api/cms/strapi/articles', json={'title': 'x'}).status_code == 403
    assert upstream.calls == []


def test_article_write_is_rewritten_to_content_manager(admin_client, upstream):
    upstream.queue(FakeResponse(200, {'id': 11, 'title': 'नई खबर'}))
    r = admin_client.post('/api/cms/strapi/articles', json={'data': {'title': 'नई खबर'}})

    assert r.status_code == 200
    call = upstream.last
    assert call['url'] == 'http://cms.test:1337/content-manager/collection-types/api::article.article'
    assert call['headers']['Authorization'] == 'Bearer write-token'
    assert json.loads(call['data']) == {'title': 'नई खबर'}


def test_article_update_targets_the_entry(admin_client, upstream):
    upstream.queue(FakeResponse(200, {'id': 5}))
    admin_client.put('/api/cms/strapi/articles/5', json={'title': 'x'})
    assert upstream.last['method'] == 'PUT'
    assert upstream.last['url'] == 'http://cms.test:1337/content-manager/collection-types/api::article.article/5'
    assert json.loads(upstream.last['data']) == {'title': 'x'}


def test_other_collections_keep_rest_surface_and_get_wrapped(admin_client, upstream):
    upstream.queue(FakeResponse(200, {'data': {'id': 1}}))
    admin_client.post('/api/cms/strapi/exams', json={'title': 'TET'})
    call = upstream.last
    assert call['url'] == f'{API}/exams'
    assert call['headers']['Authorization'] == 'Bearer write-token'
    assert json.loads(call['data']) == {'data': {'title': 'TET'}}


def test_write_falls_back_to_session_jwt_without_server_token(app, admin_client, upstream):
    app.config['STRAPI_WRITE_TOKEN'] = None
    upstream.queue(FakeResponse(200, {'data': {'id': 1}}))
    admin_client.post('/api/cms/strapi/articles', json={'title': 'x'})
    call = upstream.last
    assert call['url'] == f'{API}/articles'
    assert call['headers']['Authorization'] == 'Bearer user-jwt'
    assert json.loads(call['data']) == {'data': {'title': 'x'}}


def test_write_without_any_token_is_unauthorized(app, client, upstream):
    app.config['STRAPI_WRITE_TOKEN'] = None
    client.set_cookie('admin_session', make_session_token())
    assert client.delete('/api/cms/strapi/articles/3').status_code == 401
    assert upstream.calls == []


def test_network_failure_is_502(client, upstream):
    upstream.queue(requests.exceptions.ConnectionError('connection refused'))
    r = client.get('/api/cms/strapi/articles')
    assert r.status_code == 502
    assert 'connection refused' in r.get_json()['error']


def test_extended_read_normalizes_list(client, upstream):
    upstream.queue(FakeResponse(200, {
        'data': [{'id': 3, 'attributes': {'slug': 'tet', 'image': {'data': {'attributes': {'url': '/uploads/t.jpg'}}}}}],
        'meta': {'pagination': {'page': 1, 'pageSize': 25, 'pageCount': 1, 'total': 1}},
    }))
    r = client.get('/api/cms/strapi-extended/exams?filters[category][$eq]=state')

    assert r.status_code == 200
    body = r.get_json()
    assert body['data'] == [{'id': '3', 'slug': 'tet', 'image': 'http://cms.test:1337/uploads/t.jpg'}]
    assert body['total'] == 1
    assert ('publicationState', 'live') in upstream.last['params']
    assert upstream.last['headers'] == {'Authorization': 'Bearer read-token'}


def test_extended_read_single_and_passthrough(client, upstream):
    upstream.queue(FakeResponse(200, {'data': [{'id': 1, 'attributes': {'slug': 'a'}}]}))
    r = client.get('/api/cms/strapi-extended/events?single=true&publicationState=preview')
    assert r.get_json() == {'id': '1', 'slug': 'a'}
    assert ('publicationState', 'live') not in upstream.last['params']

    upstream.queue(FakeResponse(403, {'error': {'message': 'Forbidden'}}))
    r = client.get('/api/cms/strapi-extended/events')
    assert r.status_code == 403
    assert r.get_json() == {'error': {'message': 'Forbidden'}}
