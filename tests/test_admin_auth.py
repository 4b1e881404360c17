import requests

from conftest import FakeResponse, make_session_token

STRAPI_USER = {
    'id': 7,
    'username': 'desk',
    'email': 'desk@rampurnews.com',
    'blocked': False,
    'role': {'type': 'editor', 'name': 'Editor'},
}


def _login(client, email='Desk@RampurNews.com ', password='secret'):
    return client.post('/api/admin/login', json={'email': email, 'password': password})


def test_login_sets_session_cookies(client, upstream):
    upstream.queue(FakeResponse(200, {'jwt': 'strapi-jwt', 'user': STRAPI_USER}))

    r = _login(client)

    assert r.status_code == 200
    assert r.get_json() == {'user': {'id': '7', 'name': 'desk', 'email': 'desk@rampurnews.com', 'role': 'editor'}}
    call = upstream.last
    assert call['url'] == 'http://cms.test:1337/api/auth/local'
    assert call['json'] == {'identifier': 'desk@rampurnews.com', 'password': 'secret'}

    cookies = r.headers.getlist('Set-Cookie')
    session_cookie = next(c for c in cookies if c.startswith('admin_session='))
    jwt_cookie = next(c for c in cookies if c.startswith('strapi_jwt='))
    for cookie in (session_cookie, jwt_cookie):
        assert 'HttpOnly' in cookie
        assert 'SameSite=Lax' in cookie
        assert 'Max-Age=86400' in cookie
        assert 'Secure' not in cookie
    assert 'strapi_jwt=strapi-jwt' in jwt_cookie


def test_login_requires_credentials(client, upstream):
    assert _login(client, email='', password='x').status_code == 400
    assert client.post('/api/admin/login', json={'email': 'a@b.c'}).status_code == 400
    assert upstream.calls == []


def test_login_without_secret_is_server_error(app, client, upstream):
    app.config['ADMIN_SESSION_SECRET'] = None
    r = _login(client)
    assert r.status_code == 500
    assert 'ADMIN_JWT_SECRET' in r.get_json()['error']


def test_rejected_credentials_are_401(client, upstream):
    upstream.queue(FakeResponse(400, {'error': {'message': 'Invalid identifier or password'}}))
    r = _login(client)
    assert r.status_code == 401
    assert 'create the user' in r.get_json()['error']


def test_upstream_failure_is_502(client, upstream):
    upstream.queue(FakeResponse(500, text='strapi exploded'))
    r = _login(client)
    assert r.status_code == 502
    assert r.get_json()['error'] == 'strapi exploded'

    upstream.queue(requests.exceptions.ConnectTimeout('timed out'))
    assert _login(client).status_code == 502


def test_blocked_and_unknown_roles_are_forbidden(client, upstream):
    upstream.queue(FakeResponse(200, {'jwt': 'j', 'user': dict(STRAPI_USER, blocked=True)}))
    r = _login(client)
    assert r.status_code == 403
    assert r.get_json()['error'] == 'User is disabled'

    upstream.queue(FakeResponse(200, {'jwt': 'j', 'user': dict(STRAPI_USER, role={'type': 'public'})}))
    assert _login(client).status_code == 403


def test_missing_jwt_is_401(client, upstream):
    upstream.queue(FakeResponse(200, {'user': STRAPI_USER}))
    assert _login(client).status_code == 401


def test_me_after_login_refreshes_from_strapi(client, upstream):
    upstream.queue(FakeResponse(200, {'jwt': 'strapi-jwt', 'user': STRAPI_USER}))
    _login(client)
    upstream.queue(FakeResponse(200, dict(STRAPI_USER, username='desk-renamed', role={'name': 'Administrator'})))

    r = client.get('/api/admin/me')

    assert r.status_code == 200
    assert r.get_json()['user'] == {'id': '7', 'name': 'desk-renamed', 'email': 'desk@rampurnews.com',
                                    'role': 'admin'}
    assert upstream.last['url'] == 'http://cms.test:1337/api/users/me'
    assert upstream.last['headers'] == {'Authorization': 'Bearer strapi-jwt'}


def test_me_falls_back_to_session_when_strapi_fails(client, upstream):
    client.set_cookie('admin_session', make_session_token(role='Editor'))
    client.set_cookie('strapi_jwt', 'user-jwt')
    upstream.queue(FakeResponse(401, {'error': {'message': 'expired'}}))

    r = client.get('/api/admin/me')

    assert r.status_code == 200
    assert r.get_json()['user'] == {'id': '7', 'name': 'Desk', 'email': 'editor@rampurnews.com', 'role': 'editor'}


def test_me_without_session_is_401(client, upstream):
    r = client.get('/api/admin/me')
    assert r.status_code == 401
    assert r.get_json() == {'user': None}

    client.set_cookie('admin_session', make_session_token())
    assert client.get('/api/admin/me').status_code == 401

    client.set_cookie('admin_session', 'tampered')
    client.set_cookie('strapi_jwt', 'user-jwt')
    assert client.get('/api/admin/me').status_code == 401
    assert upstream.calls == []


def test_logout_clears_cookies(admin_client):
    r = admin_client.post('/api/admin/logout')
    assert r.status_code == 200
    cookies = r.headers.getlist('Set-Cookie')
    assert any(c.startswith('admin_session=;') for c in cookies)
    assert any(c.startswith('strapi_jwt=;') for c in cookies)
    assert admin_client.get('/api/admin/me').status_code == 401


def test_env_check_reports_booleans_only(client):
    body = client.get('/api/admin/env-check').get_json()
    assert body['hasAdminSessionSecret'] is True
    assert body['hasStrapiApiToken'] is True
    assert body['env'] == 'test'
    assert 'test-session-secret' not in str(body)
