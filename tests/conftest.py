import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from rampur_news import create_app
from rampur_news.config import TestConfig
from rampur_news.extensions import db
from rampur_news.providers import configure_cms
from rampur_news.services.session import create_admin_session_token


class FakeResponse:
    """Just enough of `requests.Response` for the code under test."""

    def __init__(self, status_code=200, payload=None, text=None, headers=None):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        if payload is not None:
            self.content = json.dumps(payload).encode('utf-8')
            self.headers.setdefault('Content-Type', 'application/json; charset=utf-8')
        else:
            self.content = (text or '').encode('utf-8')
            if text:
                self.headers.setdefault('Content-Type', 'text/plain')

    @property
    def ok(self):
        return self.status_code < 400

    @property
    def text(self):
        return self.content.decode('utf-8')

    def json(self):
        return json.loads(self.content)


class UpstreamRecorder:
    """Replaces outbound `requests` calls, recording them and replaying queued responses."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, response):
        self.responses.append(response)
        return self

    def __call__(self, method, url, **kwargs):
        self.calls.append({'method': method.upper(), 'url': url, **kwargs})
        if not self.responses:
            return FakeResponse(404, {'error': {'message': 'Not Found'}})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture()
def app():
    configure_cms()
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
    configure_cms()


@pytest.fixture()
def app_ctx(app):
    """The app with its context pushed, for calling providers directly."""
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def upstream(monkeypatch):
    recorder = UpstreamRecorder()
    monkeypatch.setattr(requests, 'request', recorder)
    monkeypatch.setattr(requests, 'get', lambda url, **kw: recorder('GET', url, **kw))
    monkeypatch.setattr(requests, 'post', lambda url, **kw: recorder('POST', url, **kw))
    return recorder


def make_session_token(role='admin', **overrides):
    user = {'id': '7', 'email': 'editor@rampurnews.com', 'role': role, 'name': 'Desk'}
    user.update(overrides)
    return create_admin_session_token(user, TestConfig.ADMIN_SESSION_SECRET)


@pytest.fixture()
def admin_client(client):
    client.set_cookie('admin_session', make_session_token())
    client.set_cookie('strapi_jwt', 'user-jwt')
    return client
