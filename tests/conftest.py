import json
from typing import Any, Optional

import pytest
import requests

from portal import create_app
from portal.services.api_client import ApiClient
from portal.services.session_store import SessionStore

BASE_URL = 'http://lms.test'


def make_response(status: int = 200, payload: Any = None, body: Optional[str] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if body is not None:
        response._content = body.encode()
    elif payload is None:
        response._content = b''
    else:
        response._content = json.dumps(payload).encode()
        response.headers['Content-Type'] = 'application/json'
    return response


class FakeHttp:
    """Stands in for requests.Session: records calls, replays canned responses.

    Unregistered routes answer 404 so a missing stub shows up as NotFound.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method: str, path: str, payload: Any = None, status: int = 200,
            body: Optional[str] = None, exc: Optional[Exception] = None):
        self.routes[(method, path)] = (status, payload, body, exc)

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = url[len(BASE_URL):]
        self.calls.append({'method': method, 'path': path, 'json': json, 'headers': headers or {}})
        if (method, path) not in self.routes:
            return make_response(404, {'message': f'No route {method} {path}'})
        status, payload, body, exc = self.routes[(method, path)]
        if exc is not None:
            raise exc
        return make_response(status, payload, body)

    def calls_to(self, method: str, path: str) -> list:
        return [c for c in self.calls if c['method'] == method and c['path'] == path]


def course_payload(completed=(), last_lesson_id=None) -> dict:
    """Course with modules M1 (l1, l2) and M2 (l3)"""
    def lesson(lesson_id, title):
        return {'_id': lesson_id, 'title': title, 'completed': lesson_id in completed, 'locked': False}

    return {
        'modules': [
            {'_id': 'm1', 'title': 'Basics', 'lessons': [lesson('l1', 'Intro'), lesson('l2', 'Variables')]},
            {'_id': 'm2', 'title': 'Advanced', 'lessons': [lesson('l3', 'Functions')]},
        ],
        'lastLessonId': last_lesson_id,
    }


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def store():
    return SessionStore({'token': 'tok-123', 'role': 'student', 'userId': 's1'})


@pytest.fixture
def api(http, store):
    return ApiClient(BASE_URL, store, http=http)


@pytest.fixture
def app(http):
    app = create_app('testing', http_session=http)
    app.config['API_BASE_URL'] = BASE_URL
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, role: str, user_id: str):
    with client.session_transaction() as sess:
        sess['token'] = f'{role}-token'
        sess['role'] = role
        sess['userId'] = user_id
        sess['_user_id'] = user_id
        sess['_fresh'] = True


@pytest.fixture
def student_client(client):
    _login(client, 'student', 's1')
    return client


@pytest.fixture
def admin_client(client):
    _login(client, 'admin', 'a1')
    return client
