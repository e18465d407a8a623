def test_login_page(client):
    response = client.get('/auth/login')
    assert response.status_code == 200
    assert b'Login' in response.data


def test_index_redirects_anonymous_to_login(client):
    response = client.get('/')
    assert response.status_code == 302
    assert '/auth/login' in response.headers['Location']


def test_student_login(client, http):
    http.add('POST', '/api/auth/login', {'token': 'abc', 'role': 'student', 'userId': 's1'})

    response = client.post('/auth/login', data={
        'username': 'alice', 'password': 'pw', 'role': 'student'
    })

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/student/dashboard')
    with client.session_transaction() as sess:
        assert sess['token'] == 'abc'
        assert sess['role'] == 'student'
        assert sess['userId'] == 's1'


def test_login_without_user_id_keeps_username_apart(client, http):
    http.add('POST', '/api/auth/login', {'token': 'abc', 'role': 'admin'})

    response = client.post('/auth/login', data={
        'username': 'root', 'password': 'pw', 'role': 'admin'
    })

    assert response.headers['Location'].endswith('/admin/dashboard')
    with client.session_transaction() as sess:
        assert 'userId' not in sess
        assert sess['username'] == 'root'
        assert sess['_user_id'] == 'root'


def test_login_ignores_offsite_next(client, http):
    http.add('POST', '/api/auth/login', {'token': 'abc', 'role': 'student', 'userId': 's1'})
    response = client.post('/auth/login?next=//evil.example/', data={
        'username': 'alice', 'password': 'pw', 'role': 'student'
    })
    assert response.headers['Location'].endswith('/student/dashboard')


def test_rejected_login_shows_message(client, http):
    http.add('POST', '/api/auth/login', {'message': 'Invalid credentials'}, status=400)

    response = client.post('/auth/login', data={
        'username': 'alice', 'password': 'bad', 'role': 'student'
    })

    assert response.status_code == 200
    assert b'Invalid credentials' in response.data
    with client.session_transaction() as sess:
        assert 'token' not in sess


def test_missing_fields_make_no_call(client, http):
    response = client.post('/auth/login', data={'username': '', 'password': '', 'role': 'student'})
    assert response.status_code == 200
    assert http.calls == []


def test_logout_clears_session(student_client):
    response = student_client.get('/auth/logout', follow_redirects=True)
    assert b'You have been logged out' in response.data
    with student_client.session_transaction() as sess:
        assert 'token' not in sess
        assert 'role' not in sess


def test_student_cannot_open_admin_pages(student_client, http):
    response = student_client.get('/admin/dashboard')
    assert response.status_code == 302
    assert http.calls == []


def test_admin_cannot_open_student_pages(admin_client, http):
    response = admin_client.get('/student/dashboard')
    assert response.status_code == 302
    assert http.calls == []


def test_expired_token_logs_out(student_client, http):
    http.add('GET', '/api/student/courses', {'message': 'Token expired'}, status=401)

    response = student_client.get('/student/courses')

    assert response.status_code == 302
    assert '/auth/login' in response.headers['Location']
    with student_client.session_transaction() as sess:
        assert 'token' not in sess
