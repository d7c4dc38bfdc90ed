def test_login_success_and_me(client):
    rv = client.post('/auth/login', json={'email': 'staff@v254.com', 'password': 'password'})
    assert rv.status_code == 200
    assert rv.get_json()['user']['role'] == 'staff'

    me = client.get('/auth/me')
    assert me.status_code == 200
    assert me.get_json()['user']['email'] == 'staff@v254.com'


def test_login_accepts_form_posts(client):
    rv = client.post('/auth/login', data={'email': 'admin@v254.com', 'password': 'password'})
    assert rv.status_code == 200


def test_login_rejects_wrong_password_and_unknown_email(client):
    rv = client.post('/auth/login', json={'email': 'admin@v254.com', 'password': 'letmein'})
    assert rv.status_code == 401
    assert rv.get_json()['message'] == 'Invalid credentials'

    rv = client.post('/auth/login', json={'email': 'ghost@v254.com', 'password': 'password'})
    assert rv.status_code == 401


def test_login_requires_both_fields(client):
    rv = client.post('/auth/login', json={'email': 'admin@v254.com'})
    assert rv.status_code == 400


def test_protected_routes_return_401_when_logged_out(client):
    for url in ('/dashboard', '/inventory/products', '/inventory/movements', '/backup/export', '/auth/me'):
        rv = client.get(url)
        assert rv.status_code == 401, url
        assert rv.get_json()['success'] is False


def test_logout(logged_in_client):
    rv = logged_in_client.post('/auth/logout')
    assert rv.status_code == 200
    assert logged_in_client.get('/dashboard').status_code == 401


def test_login_is_rate_limited(app, client):
    from stockbook.services.security import rate_limiter

    app.config['LOGIN_MAX_ATTEMPTS'] = 2
    rate_limiter.reset('127.0.0.1')
    try:
        for _ in range(2):
            client.post('/auth/login', json={'email': 'admin@v254.com', 'password': 'bad'})
        rv = client.post('/auth/login', json={'email': 'admin@v254.com', 'password': 'password'})
        assert rv.status_code == 429
    finally:
        rate_limiter.reset('127.0.0.1')


def test_health(client):
    rv = client.get('/health')
    assert rv.status_code == 200
    assert rv.get_json()['status'] == 'healthy'


def test_successful_login_clears_failed_attempts(app, client):
    from stockbook.services.security import rate_limiter

    app.config['LOGIN_MAX_ATTEMPTS'] = 3
    rate_limiter.reset('127.0.0.1')
    try:
        for _ in range(2):
            client.post('/auth/login', json={'email': 'admin@v254.com', 'password': 'bad'})
        assert client.post('/auth/login', json={'email': 'admin@v254.com', 'password': 'password'}).status_code == 200
        assert '127.0.0.1' not in rate_limiter.attempts

        for _ in range(2):
            rv = client.post('/auth/login', json={'email': 'admin@v254.com', 'password': 'bad'})
            assert rv.status_code == 401
    finally:
        rate_limiter.reset('127.0.0.1')


def test_rate_limiter_forgets_idle_identifiers():
    from stockbook.services.security import RateLimiter

    limiter = RateLimiter()
    assert limiter.is_allowed('10.0.0.1', max_attempts=5, window_seconds=300)[0]
    assert '10.0.0.1' in limiter.attempts

    limiter.is_allowed('10.0.0.2', max_attempts=5, window_seconds=0)
    assert '10.0.0.1' not in limiter.attempts


def test_login_rejects_non_string_fields(client):
    rv = client.post('/auth/login', json={'email': ['admin@v254.com'], 'password': 'password'})
    assert rv.status_code == 400
    rv = client.post('/auth/login', json=['admin@v254.com', 'password'])
    assert rv.status_code == 400
