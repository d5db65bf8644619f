from datetime import datetime, timedelta, timezone

import jwt

from auth import generate_token

WELCOME = b'Welcome to homepage, You must be authorized to see this.'


def test_login_issues_hs256_token(client, flask_app):
    resp = client.get('/auth/login')
    assert resp.status_code == 200
    token = resp.get_data(as_text=True)

    header = jwt.get_unverified_header(token)
    assert header['alg'] == 'HS256'
    claims = jwt.decode(token, flask_app.config['JWT_SECRET_KEY'], algorithms=['HS256'])
    assert claims['authorized'] is True
    assert claims['user'] == flask_app.config['TOKEN_USER']
    lifetime = claims['exp'] - datetime.now(timezone.utc).timestamp()
    assert 0 < lifetime <= flask_app.config['TOKEN_EXPIRY_SECONDS']


def test_valid_token_unlocks_homepage(client):
    token = client.get('/auth/login').get_data(as_text=True)
    resp = client.get('/auth/home', headers={'Token': token})
    assert resp.status_code == 200
    assert resp.data == WELCOME


def test_missing_token(client):
    resp = client.get('/auth/home')
    assert resp.data == b'Not Authorized'


def test_tampered_token(client):
    token = client.get('/auth/login').get_data(as_text=True)
    head, payload, signature = token.split('.')
    forged = '.'.join([head, payload, signature[::-1]])
    resp = client.get('/auth/home', headers={'Token': forged})
    assert resp.status_code == 200
    assert resp.data != WELCOME
    assert resp.data


def test_token_signed_with_other_secret(client, flask_app):
    with flask_app.app_context():
        token = generate_token(secret='not-the-secret')
    resp = client.get('/auth/home', headers={'Token': token})
    assert resp.data != WELCOME


def test_expired_token(client, flask_app):
    with flask_app.app_context():
        token = generate_token(now=datetime.now(timezone.utc) - timedelta(hours=1))
    resp = client.get('/auth/home', headers={'Token': token})
    assert b'expired' in resp.data.lower()


def test_unsigned_token_rejected(client):
    token = jwt.encode({'authorized': True}, '', algorithm='none')
    resp = client.get('/auth/home', headers={'Token': token})
    assert resp.data != WELCOME


def test_garbage_token(client):
    resp = client.get('/auth/home', headers={'Token': 'not-a-token'})
    assert resp.data != WELCOME
