# Token demo: /auth/login hands out a signed token, /auth/home only answers when the
# "Token" header carries a valid one. Failures come back as plain text, not as HTTP errors.

import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import Blueprint, current_app, request

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

HMAC_ALGORITHMS = ['HS256', 'HS384', 'HS512']
PLAIN_TEXT = {'Content-Type': 'text/plain; charset=utf-8'}


def generate_token(secret=None, user=None, expires_in=None, now=None):
    cfg = current_app.config
    secret = secret if secret is not None else cfg['JWT_SECRET_KEY']
    user = user if user is not None else cfg['TOKEN_USER']
    expires_in = expires_in if expires_in is not None else cfg['TOKEN_EXPIRY_SECONDS']
    now = now or datetime.now(timezone.utc)
    claims = {
        'authorized': True,
        'user': user,
        'exp': now + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, secret, algorithm=cfg['JWT_ALGORITHM'])


def validate_token(token, secret=None):
    """Return the token's claims; raises jwt.InvalidTokenError when it does not check out."""
    secret = secret if secret is not None else current_app.config['JWT_SECRET_KEY']
    return jwt.decode(token, secret, algorithms=HMAC_ALGORITHMS)


def is_authorized(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = request.headers.get('Token')
        if token is None:
            return 'Not Authorized', 200, PLAIN_TEXT
        try:
            validate_token(token)
        except jwt.InvalidTokenError as exc:
            logger.info('rejected token: %s', exc)
            return str(exc), 200, PLAIN_TEXT
        return f(*args, **kwargs)
    return decorated_function


@auth_bp.route('/login')
def login():
    try:
        token = generate_token()
    except (jwt.PyJWTError, TypeError) as exc:
        logger.error('Something went wrong: %s', exc)
        return str(exc), 200, PLAIN_TEXT
    return token, 200, PLAIN_TEXT


@auth_bp.route('/home')
@is_authorized
def homepage():
    return 'Welcome to homepage, You must be authorized to see this.', 200, PLAIN_TEXT
