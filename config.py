import os


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'replace-this-with-a-secure-key')
    JSON_SORT_KEYS = False

    # Token demo. The signing secret is fixed on purpose; it is not real authentication.
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', 'mysupersecretkey')
    JWT_ALGORITHM = 'HS256'
    TOKEN_EXPIRY_SECONDS = int(os.environ.get('TOKEN_EXPIRY_SECONDS', 90))
    TOKEN_USER = os.environ.get('TOKEN_USER', 'Elliot Forbes')

    # SQL demo
    DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///products.db')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 8080))
    DEBUG = _env_bool('DEBUG', False)
    THREADED = True
