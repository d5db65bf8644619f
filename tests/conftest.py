import pytest

import app as app_module
from product_model import ProductStore


@pytest.fixture
def store(monkeypatch):
    """Give each test its own freshly seeded product store."""
    fresh = ProductStore.seeded()
    monkeypatch.setattr(app_module, 'product_store', fresh)
    return fresh


@pytest.fixture
def flask_app():
    app_module.app.config.update(TESTING=True)
    return app_module.app


@pytest.fixture
def client(flask_app, store):
    return flask_app.test_client()
