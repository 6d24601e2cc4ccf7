import pytest
from catalog_api import create_app
from catalog_api.extensions import db as _db


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.drop_all()


@pytest.fixture
def db(app):
    """Database handle; every table is emptied after the test."""
    yield _db
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


@pytest.fixture
def client(app, db):
    return app.test_client()


@pytest.fixture
def product_payload():
    """Factory for a valid product payload; keyword args override fields."""

    def make(**overrides):
        payload = {
            "name": "Shoe",
            "price": 50,
            "category": "Footwear",
            "variants": [{"color": "Red", "size": "M", "stock": 5}],
        }
        payload.update(overrides)
        return payload

    return make
