import pytest

from db import init_db
from main import create_app
from tests.factories import CommentFactory


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite file database per test."""
    database = init_db(f"sqlite:///{tmp_path / 'comments.sqlite'}")
    yield database
    database.dispose()


@pytest.fixture
def session(db):
    """Session bound to the factories; rows are committed on create."""
    s = db.new_session()
    CommentFactory.reset_sequence(0)
    CommentFactory._meta.sqlalchemy_session = s
    yield s
    CommentFactory._meta.sqlalchemy_session = None
    s.close()


@pytest.fixture
def app(db):
    app = create_app(db=db)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()
