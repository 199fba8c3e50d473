from datetime import date

import pytest

from app import create_app
from common.utils.database import init_db
from common.utils.utils import DB_CONFIG
from common.utils.utils_views import check_database
from directors.model.director import Director
from films.model.film import Film
from genres.model.genre import Genre
from mpa.model.mpa import Mpa
from users.user import User


@pytest.fixture
def app():
    app = create_app({"TESTING": True})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(scope="session")
def database_available():
    # init_db drops every table, so only ever run against a throwaway database
    if "test" not in (DB_CONFIG["dbname"] or ""):
        return False
    return check_database()


@pytest.fixture
def db(database_available):
    if not database_available:
        pytest.skip("no PostgreSQL test database (POSTGRES_DB must contain 'test')")
    init_db()


def make_film(**overrides) -> Film:
    values = dict(
        id=1,
        name="Jaws",
        description="Shark movie",
        release_date=date(1975, 6, 20),
        duration=124,
        mpa=Mpa(id=2, name="PG"),
        genres=[Genre(id=4, name="Thriller")],
        directors=[Director(id=1, name="Steven Spielberg")],
        likes=[],
    )
    values.update(overrides)
    return Film(**values)


def make_user(**overrides) -> User:
    values = dict(
        id=1,
        email="chief.brody@amity.gov",
        login="brody",
        name="Martin Brody",
        birthday=date(1940, 3, 12),
    )
    values.update(overrides)
    return User(**values)
