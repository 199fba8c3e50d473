from datetime import date
from unittest import mock

import pytest
from marshmallow import missing

from common.exceptions import NotFoundException, ValidationFailure
from conftest import make_film
from directors.model.director import Director
from feed.model.event_type import EventType
from feed.model.operation import Operation
from films.model.film import FilmUpdate
from films.model.film_sort_type import FilmSortType
from genres.model.genre import Genre
from mpa.model.mpa import Mpa
import films.films_service as films_service


@pytest.fixture
def films_dao():
    with mock.patch("films.films_service.films_dao") as dao:
        yield dao


@pytest.fixture
def feed_service():
    with mock.patch("films.films_service.feed_service") as feed:
        yield feed


@pytest.fixture
def users_service():
    with mock.patch("films.films_service.users_service") as users:
        yield users


class TestGetFilm:
    def test_missing_film_is_not_found(self, films_dao):
        films_dao.getFilm.return_value = None

        with pytest.raises(NotFoundException) as exc:
            films_service.getFilmById(42)

        assert exc.value.status_code == 404
        assert "#42" in exc.value.message

    def test_create_returns_the_reloaded_film(self, films_dao):
        stored = make_film(id=5, genres=[Genre(id=1, name="Comedy")])
        films_dao.createFilm.return_value = 5
        films_dao.getFilm.return_value = stored

        created = films_service.createFilm(make_film(id=None))

        assert created is stored
        films_dao.getFilm.assert_called_once_with(5)


class TestUpdateFilm:
    def test_null_description_keeps_stored_value(self, films_dao):
        films_dao.getFilm.return_value = make_film()
        films_dao.updateFilm.return_value = True

        films_service.updateFilm(FilmUpdate(id=1, name="Jaws 2", description=None))

        merged, genre_ids, director_ids = films_dao.updateFilm.call_args.args
        assert merged.name == "Jaws 2"
        assert merged.description == "Shark movie"
        assert merged.release_date == date(1975, 6, 20)
        assert merged.duration == 124
        assert merged.mpa == Mpa(id=2, name="PG")

    def test_blank_name_keeps_stored_name(self, films_dao):
        films_dao.getFilm.return_value = make_film()
        films_dao.updateFilm.return_value = True

        films_service.updateFilm(FilmUpdate(id=1, name="   "))

        assert films_dao.updateFilm.call_args.args[0].name == "Jaws"

    def test_unset_genres_are_kept(self, films_dao):
        films_dao.getFilm.return_value = make_film()
        films_dao.updateFilm.return_value = True

        films_service.updateFilm(FilmUpdate(id=1, genres=None))

        assert films_dao.updateFilm.call_args.args[1] is None

    def test_empty_genres_clear_all(self, films_dao):
        films_dao.getFilm.return_value = make_film()
        films_dao.updateFilm.return_value = True

        films_service.updateFilm(FilmUpdate(id=1, genres=[]))

        assert films_dao.updateFilm.call_args.args[1] == []

    def test_new_genres_and_directors_replace_the_sets(self, films_dao):
        films_dao.getFilm.return_value = make_film()
        films_dao.updateFilm.return_value = True

        films_service.updateFilm(
            FilmUpdate(
                id=1,
                genres=[Genre(id=1), Genre(id=2)],
                directors=[Director(id=3)],
            )
        )

        _, genre_ids, director_ids = films_dao.updateFilm.call_args.args
        assert genre_ids == [1, 2]
        assert director_ids == [3]

    @pytest.mark.parametrize("directors", [missing, None, []])
    def test_unset_or_empty_directors_clear_all(self, films_dao, directors):
        films_dao.getFilm.return_value = make_film()
        films_dao.updateFilm.return_value = True

        films_service.updateFilm(FilmUpdate(id=1, directors=directors))

        assert films_dao.updateFilm.call_args.args[2] == []

    def test_unknown_film_is_not_found(self, films_dao):
        films_dao.getFilm.return_value = None

        with pytest.raises(NotFoundException):
            films_service.updateFilm(FilmUpdate(id=404, name="Nope"))

        films_dao.updateFilm.assert_not_called()


class TestDeleteFilm:
    def test_delete(self, films_dao):
        films_dao.deleteFilm.return_value = True
        films_service.deleteFilm(1)
        films_dao.deleteFilm.assert_called_once_with(1)

    def test_delete_unknown_film_is_not_found(self, films_dao):
        films_dao.deleteFilm.return_value = False
        with pytest.raises(NotFoundException):
            films_service.deleteFilm(1)


class TestLikes:
    def test_liking_twice_records_one_feed_event(
        self, films_dao, feed_service, users_service
    ):
        films_dao.getFilm.return_value = make_film()
        films_dao.addLike.side_effect = [True, False]

        films_service.addLike(1, 7)
        films_service.addLike(1, 7)

        assert films_dao.addLike.call_count == 2
        feed_service.save_feed.assert_called_once_with(
            7, 1, EventType.LIKE, Operation.ADD
        )

    def test_removing_a_missing_like_is_a_no_op(
        self, films_dao, feed_service, users_service
    ):
        films_dao.getFilm.return_value = make_film()
        films_dao.removeLike.return_value = False

        films_service.removeLike(1, 7)

        feed_service.save_feed.assert_not_called()

    def test_removing_a_like_records_a_feed_event(
        self, films_dao, feed_service, users_service
    ):
        films_dao.getFilm.return_value = make_film()
        films_dao.removeLike.return_value = True

        films_service.removeLike(1, 7)

        feed_service.save_feed.assert_called_once_with(
            7, 1, EventType.LIKE, Operation.REMOVE
        )

    def test_like_from_unknown_user_is_not_found(
        self, films_dao, feed_service, users_service
    ):
        films_dao.getFilm.return_value = make_film()
        users_service.getUserById.side_effect = NotFoundException("User #7 not found.")

        with pytest.raises(NotFoundException):
            films_service.addLike(1, 7)

        films_dao.addLike.assert_not_called()


class TestListings:
    def test_popular_passes_filters(self, films_dao):
        films_dao.getPopularFilms.return_value = [make_film()]

        assert len(films_service.getPopularFilms(1, genre_id=4, year=1975)) == 1
        films_dao.getPopularFilms.assert_called_once_with(1, 4, 1975)

    def test_popular_count_must_be_positive(self, films_dao):
        with pytest.raises(ValidationFailure):
            films_service.getPopularFilms(0)

    @pytest.mark.parametrize(
        "sort_by, expected",
        [("year", FilmSortType.YEAR), ("LIKES", FilmSortType.LIKES)],
    )
    def test_director_sort_key_is_case_insensitive(self, films_dao, sort_by, expected):
        with mock.patch("films.films_service.directors_service"):
            films_service.getFilmsByDirector(1, sort_by)

        films_dao.getFilmsByDirector.assert_called_once_with(1, expected)

    def test_unknown_director_sort_key_is_not_found(self, films_dao):
        with mock.patch("films.films_service.directors_service"):
            with pytest.raises(NotFoundException):
                films_service.getFilmsByDirector(1, "rating")

    def test_unknown_director_is_not_found(self, films_dao):
        with mock.patch("films.films_service.directors_service") as directors:
            directors.getDirectorById.side_effect = NotFoundException("nope")
            with pytest.raises(NotFoundException):
                films_service.getFilmsByDirector(99, "year")

        films_dao.getFilmsByDirector.assert_not_called()

    @pytest.mark.parametrize(
        "by, title, director",
        [
            ("title", True, False),
            ("director", False, True),
            ("director,title", True, True),
            ("Title, Director", True, True),
        ],
    )
    def test_search_fields(self, films_dao, by, title, director):
        films_service.searchFilm("jaw", by)

        films_dao.searchFilms.assert_called_once_with(
            "jaw", by_title=title, by_director=director
        )

    def test_search_by_unknown_field_is_rejected(self, films_dao):
        with pytest.raises(ValidationFailure) as exc:
            films_service.searchFilm("jaw", "actor")

        assert "by" in exc.value.errors
        films_dao.searchFilms.assert_not_called()

    def test_common_films_with_yourself_are_rejected(self, films_dao, users_service):
        with pytest.raises(ValidationFailure) as exc:
            films_service.getCommonFilms(4, 4)

        assert "friendId" in exc.value.errors
        films_dao.getCommonFilms.assert_not_called()

    def test_recommendations_require_an_existing_user(self, films_dao, users_service):
        users_service.getUserById.side_effect = NotFoundException("User #3 not found.")

        with pytest.raises(NotFoundException):
            films_service.getRecommendation(3)

        films_dao.getRecommendations.assert_not_called()
