from typing import List, Optional

from common.exceptions import NotFoundException, ValidationFailure
from common.utils.logging_service import logger
from common.utils.utils import is_unset
import directors.directors_service as directors_service
import feed.feed_service as feed_service
from feed.model.event_type import EventType
from feed.model.operation import Operation
import films.films_dao as films_dao
from films.model.film import Film, FilmUpdate
from films.model.film_sort_type import FilmSortType
from films.model.search_field import SearchField
import users.users_service as users_service


def getFilmById(id: int) -> Film:
    film = films_dao.getFilm(id)
    if film is None:
        raise NotFoundException(f"Film #{id} not found.")
    return film


def getAllFilms() -> List[Film]:
    films = films_dao.getFilms()
    logger.debug(f"Loading {len(films)} films.")
    return films


def createFilm(film: Film) -> Film:
    film_id = films_dao.createFilm(film)
    saved = getFilmById(film_id)
    logger.debug(f"Creating new film {saved}.")
    return saved


def updateFilm(update: FilmUpdate) -> Film:
    """
    Merges `update` into the stored film. Unset fields keep their stored
    value, except directors: an unset or empty director list clears them.
    """
    stored = getFilmById(update.id)

    merged = Film(
        id=stored.id,
        name=(
            stored.name
            if is_unset(update.name) or not update.name.strip()
            else update.name
        ),
        description=(
            stored.description if is_unset(update.description) else update.description
        ),
        release_date=(
            stored.release_date
            if is_unset(update.release_date)
            else update.release_date
        ),
        duration=stored.duration if is_unset(update.duration) else update.duration,
        mpa=stored.mpa if is_unset(update.mpa) else update.mpa,
    )

    genre_ids = None if is_unset(update.genres) else [g.id for g in update.genres]
    director_ids = (
        [] if is_unset(update.directors) else [d.id for d in update.directors]
    )

    if not films_dao.updateFilm(merged, genre_ids, director_ids):
        raise NotFoundException(f"Film #{update.id} not found.")

    saved = getFilmById(update.id)
    logger.debug(f"Updating film {saved}.")
    return saved


def deleteFilm(id: int):
    if not films_dao.deleteFilm(id):
        raise NotFoundException(f"Film #{id} not found.")
    logger.debug(f"Deleting film #{id}.")


def addLike(film_id: int, user_id: int):
    getFilmById(film_id)
    users_service.getUserById(user_id)

    if films_dao.addLike(film_id, user_id):
        logger.debug(f"Creating like for film #{film_id} from user #{user_id}.")
        feed_service.save_feed(user_id, film_id, EventType.LIKE, Operation.ADD)
    else:
        logger.debug(
            f"Attempting to create an existing like for film #{film_id} from user #{user_id}."
        )


def removeLike(film_id: int, user_id: int):
    getFilmById(film_id)
    users_service.getUserById(user_id)

    if films_dao.removeLike(film_id, user_id):
        logger.debug(f"Deleting like from film #{film_id} from user #{user_id}.")
        feed_service.save_feed(user_id, film_id, EventType.LIKE, Operation.REMOVE)
    else:
        logger.debug(
            f"Attempting to delete a non-existent like for film #{film_id} from user #{user_id}."
        )


def getPopularFilms(
    count: int = 10, genre_id: Optional[int] = None, year: Optional[int] = None
) -> List[Film]:
    if count <= 0:
        raise ValidationFailure({"count": ["Must be a positive number."]})

    popular = films_dao.getPopularFilms(count, genre_id, year)
    logger.debug(f"Returning {len(popular)} popular films.")
    return popular


def getFilmsByDirector(director_id: int, sort_by: str) -> List[Film]:
    directors_service.getDirectorById(director_id)

    try:
        sort_type = FilmSortType(sort_by.upper())
    except ValueError:
        raise NotFoundException(f"Sorting '{sort_by}' not found.")

    films = films_dao.getFilmsByDirector(director_id, sort_type)
    logger.debug(f"Returning {len(films)} films sorted by {sort_type.value.lower()}.")
    return films


def getCommonFilms(user_id: int, friend_id: int) -> List[Film]:
    if user_id == friend_id:
        raise ValidationFailure({"friendId": ["Must differ from userId."]})
    users_service.getUserById(user_id)
    users_service.getUserById(friend_id)

    common = films_dao.getCommonFilms(user_id, friend_id)
    logger.debug(f"Returning {len(common)} common films.")
    return common


def searchFilm(query: str, by: str = SearchField.TITLE.value) -> List[Film]:
    try:
        fields = {SearchField(part.strip().lower()) for part in by.split(",")}
    except ValueError:
        raise ValidationFailure(
            {"by": [f"Expected a comma-separated list of {', '.join(f.value for f in SearchField)}."]}
        )

    found = films_dao.searchFilms(
        query,
        by_title=SearchField.TITLE in fields,
        by_director=SearchField.DIRECTOR in fields,
    )
    logger.debug(f"Search '{query}' by {by} found {len(found)} films.")
    return found


def getRecommendation(user_id: int) -> List[Film]:
    users_service.getUserById(user_id)

    recommended = films_dao.getRecommendations(user_id)
    logger.debug(f"Recommending {len(recommended)} films to user #{user_id}.")
    return recommended
