from typing import List

from common.exceptions import NotFoundException
from common.utils.logging_service import logger
import genres.genres_dao as genres_dao
from genres.model.genre import Genre


def getAllGenres() -> List[Genre]:
    genres = genres_dao.getGenres()
    logger.debug(f"Loading {len(genres)} genres.")
    return genres


def getGenreById(id: int) -> Genre:
    genre = genres_dao.getGenre(id)
    if genre is None:
        raise NotFoundException(f"Genre #{id} not found.")
    return genre
