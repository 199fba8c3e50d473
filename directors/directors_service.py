from typing import List

from common.exceptions import NotFoundException
from common.utils.logging_service import logger
import directors.directors_dao as directors_dao
from directors.model.director import Director


def getAllDirectors() -> List[Director]:
    return directors_dao.getDirectors()


def getDirectorById(id: int) -> Director:
    director = directors_dao.getDirector(id)
    if director is None:
        raise NotFoundException(f"Director #{id} not found.")
    return director


def createDirector(director: Director) -> Director:
    director_id = directors_dao.createDirector(director)
    saved = getDirectorById(director_id)
    logger.debug(f"Creating director {saved}.")
    return saved


def updateDirector(director: Director) -> Director:
    if not directors_dao.updateDirector(director):
        raise NotFoundException(f"Director #{director.id} not found.")
    logger.debug(f"Updating director {director}.")
    return getDirectorById(director.id)


def deleteDirector(id: int):
    if not directors_dao.deleteDirector(id):
        raise NotFoundException(f"Director #{id} not found.")
    logger.debug(f"Deleting director #{id}.")
