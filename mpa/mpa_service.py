from typing import List

from common.exceptions import NotFoundException
import mpa.mpa_dao as mpa_dao
from mpa.model.mpa import Mpa


def getAllMpa() -> List[Mpa]:
    return mpa_dao.getAllMpa()


def getMpaById(id: int) -> Mpa:
    mpa = mpa_dao.getMpa(id)
    if mpa is None:
        raise NotFoundException(f"MPA rating #{id} not found.")
    return mpa
