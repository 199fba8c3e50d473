from enum import Enum


class FilmSortType(Enum):
    YEAR = "YEAR"
    LIKES = "LIKES"
