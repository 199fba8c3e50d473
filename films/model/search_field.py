from enum import Enum


class SearchField(Enum):
    TITLE = "title"
    DIRECTOR = "director"
