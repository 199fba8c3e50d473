from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

from marshmallow import missing

from directors.model.director import Director
from genres.model.genre import Genre
from mpa.model.mpa import Mpa


@dataclass
class Film:
    id: Optional[int]
    name: str
    description: Optional[str]
    release_date: date
    duration: int
    mpa: Mpa
    genres: List[Genre] = field(default_factory=list)
    directors: List[Director] = field(default_factory=list)
    likes: List[int] = field(default_factory=list)


@dataclass
class FilmUpdate:
    """Fields left as `missing` were absent from the request body."""

    id: int
    name: Any = missing
    description: Any = missing
    release_date: Any = missing
    duration: Any = missing
    mpa: Any = missing
    genres: Any = missing
    directors: Any = missing
