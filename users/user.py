from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from marshmallow import missing


@dataclass
class User:
    id: Optional[int]
    email: str
    login: str
    name: Optional[str]
    birthday: Optional[date]


@dataclass
class UserUpdate:
    """Fields left as `missing` were absent from the request body."""

    id: int
    email: Any = missing
    login: Any = missing
    name: Any = missing
    birthday: Any = missing
