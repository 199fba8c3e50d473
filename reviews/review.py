from dataclasses import dataclass
from typing import Any, Optional

from marshmallow import missing


@dataclass
class Review:
    review_id: Optional[int]
    content: str
    is_positive: bool
    user_id: int
    film_id: int
    useful: int = 0


@dataclass
class ReviewUpdate:
    review_id: int
    content: Any = missing
    is_positive: Any = missing
