from dataclasses import dataclass
from typing import Optional


@dataclass
class Genre:
    id: int
    name: Optional[str] = None
