from dataclasses import dataclass
from typing import Optional


@dataclass
class Mpa:
    id: int
    name: Optional[str] = None
