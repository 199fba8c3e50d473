from dataclasses import dataclass
from typing import Optional


@dataclass
class Director:
    id: Optional[int]
    name: Optional[str] = None
