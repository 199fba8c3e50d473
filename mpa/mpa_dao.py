from typing import List, Optional
import psycopg
from psycopg.rows import class_row

from common.utils.utils import DB_CONFIG
from mpa.model.mpa import Mpa


def getAllMpa() -> List[Mpa]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Mpa)) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, name FROM mpa ORDER BY id")
            return cur.fetchall()


def getMpa(id: int) -> Optional[Mpa]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Mpa)) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, name FROM mpa WHERE id = %s", [id])
            return cur.fetchone()
