from collections import defaultdict
from typing import Dict, List, Optional
import psycopg
from psycopg.rows import class_row

from common.utils.utils import DB_CONFIG
from directors.model.director import Director


def getDirectors() -> List[Director]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Director)) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, name FROM directors ORDER BY id")
            return cur.fetchall()


def getDirector(id: int) -> Optional[Director]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Director)) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, name FROM directors WHERE id = %s", [id])
            return cur.fetchone()


def directorExists(id: int) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT EXISTS (SELECT 1 FROM directors WHERE id = %s)", [id])
            return cur.fetchone()[0]


def createDirector(director: Director) -> int:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO directors (name)
                VALUES (%s)
                RETURNING id;
                """,
                [director.name],
            )
            return cur.fetchone()[0]


def updateDirector(director: Director) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                "UPDATE directors SET name = %s WHERE id = %s;",
                [director.name, director.id],
            )
            return cur.rowcount > 0


def deleteDirector(id: int) -> bool:
    # films_directors rows go with it (ON DELETE CASCADE)
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM directors WHERE id = %s;", [id])
            return cur.rowcount > 0


def getDirectorsByFilmIds(cur, film_ids: List[int]) -> Dict[int, List[Director]]:
    directors = defaultdict(list)
    if not film_ids:
        return directors

    cur.execute(
        """
        SELECT fd.film_id, d.id, d.name
        FROM films_directors fd
        JOIN directors d ON d.id = fd.director_id
        WHERE fd.film_id = ANY(%s)
        ORDER BY fd.film_id, d.id;
        """,
        (film_ids,),
    )
    for row in cur.fetchall():
        directors[row["film_id"]].append(Director(id=row["id"], name=row["name"]))
    return directors


def replaceFilmDirectors(cur, film_id: int, director_ids: List[int]):
    deleteFilmDirectors(cur, film_id)

    if director_ids:
        cur.executemany(
            """
            INSERT INTO films_directors (film_id, director_id)
            VALUES (%s, %s)
            ON CONFLICT (film_id, director_id) DO NOTHING;
            """,
            [(film_id, director_id) for director_id in director_ids],
        )


def deleteFilmDirectors(cur, film_id: int):
    cur.execute("DELETE FROM films_directors WHERE film_id = %s;", (film_id,))
