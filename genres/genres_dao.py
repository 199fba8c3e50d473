from collections import defaultdict
from typing import Dict, List, Optional
import psycopg
from psycopg.rows import class_row

from common.utils.utils import DB_CONFIG
from genres.model.genre import Genre


def getGenres() -> List[Genre]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Genre)) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, name FROM genres ORDER BY id")
            return cur.fetchall()


def getGenre(id: int) -> Optional[Genre]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Genre)) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, name FROM genres WHERE id = %s", [id])
            return cur.fetchone()


def getGenresByFilmIds(cur, film_ids: List[int]) -> Dict[int, List[Genre]]:
    """
    Resolves the genres of every film in `film_ids` with a single query.
    `cur` must produce dict rows.
    """
    genres = defaultdict(list)
    if not film_ids:
        return genres

    cur.execute(
        """
        SELECT fg.film_id, g.id, g.name
        FROM films_genres fg
        JOIN genres g ON g.id = fg.genre_id
        WHERE fg.film_id = ANY(%s)
        ORDER BY fg.film_id, g.id;
        """,
        (film_ids,),
    )
    for row in cur.fetchall():
        genres[row["film_id"]].append(Genre(id=row["id"], name=row["name"]))
    return genres


def replaceFilmGenres(cur, film_id: int, genre_ids: List[int]):
    deleteFilmGenres(cur, film_id)

    if genre_ids:
        cur.executemany(
            """
            INSERT INTO films_genres (film_id, genre_id)
            VALUES (%s, %s)
            ON CONFLICT (film_id, genre_id) DO NOTHING;
            """,
            [(film_id, genre_id) for genre_id in genre_ids],
        )


def deleteFilmGenres(cur, film_id: int):
    cur.execute("DELETE FROM films_genres WHERE film_id = %s;", (film_id,))
