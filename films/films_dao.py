from collections import defaultdict
from typing import Dict, List, Optional
import psycopg
from psycopg.rows import dict_row

from common.utils.utils import DB_CONFIG, foreign_keys_as_not_found, time_it
import directors.directors_dao as directors_dao
import genres.genres_dao as genres_dao
from films.model.film import Film
from films.model.film_sort_type import FilmSortType
from mpa.model.mpa import Mpa


FILM_SELECT = """
    SELECT
        f.id,
        f.name,
        f.description,
        f.release_date,
        f.duration,
        f.mpa_id,
        m.name AS mpa_name
    FROM films f
    JOIN mpa m ON m.id = f.mpa_id
"""

# Only these fixed clauses are ever interpolated into the director query.
DIRECTOR_FILMS_ORDER = {
    FilmSortType.YEAR: "EXTRACT(YEAR FROM f.release_date) ASC, f.id",
    FilmSortType.LIKES: "COUNT(l.user_id) ASC, f.id",
}


def getFilm(id: int) -> Optional[Film]:
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(FILM_SELECT + " WHERE f.id = %s;", [id])
            films = __mapFilms(cur, cur.fetchall())
            return films[0] if films else None


def getFilms() -> List[Film]:
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(FILM_SELECT + " ORDER BY f.id;")
            return __mapFilms(cur, cur.fetchall())


def filmExists(id: int) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT EXISTS (SELECT 1 FROM films WHERE id = %s)", [id])
            return cur.fetchone()[0]


@foreign_keys_as_not_found
def createFilm(film: Film) -> int:
    """
    Inserts the film row and its genre/director links in one transaction,
    so a failure leaves nothing behind.
    """
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO films (name, description, release_date, duration, mpa_id)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING id;
                """,
                [
                    film.name,
                    film.description,
                    film.release_date,
                    film.duration,
                    film.mpa.id,
                ],
            )
            film_id = cur.fetchone()["id"]

            genres_dao.replaceFilmGenres(cur, film_id, [g.id for g in film.genres])
            directors_dao.replaceFilmDirectors(
                cur, film_id, [d.id for d in film.directors]
            )

            return film_id


@foreign_keys_as_not_found
def updateFilm(
    film: Film, genre_ids: Optional[List[int]], director_ids: List[int]
) -> bool:
    """
    Rewrites the film row and its links in one transaction.

    :param genre_ids: new genre set; None leaves the current genres untouched.
    :param director_ids: new director set; an empty list clears it.
    """
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE films
                SET name = %s, description = %s, release_date = %s, duration = %s, mpa_id = %s
                WHERE id = %s;
                """,
                [
                    film.name,
                    film.description,
                    film.release_date,
                    film.duration,
                    film.mpa.id,
                    film.id,
                ],
            )
            if cur.rowcount == 0:
                return False

            if genre_ids is not None:
                if genre_ids:
                    genres_dao.replaceFilmGenres(cur, film.id, genre_ids)
                else:
                    genres_dao.deleteFilmGenres(cur, film.id)

            if director_ids:
                directors_dao.replaceFilmDirectors(cur, film.id, director_ids)
            else:
                directors_dao.deleteFilmDirectors(cur, film.id)

            return True


def deleteFilm(id: int) -> bool:
    # likes, films_genres, films_directors and reviews cascade
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM films WHERE id = %s;", [id])
            return cur.rowcount > 0


@foreign_keys_as_not_found
def addLike(film_id: int, user_id: int) -> bool:
    """Returns False when the like already existed."""
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO likes (film_id, user_id)
                VALUES (%s, %s)
                ON CONFLICT (film_id, user_id) DO NOTHING;
                """,
                (film_id, user_id),
            )
            return cur.rowcount == 1


def removeLike(film_id: int, user_id: int) -> bool:
    """Returns False when there was no like to remove."""
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                "DELETE FROM likes WHERE film_id = %s AND user_id = %s;",
                (film_id, user_id),
            )
            return cur.rowcount == 1


@time_it
def getPopularFilms(
    count: int, genre_id: Optional[int] = None, year: Optional[int] = None
) -> List[Film]:
    query = (
        FILM_SELECT
        + """
    LEFT JOIN likes l ON l.film_id = f.id
    WHERE (%(genre_id)s::bigint IS NULL OR EXISTS (
            SELECT 1 FROM films_genres fg
            WHERE fg.film_id = f.id AND fg.genre_id = %(genre_id)s::bigint))
      AND (%(year)s::integer IS NULL
            OR EXTRACT(YEAR FROM f.release_date) = %(year)s::integer)
    GROUP BY f.id, m.id
    ORDER BY COUNT(l.user_id) DESC, f.id
    LIMIT %(count)s;
    """
    )
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(query, {"genre_id": genre_id, "year": year, "count": count})
            return __mapFilms(cur, cur.fetchall())


def getFilmsByDirector(director_id: int, sort_by: FilmSortType) -> List[Film]:
    query = (
        FILM_SELECT
        + """
    JOIN films_directors fd ON fd.film_id = f.id
    LEFT JOIN likes l ON l.film_id = f.id
    WHERE fd.director_id = %s
    GROUP BY f.id, m.id
    ORDER BY """
        + DIRECTOR_FILMS_ORDER[sort_by]
        + ";"
    )
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(query, [director_id])
            return __mapFilms(cur, cur.fetchall())


def getCommonFilms(user_id: int, friend_id: int) -> List[Film]:
    query = (
        FILM_SELECT
        + """
    JOIN likes ul ON ul.film_id = f.id AND ul.user_id = %(user_id)s
    JOIN likes fl ON fl.film_id = f.id AND fl.user_id = %(friend_id)s
    LEFT JOIN likes l ON l.film_id = f.id
    GROUP BY f.id, m.id
    ORDER BY COUNT(l.user_id) DESC, f.id;
    """
    )
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(query, {"user_id": user_id, "friend_id": friend_id})
            return __mapFilms(cur, cur.fetchall())


def searchFilms(text: str, by_title: bool, by_director: bool) -> List[Film]:
    query = (
        FILM_SELECT
        + """
    LEFT JOIN likes l ON l.film_id = f.id
    WHERE (%(by_title)s AND f.name ILIKE %(pattern)s)
       OR (%(by_director)s AND EXISTS (
            SELECT 1
            FROM films_directors fd
            JOIN directors d ON d.id = fd.director_id
            WHERE fd.film_id = f.id AND d.name ILIKE %(pattern)s))
    GROUP BY f.id, m.id
    ORDER BY COUNT(l.user_id) DESC, f.id;
    """
    )
    params = {
        "pattern": f"%{__escapeLike(text)}%",
        "by_title": by_title,
        "by_director": by_director,
    }
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(query, params)
            return __mapFilms(cur, cur.fetchall())


@time_it
def getRecommendations(user_id: int) -> List[Film]:
    """
    Films liked by users who share at least one like with `user_id`,
    minus the films `user_id` already liked. Films backed by more of those
    users come first.
    """
    query = """
    WITH own_likes AS (
        SELECT film_id FROM likes WHERE user_id = %(user_id)s
    ),
    similar_users AS (
        SELECT DISTINCT l.user_id
        FROM likes l
        JOIN own_likes o ON o.film_id = l.film_id
        WHERE l.user_id <> %(user_id)s
    )
    SELECT
        f.id,
        f.name,
        f.description,
        f.release_date,
        f.duration,
        f.mpa_id,
        m.name AS mpa_name
    FROM films f
    JOIN mpa m ON m.id = f.mpa_id
    JOIN likes sl ON sl.film_id = f.id
    JOIN similar_users su ON su.user_id = sl.user_id
    WHERE f.id NOT IN (SELECT film_id FROM own_likes)
    GROUP BY f.id, m.id
    ORDER BY COUNT(sl.user_id) DESC,
             (SELECT COUNT(*) FROM likes al WHERE al.film_id = f.id) DESC,
             f.id;
    """
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(query, {"user_id": user_id})
            return __mapFilms(cur, cur.fetchall())


def __getLikesByFilmIds(cur, film_ids: List[int]) -> Dict[int, List[int]]:
    likes = defaultdict(list)
    if not film_ids:
        return likes

    cur.execute(
        """
        SELECT film_id, user_id
        FROM likes
        WHERE film_id = ANY(%s)
        ORDER BY film_id, user_id;
        """,
        (film_ids,),
    )
    for row in cur.fetchall():
        likes[row["film_id"]].append(row["user_id"])
    return likes


def __mapFilms(cur, rows) -> List[Film]:
    film_ids = [row["id"] for row in rows]

    genres = genres_dao.getGenresByFilmIds(cur, film_ids)
    directors = directors_dao.getDirectorsByFilmIds(cur, film_ids)
    likes = __getLikesByFilmIds(cur, film_ids)

    return [
        Film(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            release_date=row["release_date"],
            duration=row["duration"],
            mpa=Mpa(id=row["mpa_id"], name=row["mpa_name"]),
            genres=genres.get(row["id"], []),
            directors=directors.get(row["id"], []),
            likes=likes.get(row["id"], []),
        )
        for row in rows
    ]


def __escapeLike(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
