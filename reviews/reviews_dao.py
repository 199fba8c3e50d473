from typing import List, Optional
import psycopg
from psycopg.rows import class_row

from common.utils.utils import DB_CONFIG, foreign_keys_as_not_found
from reviews.review import Review

REVIEW_SELECT = """
    SELECT
        r.id AS review_id,
        r.content,
        r.is_positive,
        r.user_id,
        r.film_id,
        COALESCE(SUM(CASE WHEN rr.is_like THEN 1 ELSE -1 END)
                 FILTER (WHERE rr.user_id IS NOT NULL), 0)::integer AS useful
    FROM reviews r
    LEFT JOIN review_reactions rr ON rr.review_id = r.id
"""


def get_review(review_id: int) -> Optional[Review]:
    query = REVIEW_SELECT + " WHERE r.id = %s GROUP BY r.id;"

    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Review)) as conn:
        with conn.cursor() as cur:
            cur.execute(query, (review_id,))
            return cur.fetchone()


def get_reviews(film_id: Optional[int], count: int) -> List[Review]:
    """
    Fetches reviews, the most useful first, optionally for one film only.
    """
    query = (
        REVIEW_SELECT
        + """
    WHERE (%(film_id)s::bigint IS NULL OR r.film_id = %(film_id)s::bigint)
    GROUP BY r.id
    ORDER BY useful DESC, r.id
    LIMIT %(count)s;
    """
    )

    with psycopg.connect(**DB_CONFIG, row_factory=class_row(Review)) as conn:
        with conn.cursor() as cur:
            cur.execute(query, {"film_id": film_id, "count": count})
            return cur.fetchall()


@foreign_keys_as_not_found
def add_review(review: Review) -> int:
    query = """
    INSERT INTO reviews (content, is_positive, user_id, film_id)
    VALUES (%s, %s, %s, %s) RETURNING id;
    """
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                query,
                (review.content, review.is_positive, review.user_id, review.film_id),
            )
            return cur.fetchone()[0]


def update_review(review_id: int, content: str, is_positive: bool) -> bool:
    # author and film are fixed at creation
    query = """
    UPDATE reviews
    SET content = %s, is_positive = %s
    WHERE id = %s;
    """
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(query, (content, is_positive, review_id))
            return cur.rowcount > 0


def delete_review(review_id: int) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM reviews WHERE id = %s;", (review_id,))
            return cur.rowcount > 0


@foreign_keys_as_not_found
def set_reaction(review_id: int, user_id: int, is_like: bool):
    """A user keeps at most one reaction per review; a new one replaces it."""
    query = """
    INSERT INTO review_reactions (review_id, user_id, is_like)
    VALUES (%s, %s, %s)
    ON CONFLICT (review_id, user_id) DO UPDATE SET is_like = EXCLUDED.is_like;
    """
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(query, (review_id, user_id, is_like))


def delete_reaction(review_id: int, user_id: int, is_like: bool) -> bool:
    query = """
    DELETE FROM review_reactions
    WHERE review_id = %s
    AND user_id = %s
    AND is_like = %s;
    """
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(query, (review_id, user_id, is_like))
            return cur.rowcount == 1
