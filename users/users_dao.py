from typing import List, Optional
import psycopg
from psycopg.rows import class_row

from common.utils.utils import (
    DB_CONFIG,
    foreign_keys_as_not_found,
    unique_violation_as_validation_failure,
)
from users.user import User

EMAIL_IN_USE = "Email is already in use."


def getUser(id: int) -> Optional[User]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(User)) as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, email, login, name, birthday FROM users WHERE id = %s",
                [id],
            )
            return cur.fetchone()


def getUsers() -> List[User]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(User)) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, email, login, name, birthday FROM users ORDER BY id")
            return cur.fetchall()


def userExists(id: int) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT EXISTS (SELECT 1 FROM users WHERE id = %s)", [id])
            return cur.fetchone()[0]


def isEmailUsed(email: str, exclude_id: Optional[int] = None) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT EXISTS (
                    SELECT 1 FROM users
                    WHERE lower(email) = lower(%s)
                    AND (%s::bigint IS NULL OR id <> %s::bigint)
                )
                """,
                (email, exclude_id, exclude_id),
            )
            return cur.fetchone()[0]


@unique_violation_as_validation_failure("email", EMAIL_IN_USE)
def createUser(user: User) -> int:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO users (email, login, name, birthday)
                VALUES (%s, %s, %s, %s)
                RETURNING id;
                """,
                [user.email, user.login, user.name, user.birthday],
            )
            return cur.fetchone()[0]


@unique_violation_as_validation_failure("email", EMAIL_IN_USE)
def updateUser(user: User) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE users
                SET email = %s, login = %s, name = %s, birthday = %s
                WHERE id = %s;
                """,
                [user.email, user.login, user.name, user.birthday, user.id],
            )
            return cur.rowcount > 0


def deleteUser(id: int) -> bool:
    # likes, friendships, reviews and feed rows cascade
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM users WHERE id = %s;", [id])
            return cur.rowcount > 0


@foreign_keys_as_not_found
def addFriend(user_id: int, friend_id: int) -> bool:
    """Returns False when `user_id` already lists `friend_id` as a friend."""
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO friendships (user_id, friend_id)
                VALUES (%s, %s)
                ON CONFLICT (user_id, friend_id) DO NOTHING;
                """,
                (user_id, friend_id),
            )
            return cur.rowcount == 1


def removeFriend(user_id: int, friend_id: int) -> bool:
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                DELETE FROM friendships
                WHERE user_id = %s
                AND friend_id = %s;
                """,
                (user_id, friend_id),
            )
            return cur.rowcount == 1


def getFriends(user_id: int) -> List[User]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(User)) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT u.id, u.email, u.login, u.name, u.birthday
                FROM friendships fr
                JOIN users u ON u.id = fr.friend_id
                WHERE fr.user_id = %s
                ORDER BY u.id;
                """,
                (user_id,),
            )
            return cur.fetchall()


def getCommonFriends(user_id: int, other_id: int) -> List[User]:
    with psycopg.connect(**DB_CONFIG, row_factory=class_row(User)) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT u.id, u.email, u.login, u.name, u.birthday
                FROM friendships a
                JOIN friendships b ON b.friend_id = a.friend_id AND b.user_id = %s
                JOIN users u ON u.id = a.friend_id
                WHERE a.user_id = %s
                ORDER BY u.id;
                """,
                (other_id, user_id),
            )
            return cur.fetchall()
