from typing import List
import psycopg
from psycopg.rows import dict_row

from common.utils.utils import DB_CONFIG
from feed.model.event_type import EventType
from feed.model.feed_event import FeedEvent
from feed.model.operation import Operation


def add_event(
    user_id: int, entity_id: int, event_type: EventType, operation: Operation
) -> int:
    query = """
    INSERT INTO feed (user_id, entity_id, event_type, operation, created_at)
    VALUES (%s, %s, %s, %s, NOW()) RETURNING id;
    """
    with psycopg.connect(**DB_CONFIG) as conn:
        with conn.cursor() as cur:
            cur.execute(
                query, (user_id, entity_id, event_type.value, operation.value)
            )
            return cur.fetchone()[0]


def get_events(user_id: int) -> List[FeedEvent]:
    query = """
    SELECT id, user_id, entity_id, event_type, operation, created_at
    FROM feed
    WHERE user_id = %s
    ORDER BY created_at, id;
    """
    with psycopg.connect(**DB_CONFIG, row_factory=dict_row) as conn:
        with conn.cursor() as cur:
            cur.execute(query, (user_id,))
            return [
                FeedEvent(
                    event_id=row["id"],
                    user_id=row["user_id"],
                    entity_id=row["entity_id"],
                    event_type=EventType(row["event_type"]),
                    operation=Operation(row["operation"]),
                    timestamp=row["created_at"],
                )
                for row in cur.fetchall()
            ]
