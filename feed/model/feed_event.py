from dataclasses import dataclass
from datetime import datetime

from feed.model.event_type import EventType
from feed.model.operation import Operation


@dataclass
class FeedEvent:
    event_id: int
    user_id: int
    entity_id: int
    event_type: EventType
    operation: Operation
    timestamp: datetime
