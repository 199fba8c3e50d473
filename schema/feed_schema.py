from marshmallow import Schema, fields

from feed.model.event_type import EventType
from feed.model.operation import Operation


class FeedEventSchema(Schema):
    event_id = fields.Int(data_key="eventId")
    user_id = fields.Int(data_key="userId")
    entity_id = fields.Int(data_key="entityId")
    event_type = fields.Enum(EventType, data_key="eventType")
    operation = fields.Enum(Operation)
    timestamp = fields.Method("get_timestamp")

    def get_timestamp(self, event) -> int:
        """Epoch milliseconds."""
        return int(event.timestamp.timestamp() * 1000)
