from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Annotated, Any

# Outbound event names
GET_USERS = "getUsers"
GET_MESSAGE = "getMessage"
MESSAGE_SEEN = "messageSeen"
GET_LAST_MESSAGE = "getLastMessage"
DATAS = "datas"

LOG_RELAY_TRIGGER = "as"


def coerce_user_id(value: Any) -> str | None:
    """
    User ids travel as strings; integers are accepted and stringified.
    Booleans and any other type are rejected.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"user id must be a string or an integer, got {type(value).__name__}")

def reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("message id must not be a boolean")
    return value


UserId = Annotated[str | None, BeforeValidator(coerce_user_id)]
MessageId = Annotated[int | str | None, BeforeValidator(reject_bool)]


class EventPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

class SendMessagePayload(EventPayload):
    sender_id: UserId = None
    receiver_id: UserId = None
    text: str | None = None
    images: list[str] | None = None

class MessageSeenPayload(EventPayload):
    sender_id: UserId = None
    receiver_id: UserId = None
    message_id: MessageId = None

class LastMessagePayload(EventPayload):
    last_message: Any = None
    last_messages_id: Any = None
