from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List

class WireModel(BaseModel):
    """ camelCase on the wire, snake_case in Python """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

class UserDTO(WireModel):
    id: int = Field(alias="_id")
    user_id: str
    socket_id: str

class MessageDTO(WireModel):
    id: int = Field(alias="_id")
    sender_id: str
    receiver_id: str
    text: str
    images: List[str] = []
    seen: bool = False
    created_at: datetime
