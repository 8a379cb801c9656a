import logging

import socketio

from chat_backend.core.dto import UserDTO
from chat_backend.core.gateways import UserGateway
from .models.event_models import GET_USERS


class PresenceService:
    """
    Store-backed registry of which socket session belongs to which user.

    Nothing is cached in process: every lookup goes to the users table, so the
    registry is always as current as the last registration. Disconnecting does not
    clear a user's socket id; the stale handle stays until the user registers again.
    """

    def __init__(
            self,
            user_gateway: UserGateway,
            sio: socketio.AsyncServer,
            logger: logging.Logger
    ):
        self.user_gateway = user_gateway
        self.sio = sio
        self.logger = logger

    async def register(self, user_id: str, sid: str) -> UserDTO:
        user = await self.user_gateway.upsert_socket_id(user_id, sid)
        self.logger.info("User %s registered with socket ID %s", user_id, sid)

        await self.broadcast_users()
        return user

    async def list_all(self) -> list[UserDTO]:
        return await self.user_gateway.get_users()

    async def lookup(self, user_id: str) -> UserDTO | None:
        return await self.user_gateway.get_user_by_user_id(user_id)

    async def disconnect(self, sid: str) -> None:
        self.logger.info("Socket %s disconnected", sid)
        await self.broadcast_users()

    async def broadcast_users(self) -> None:
        users = await self.list_all()
        await self.sio.emit(GET_USERS, [user.to_wire() for user in users])
