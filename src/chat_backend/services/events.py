from typing import Any
import logging

import socketio
from dishka import AsyncContainer
from pydantic import ValidationError

from .chat import MessageService
from .presence import PresenceService
from .models.event_models import (
    SendMessagePayload, MessageSeenPayload, LastMessagePayload, DATAS, LOG_RELAY_TRIGGER,
    coerce_user_id
)


class ChatEvents:
    """
    Socket.IO event handlers for presence and message delivery.

    Each inbound event runs in its own dishka request scope, so gateways and
    services are created per event exactly like they are per HTTP request.
    Failures are logged and never reported back to the emitting client.

    Attributes:
        sio: Socket.IO server the handlers are bound to
        container: Root dishka container used to open request scopes
        logger: Logger instance for tracking operations
    """

    def __init__(
            self,
            sio: socketio.AsyncServer,
            container: AsyncContainer,
            logger: logging.Logger
    ):
        self.sio = sio
        self.container = container
        self.logger = logger
        self._register_handlers()

    def _register_handlers(self):
        self.sio.on("connect", self.on_connect)
        self.sio.on("addUser", self.on_add_user)
        self.sio.on("sendMessage", self.on_send_message)
        self.sio.on("messageSeen", self.on_message_seen)
        self.sio.on("updateLastMessage", self.on_update_last_message)
        self.sio.on("log", self.on_log)
        self.sio.on("disconnect", self.on_disconnect)

    async def on_connect(self, sid: str, environ: dict, auth: Any = None):
        self.logger.info("A user connected with socket ID: %s", sid)

    async def on_add_user(self, sid: str, user_id: Any):
        try:
            user_id = coerce_user_id(user_id)
        except ValueError as e:
            self.logger.warning("Invalid addUser id from socket %s: %s", sid, e)
            return

        if not user_id:
            self.logger.warning("addUser without a user id from socket %s", sid)
            return

        try:
            async with self.container() as request_container:
                presence = await request_container.get(PresenceService)
                await presence.register(user_id, sid)
        except Exception as e:
            self.logger.error("Error adding user: %s", e, exc_info=True)

    async def on_send_message(self, sid: str, data: Any):
        try:
            payload = SendMessagePayload.model_validate(data)
        except ValidationError as e:
            self.logger.warning("Invalid sendMessage payload from socket %s: %s", sid, e)
            return

        try:
            async with self.container() as request_container:
                messages = await request_container.get(MessageService)
                await messages.send(
                    sender_id=payload.sender_id,
                    receiver_id=payload.receiver_id,
                    text=payload.text,
                    images=payload.images
                )
        except Exception as e:
            self.logger.error("Error saving message: %s", e, exc_info=True)

    async def on_message_seen(self, sid: str, data: Any):
        try:
            payload = MessageSeenPayload.model_validate(data)
        except ValidationError as e:
            self.logger.warning("Invalid messageSeen payload from socket %s: %s", sid, e)
            return

        try:
            async with self.container() as request_container:
                messages = await request_container.get(MessageService)
                await messages.mark_seen(
                    sender_id=payload.sender_id,
                    receiver_id=payload.receiver_id,
                    message_id=payload.message_id
                )
        except Exception as e:
            self.logger.error("Error marking message as seen: %s", e, exc_info=True)

    async def on_update_last_message(self, sid: str, data: Any):
        try:
            payload = LastMessagePayload.model_validate(data)
        except ValidationError as e:
            self.logger.warning("Invalid updateLastMessage payload from socket %s: %s", sid, e)
            return

        try:
            async with self.container() as request_container:
                messages = await request_container.get(MessageService)
                await messages.update_last_message(payload.last_message, payload.last_messages_id)
        except Exception as e:
            self.logger.error("Error relaying last message: %s", e, exc_info=True)

    async def on_log(self, sid: str, data: Any = None):
        self.logger.info("Client log from %s: %r", sid, data)
        if data == LOG_RELAY_TRIGGER:
            await self.sio.emit(DATAS, data)

    async def on_disconnect(self, sid: str, reason: Any = None):
        try:
            async with self.container() as request_container:
                presence = await request_container.get(PresenceService)
                await presence.disconnect(sid)
        except Exception as e:
            self.logger.error("Error removing user: %s", e, exc_info=True)
