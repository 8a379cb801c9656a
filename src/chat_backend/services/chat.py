from typing import Any
import logging

import socketio

from chat_backend.core.dto import MessageDTO
from chat_backend.core.gateways import MessageGateway
from .presence import PresenceService
from .models.event_models import GET_MESSAGE, MESSAGE_SEEN, GET_LAST_MESSAGE


class MessageService:
    """
    Message persistence plus best-effort push to whoever is on the other end.

    Pushes go to the socket id last registered for the target user. There is no
    acknowledgment and no retry: if the user is unknown the message is only stored,
    and if the socket id is stale the emit is simply lost.
    """

    def __init__(
            self,
            message_gateway: MessageGateway,
            presence: PresenceService,
            sio: socketio.AsyncServer,
            logger: logging.Logger
    ):
        self.message_gateway = message_gateway
        self.presence = presence
        self.sio = sio
        self.logger = logger

    async def send(
            self,
            sender_id: str | None,
            receiver_id: str | None,
            text: str | None,
            images: list[str] | None = None
    ) -> MessageDTO | None:
        if not sender_id or not receiver_id or not text:
            self.logger.warning(
                "Missing required fields: senderId=%r receiverId=%r text=%r",
                sender_id, receiver_id, text
            )
            return None

        message = await self.message_gateway.create_message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            text=text,
            images=images
        )

        receiver = await self.presence.lookup(receiver_id)
        if receiver:
            self.logger.info("Sending message %s to socket ID %s", message.id, receiver.socket_id)
            await self.sio.emit(GET_MESSAGE, message.to_wire(), to=receiver.socket_id)
        else:
            self.logger.info("User with ID %s not found, message %s stored only", receiver_id, message.id)

        return message

    async def mark_seen(
            self,
            sender_id: str | None,
            receiver_id: str | None,
            message_id: int | str | None
    ) -> bool:
        """
        Flag a message as seen and tell its sender.

        Returns False when the message does not exist. Marking an already seen
        message again is harmless; the sender is still notified.
        """
        message = None
        try:
            if isinstance(message_id, bool):
                raise TypeError("boolean message id")
            message = await self.message_gateway.get_message_by_id(int(message_id))
        except (TypeError, ValueError):
            self.logger.debug("Malformed message id %r", message_id)

        if message is None:
            self.logger.info("Message with ID %s not found for receiver %s.", message_id, receiver_id)
            return False

        if await self.message_gateway.mark_as_seen(message.id):
            self.logger.debug("Message %s marked as seen", message.id)

        sender = await self.presence.lookup(sender_id) if sender_id else None
        if sender:
            await self.sio.emit(
                MESSAGE_SEEN,
                {"senderId": sender_id, "receiverId": receiver_id, "messageId": message_id},
                to=sender.socket_id
            )

        return True

    async def history(self, sender_id: str, receiver_id: str) -> list[MessageDTO]:
        return await self.message_gateway.get_conversation_history(sender_id, receiver_id)

    async def update_last_message(self, last_message: Any, last_messages_id: Any) -> None:
        await self.sio.emit(
            GET_LAST_MESSAGE,
            {"lastMessage": last_message, "lastMessagesId": last_messages_id}
        )
