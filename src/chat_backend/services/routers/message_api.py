from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from dishka.integrations.fastapi import inject
from dishka import FromDishka
import logging

from ..models.api_models import HistoryRequest, ok_response, error_response
from ..chat import MessageService


class MessageAPI:
    """
    Conversation history endpoint.

    Sending and read receipts happen over Socket.IO; over HTTP a client only
    fetches the history between two users.

    Attributes:
        logger: Logger instance for tracking operations
        message_router: FastAPI router containing message endpoints
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._message_router = APIRouter(tags=["Messages"])
        self._register_endpoints()

    @property
    def message_router(self) -> APIRouter:
        return self._message_router

    def get_router(self) -> APIRouter:
        return self._message_router

    def _register_endpoints(self):
        @self.message_router.post("/msg")
        @inject
        async def get_conversation_history(
                history_data: HistoryRequest,
                messages: FromDishka[MessageService]
        ) -> JSONResponse:
            """
            Retrieve every message exchanged between two users, in both directions.

            Args:
                history_data: Contains sender and receiver ids
                messages: Message service

            Returns:
                200 envelope with messages oldest first, or 500 envelope if the
                store fails
            """
            try:
                history = await messages.history(history_data.sender_id, history_data.receiver_id)
            except Exception as e:
                self.logger.error("Error getting conversation history: %s", e)
                return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

            return ok_response([msg.to_wire() for msg in history])
