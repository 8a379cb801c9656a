from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse
from dishka.integrations.fastapi import inject
from dishka import FromDishka
import logging

from ..models.api_models import LoginRequest, ok_response, error_response
from ..presence import PresenceService
from chat_backend.core.gateways import UserGateway


class UserAPI:
    """
    User and health endpoints.

    Provides the greeting health check, a lookup-only login that confirms a user
    has registered presence at least once, and the full user listing.

    Attributes:
        logger: Logger instance for tracking operations
        user_router: FastAPI router containing user endpoints
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._user_router = APIRouter(tags=["Users"])
        self._register_endpoints()

    @property
    def user_router(self) -> APIRouter:
        return self._user_router

    def get_router(self) -> APIRouter:
        return self._user_router

    def _register_endpoints(self):
        @self.user_router.get("/", response_class=PlainTextResponse)
        async def hello():
            return "hello"

        @self.user_router.post("/login")
        @inject
        async def login(
                login_data: LoginRequest,
                user_gateway: FromDishka[UserGateway]
        ) -> JSONResponse:
            """
            Look up a registered user.

            Args:
                login_data: Contains the user id to look up
                user_gateway: User persistence interface

            Returns:
                200 envelope with the user record, or 404 envelope if the user
                never registered
            """
            try:
                user = await user_gateway.get_user_by_user_id(login_data.user_id)
            except Exception as e:
                self.logger.error("Error during login for %s: %s", login_data.user_id, e)
                return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

            if not user:
                return error_response(status.HTTP_404_NOT_FOUND, "User Not Found")

            return ok_response(user.to_wire())

        @self.user_router.get("/getuser")
        @inject
        async def get_users(presence: FromDishka[PresenceService]) -> JSONResponse:
            try:
                users = await presence.list_all()
            except Exception as e:
                self.logger.error("Error listing users: %s", e)
                return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

            return ok_response([user.to_wire() for user in users])
