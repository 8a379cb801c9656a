from typing import AsyncIterable
from dishka import Provider, Scope, provide
import socketio
import logging

from chat_backend.config import Config, load_config
from chat_backend.core.db_manager import DatabaseManager
from chat_backend.core.gateways import UserGateway, MessageGateway
from chat_backend.services.chat import MessageService
from chat_backend.services.presence import PresenceService
from chat_backend.services.routers import UserAPI, MessageAPI

class AdaptersProvider(Provider):
    def __init__(self, config: Config | None = None):
        super().__init__()
        self._config = config

    @provide(scope=Scope.APP)
    def get_config(self) -> Config:
        return self._config or load_config(".env")

    @provide(scope=Scope.APP)
    def get_logger(self) -> logging.Logger:
        return logging.getLogger("chat_backend")

    @provide(scope=Scope.APP)
    async def get_db_manager(self, config: Config) -> AsyncIterable[DatabaseManager]:
        db_manager = DatabaseManager(config)
        await db_manager.initialize()
        await db_manager.create_tables()
        yield db_manager
        await db_manager.dispose()

class ChannelProvider(Provider):
    @provide(scope=Scope.APP)
    def get_socket_server(self, config: Config) -> socketio.AsyncServer:
        return socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=config.server.cors_origins,
        )

class GatewaysProvider(Provider):
    @provide(scope=Scope.REQUEST)
    def get_user_gateway(
            self,
            db_manager: DatabaseManager,
            logger: logging.Logger
    ) -> UserGateway:
        return UserGateway(db_manager, logger)

    @provide(scope=Scope.REQUEST)
    def get_message_gateway(
            self,
            db_manager: DatabaseManager,
            logger: logging.Logger
    ) -> MessageGateway:
        return MessageGateway(db_manager, logger)

class ServicesProvider(Provider):
    @provide(scope=Scope.REQUEST)
    def get_presence_service(
            self,
            user_gateway: UserGateway,
            sio: socketio.AsyncServer,
            logger: logging.Logger
    ) -> PresenceService:
        return PresenceService(
            user_gateway=user_gateway,
            sio=sio,
            logger=logger
        )

    @provide(scope=Scope.REQUEST)
    def get_message_service(
            self,
            message_gateway: MessageGateway,
            presence: PresenceService,
            sio: socketio.AsyncServer,
            logger: logging.Logger
    ) -> MessageService:
        return MessageService(
            message_gateway=message_gateway,
            presence=presence,
            sio=sio,
            logger=logger
        )

    @provide(scope=Scope.APP)
    def get_user_api(self, logger: logging.Logger) -> UserAPI:
        return UserAPI(logger=logger)

    @provide(scope=Scope.APP)
    def get_message_api(self, logger: logging.Logger) -> MessageAPI:
        return MessageAPI(logger=logger)
