import asyncio
import logging
from contextlib import asynccontextmanager

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import socketio
import uvicorn

from chat_backend.config import Config, load_config
from chat_backend.providers import AdaptersProvider, ChannelProvider, GatewaysProvider, ServicesProvider
from chat_backend.services import ChatEvents
from chat_backend.services.routers import UserAPI, MessageAPI

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.dishka_container.close()

def make_container(config: Config, channel_provider: Provider | None = None) -> AsyncContainer:
    return make_async_container(
        AdaptersProvider(config),
        channel_provider or ChannelProvider(),
        GatewaysProvider(),
        ServicesProvider(),
    )

async def create_app(container: AsyncContainer) -> FastAPI:
    config = await container.get(Config)

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    setup_dishka(container, app)

    user_api = await container.get(UserAPI)
    message_api = await container.get(MessageAPI)

    app.include_router(user_api.get_router())
    app.include_router(message_api.get_router())

    return app

async def create_asgi_app(container: AsyncContainer) -> socketio.ASGIApp:
    app = await create_app(container)

    sio = await container.get(socketio.AsyncServer)
    logger = await container.get(logging.Logger)
    ChatEvents(sio=sio, container=container, logger=logger)

    return socketio.ASGIApp(sio, other_asgi_app=app)

def main():
    config = load_config(".env")
    logging.basicConfig(
        level=config.log.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # The database engine is created lazily, inside uvicorn's event loop
    asgi_app = asyncio.run(create_asgi_app(make_container(config)))

    logging.getLogger("chat_backend").info("Server is running on port %s", config.server.port)
    uvicorn.run(
        asgi_app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.log.level.lower()
    )

if __name__ == "__main__":
    main()
