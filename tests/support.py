"""Shared fixtures: a throwaway SQLite database and a mocked Socket.IO server."""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import socketio
from dishka import Provider, Scope, provide

from chat_backend.config import Config, DBConfig, ServerConfig, LogConfig
from chat_backend.main import make_container


def make_config(directory: str) -> Config:
    db_path = Path(directory) / "chat.db"
    return Config(
        db=DBConfig(url=f"sqlite+aiosqlite:///{db_path}"),
        server=ServerConfig(),
        log=LogConfig(level="DEBUG"),
    )


def make_socket_server() -> MagicMock:
    sio = MagicMock(spec=socketio.AsyncServer)
    sio.emit = AsyncMock()
    return sio


class FakeChannelProvider(Provider):
    def __init__(self, sio):
        super().__init__()
        self.sio = sio

    @provide(scope=Scope.APP)
    def get_socket_server(self) -> socketio.AsyncServer:
        return self.sio


class ContainerTestMixin:
    """Builds a dishka container over a fresh database for every test."""

    async def asyncSetUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.config = make_config(self.tmpdir)
        self.sio = make_socket_server()
        self.container = make_container(self.config, FakeChannelProvider(self.sio))

    async def asyncTearDown(self):
        await self.container.close()
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def emitted(self, event: str) -> list:
        """Calls to sio.emit for one event name, as (data, to) pairs."""
        return [
            (c.args[1], c.kwargs.get("to"))
            for c in self.sio.emit.await_args_list
            if c.args[0] == event
        ]
