from dataclasses import dataclass, field
from pathlib import Path
from environs import Env

@dataclass
class DBConfig:
    """ SQLAlchemy async URL, sqlite+aiosqlite by default """
    url: str = "sqlite+aiosqlite:///chat.db"
    echo: bool = False

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

@dataclass
class LogConfig:
    level: str = "INFO"

@dataclass
class Config:
    """ Config """
    db: DBConfig
    server: ServerConfig
    log: LogConfig

def load_config(path: str | None = None) -> Config:
    env = Env()
    if path and Path(path).is_file():
        env.read_env(path, recurse=False)

    return Config(
        db=DBConfig(
            url=env('DATABASE_URL', 'sqlite+aiosqlite:///chat.db'),
            echo=env.bool('DB_ECHO', False)
        ),
        server=ServerConfig(
            host=env('HOST', '0.0.0.0'),
            port=env.int('PORT', 4000),
            cors_origins=env.list('CORS_ORIGINS', ['*'])
        ),
        log=LogConfig(
            level=env('LOG_LEVEL', 'INFO').upper()
        )
    )
