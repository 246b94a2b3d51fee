"""Application factory for the Channel FastAPI app.

This module exposes `create_app(config: Config) -> FastAPI` which performs
all setup (logging, config loading, storage/service composition and router
registration) so tests can construct isolated apps.

To create an app for production or local runs:

    from channel_lib.main import create_app, Config
    app = create_app(Config())
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from channel_lib.logging_config import configure_logging
from channel_lib.setup import ServerConfig, load_server_config
from channel_lib.storage import create_storage

IN_MEMORY = ":memory:"


@dataclass
class Config:
    data_dir: str = "data"
    # None: server config `upload_dir`, else <data_dir>/uploads
    upload_dir: Optional[str] = None
    # None: <data_dir>/songs.yml; ":memory:" keeps records in memory only
    songs_file: Optional[str] = None
    # None: <data_dir>/config/server_config.yml
    config_path: Optional[str] = None
    storage_backend: str = "file"
    # The app creates the upload root at startup; storage never does.
    create_upload_dir: bool = True
    max_store_attempts: int = 3
    # Already-loaded server config (see `channel_lib.setup.setup`); None reads config_path
    server_config: Optional[ServerConfig] = None


def create_app(config: Config) -> FastAPI:
    """Create and return a configured FastAPI application."""
    data_dir = Path(config.data_dir)
    config_path = Path(config.config_path) if config.config_path else data_dir / "config" / "server_config.yml"
    server_cfg = config.server_config or load_server_config(config_path)
    logger = configure_logging(server_cfg.log_level)

    upload_dir = Path(config.upload_dir or server_cfg.upload_dir or data_dir / "uploads")
    if config.create_upload_dir:
        upload_dir.mkdir(parents=True, exist_ok=True)
    elif not upload_dir.is_dir():
        logger.warning("Upload directory %s does not exist; uploads will fail", upload_dir)

    if config.songs_file == IN_MEMORY:
        songs_file = None
    else:
        songs_file = Path(config.songs_file) if config.songs_file else data_dir / "songs.yml"

    # Compose storage and services
    storage = create_storage(backend=config.storage_backend, root=upload_dir)

    from channel_lib.songs import SongRepository, SongService
    song_repository = SongRepository(songs_file)
    song_service = SongService(
        storage=storage,
        repository=song_repository,
        max_store_attempts=config.max_store_attempts,
        max_upload_bytes=server_cfg.max_upload_bytes,
    )

    from channel_lib.services import ServiceContainer
    container = ServiceContainer()
    container.register_singleton("server_config", server_cfg)
    container.register_singleton("content_storage", storage)
    container.register_singleton("song_repository", song_repository)
    container.register_singleton("song_service", song_service)

    app = FastAPI(title=server_cfg.server_name)
    app.state.container = container

    # Router registration: import routers here to avoid import-time side-effects
    from channel_lib.songs.api import router as songs_router, uploads_router
    from channel_lib.server.api import router as server_router

    app.include_router(songs_router, prefix='/api')
    app.include_router(server_router, prefix='/api')
    app.include_router(uploads_router)

    logger.info("Serving uploads from %s", upload_dir)
    return app
