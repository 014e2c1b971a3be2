"""
Posts & questions service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.tokens import TokenService
from config.settings import Settings, get_settings
from database.session import build_engine, build_session_factory, init_models

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Posts & Questions API",
        version="1.0.0",
        description="Authenticated posts, comments and questions.",
    )

    # Process-wide collaborators, built once and read by dependencies
    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenService(
        settings.jwt_secret,
        expiry_seconds=settings.jwt_expiry_seconds,
        algorithm=settings.jwt_algorithm,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api")
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def on_startup():
        # A failed bootstrap is logged only; requests then fail one by one
        await init_models(engine)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

    return app


if __name__ == "__main__":
    config = get_settings()
    configure_logging(config.debug)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
