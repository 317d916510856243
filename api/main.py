"""
Person service: FastAPI app factory and process entry point.

Run with `uvicorn main:app --port 8080` or the `person-service` script.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core import db, errors
from core.logging_config import setup_logging
from persons import repository as persons_repository
from persons import router as persons_router

HOST = "0.0.0.0"
PORT = 8080

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process. Any failure here aborts startup.
    pool = await db.create_pool()
    try:
        await db.ping(pool)
        await persons_repository.ensure_schema(pool)
        app.state.pool = pool
        logger.info("startup_complete schema=persons")
        yield
    finally:
        app.state.pool = None
        await pool.close()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="person-service", lifespan=lifespan)
    errors.install_error_handlers(app)
    app.include_router(persons_router.router, tags=["persons"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    logger.info("listening on %s:%s", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
