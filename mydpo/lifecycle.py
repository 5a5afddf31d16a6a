# mydpo/lifecycle.py
import logging

from fastapi import FastAPI

from mydpo.dependencies import init_repositories

logger = logging.getLogger(__name__)


def register_lifecycle(app: FastAPI) -> None:
    @app.on_event("startup")
    def on_startup() -> None:
        logger.info("Application startup begin")
        init_repositories(app)
        logger.info("Application startup completed")
