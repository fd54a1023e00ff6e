from __future__ import annotations

import logging

from fastapi import FastAPI

from qa_service.config import load_env_files
from qa_service.logging_utils import configure_logging


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    configure_logging()

    application = FastAPI(
        title="Translation QA API",
        version="1.0.0",
    )

    from qa_service.api.routers import qa_analysis_router

    application.include_router(qa_analysis_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logging.getLogger(__name__).info("Translation QA API initialised")
    return application


app = create_app()
