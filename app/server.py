"""Process entry point: serve the API with uvicorn."""

from __future__ import annotations

import uvicorn

from logging_config import build_logging_config
from settings import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=build_logging_config(settings.log_level),
    )


if __name__ == "__main__":
    run()
