"""Run the Bindery sample service with uvicorn."""

import os
from typing import Any

import uvicorn
from loguru import logger

from src.core.config import Settings, get_settings
from src.core.logging import setup_logging

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def uvicorn_log_config() -> dict[str, Any]:
    """Logging dictConfig sending uvicorn's loggers through Loguru."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {"loguru": {"class": "src.core.logging.InterceptHandler"}},
        "loggers": {
            name: {"handlers": ["loguru"], "level": "INFO", "propagate": False}
            for name in UVICORN_LOGGERS
        },
    }


def resolve_port(settings: Settings) -> int:
    """Port to bind: ``PORT`` from the environment wins over the settings."""
    return int(os.environ.get("PORT", settings.api_port))


def main() -> None:
    """Start uvicorn; auto-reload in debug mode."""
    settings = get_settings()
    setup_logging(settings)

    port = resolve_port(settings)
    mode = "development mode with auto-reload" if settings.debug else "production mode"
    logger.info(f"Starting Uvicorn on http://{settings.api_host}:{port} ({mode})")

    # Reload needs the app as an import string
    uvicorn.run(
        "src.api.main:app",
        host=settings.api_host,
        port=port,
        reload=settings.debug,
        log_config=uvicorn_log_config(),
    )


if __name__ == "__main__":
    main()
