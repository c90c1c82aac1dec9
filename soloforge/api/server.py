from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def install_request_logging(app: FastAPI) -> None:
    """Log every request at DEBUG; unexpected errors are logged with traceback and re-raised."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        logger.debug("%s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            logger.debug("%s %s - %d (%.3fs)", request.method, request.url.path, response.status_code, process_time)
            return response
        except Exception as e:
            process_time = time.time() - start_time
            logger.exception("%s %s - ERROR after %.3fs: %s", request.method, request.url.path, process_time, str(e))
            raise


def run_app(app: FastAPI, *, name: str, host: str = "0.0.0.0", port: int = 8080) -> None:
    import uvicorn

    # Configure logging for the application
    log_level = os.getenv("LOG_LEVEL", "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("soloforge").setLevel(getattr(logging, log_level, logging.INFO))

    # Map Python logging levels to uvicorn log levels
    uvicorn_log_level = (
        log_level.lower() if log_level.lower() in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )

    logger.info("Starting %s server on %s:%d (log_level=%s)", name, host, port, log_level)
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level)
