"""Run the API with uvicorn: ``python -m essay_grader`` or ``essay-grader``."""

from __future__ import annotations

import logging
import os

import uvicorn

logger = logging.getLogger(__name__)


def _resolve_port() -> int:
    value = os.getenv("PORT") or os.getenv("ESSAY_PORT") or "8000"
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid port %r; falling back to 8000", value)
        return 8000


def main() -> None:
    host = os.getenv("HOST", os.getenv("ESSAY_HOST", "0.0.0.0"))
    port = _resolve_port()
    uvicorn.run(
        "essay_grader.main:app",
        host=host,
        port=port,
        log_config=None,
        reload=os.getenv("ESSAY_RELOAD", "0") == "1",
    )


if __name__ == "__main__":
    main()
