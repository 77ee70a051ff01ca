"""Entry point for running Jeopardy via ``python -m jeopardy``."""

from __future__ import annotations

import logging
import os

import uvicorn

from . import client, ui


def main() -> None:
    """Start the FastAPI-powered Jeopardy web server."""

    logging.basicConfig(
        level=os.environ.get("JEOPARDY_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    client.API_URL = os.environ.get("JEOPARDY_API_URL", client.API_URL)
    ui.LOADING_DELAY = float(os.environ.get("JEOPARDY_LOADING_DELAY", ui.LOADING_DELAY))

    host = os.environ.get("JEOPARDY_HOST", "0.0.0.0")
    port = int(os.environ.get("JEOPARDY_PORT", "8000"))
    uvicorn.run(ui.app, host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
