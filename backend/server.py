"""Run the rendezvous API under uvicorn."""

import logging
import os

import uvicorn
from dotenv import load_dotenv

from services.settings import get_host, get_log_level, get_port

# Load .env from backend dir (where server.py runs)
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

logger = logging.getLogger(__name__)


def main() -> None:
    log_level = get_log_level()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = get_host()
    port = get_port()
    logger.info("[server] Starting rendezvous API on %s:%d", host, port)
    uvicorn.run("app.main:app", host=host, port=port, log_level=log_level.lower())


if __name__ == "__main__":
    main()
