import logging
import os

import uvicorn
from dotenv import load_dotenv

from apps.api.main import app


def run() -> None:
    load_dotenv()
    log_level = os.getenv("FILETREE_API_LOG_LEVEL", "info").lower()
    logging.basicConfig(level=getattr(logging, log_level.upper(), logging.INFO))
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host=host, port=port, log_level=log_level)


if __name__ == "__main__":
    run()
