"""ASGI entry point: ``uvicorn main:app``."""

import logging

from api.app import create_app
from config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
