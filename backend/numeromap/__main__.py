import logging

import uvicorn

from .config import settings
from .main import app

logger = logging.getLogger("numeromap.api")


if __name__ == "__main__":
    logger.info("Starting NumeroMap API on %s:%s", settings.api_host, settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level="info")
