"""Entry: serve the play query API; its lifespan runs the play worker thread."""
import logging

import uvicorn

from songtracker.config import API_HOST, API_PORT, LOG_LEVEL

if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(levelname)s: %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Serving plays on http://%s:%s/api", API_HOST, API_PORT)
    uvicorn.run(
        "songtracker.api.app:app",
        host=API_HOST,
        port=API_PORT,
        log_level=LOG_LEVEL.lower(),
    )
