"""Backend process entrypoint."""

import logging

import uvicorn

from shared import config


def run() -> None:
    """Configure logging and serve the HTTP API on the configured host and port."""
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run("backend.api:app", host=config.host(), port=config.port())


if __name__ == "__main__":
    run()
