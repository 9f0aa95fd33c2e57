"""Application entry point for the QuirkNotes backend server."""

import structlog

from quirknotes.app import App
from quirknotes.config import Config
from quirknotes.logging import setup_logging
from quirknotes.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    structlog.get_logger(__name__).info("starting_server", host=config.host, port=config.port)
    run_server(App(config), config)


if __name__ == "__main__":
    main()
