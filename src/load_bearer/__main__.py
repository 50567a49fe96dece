"""
Main entry point for the load-bearer server.

This module parses the configuration, sets up logging and serves the
load-test endpoints until the process is interrupted.
"""

import asyncio
import logging

from load_bearer.config import ServerContext, get_context
from load_bearer.config.logging_config import configure_logging
from load_bearer.server import LoadBearerServer


async def main(context: ServerContext) -> None:
    """
    Run one server built from the given context until it is cancelled.

    Args:
        context: Configuration context containing all application settings.

    Returns:
        None
    """
    logger: logging.Logger = logging.getLogger(__name__)
    logger.info(f"Starting load-bearer {context.server_id}...")

    server: LoadBearerServer = LoadBearerServer(context)
    await server.serve()


def run() -> None:
    """Console script entry point."""
    try:
        # Parse command-line arguments and environment variables
        context: ServerContext = get_context()

        # Configure logging based on the context
        configure_logging(context)

        asyncio.run(main(context))
    except KeyboardInterrupt:
        logging.info("Shutdown initiated by user (Ctrl+C).")


if __name__ == "__main__":
    run()
