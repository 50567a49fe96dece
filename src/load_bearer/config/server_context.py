"""
Configuration context for the load-bearer server.

This module defines a data structure that holds all configuration parameters
for one server instance. It replaces process-wide globals: every server is
built from its own context, so several can run side by side.
"""

from typing import NamedTuple


class ServerContext(NamedTuple):
    """
    A data structure containing all configuration parameters for the server.

    Attributes:
        host: Interface address the listening socket binds to.
        port: TCP port the listening socket binds to (0 picks a free port).
        server_id: Unique identifier for this server instance, stamped on log records.
        logging_type: Type of logging configuration to use (dev, prod, or custom).
        logging_config_file: Path to custom logging configuration file (if logging_type is 'custom').
        access_log: Whether aiohttp's per-request access log is emitted.
    """

    host: str
    port: int
    server_id: str
    logging_type: str
    logging_config_file: str
    access_log: bool
