"""
Configuration module for the load-bearer server.

This module parses command-line arguments and environment variables into a
ServerContext. For each option, a command-line argument wins over the
environment variable, which wins over the default in constants.
"""

import argparse
import os
from typing import Any, List, Optional
from uuid import uuid4

from load_bearer.config.constants import (
    DEFAULT_ACCESS_LOG,
    DEFAULT_HOST,
    DEFAULT_LOGGING_CONFIG_FILE,
    DEFAULT_LOGGING_TYPE,
    DEFAULT_PORT,
    DEFAULT_SERVER_ID_PREFIX,
)
from load_bearer.config.server_context import ServerContext


def get_context(argv: Optional[List[str]] = None) -> ServerContext:
    """
    Parse command-line arguments and environment variables to create a configuration context.

    Args:
        argv: Arguments to parse instead of sys.argv[1:].

    Returns:
        ServerContext: A configuration context object containing all parsed settings.
    """
    parser = argparse.ArgumentParser(
        description="A stupidly simple HTTP server for performance and load tests."
    )

    parser.add_argument(
        "--host",
        type=str,
        default=os.getenv("LOAD_BEARER_HOST", DEFAULT_HOST),
        help="Specifies the interface address to listen on.\n"
        "If not provided, the value is read from the LOAD_BEARER_HOST environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_HOST} (all interfaces) is used.",
    )

    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=int(os.getenv("LOAD_BEARER_PORT", DEFAULT_PORT)),
        help="Specifies the TCP port to listen on.\n"
        "If not provided, the value is read from the LOAD_BEARER_PORT environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_PORT} is used.",
    )

    parser.add_argument(
        "-sid",
        "--server-id",
        type=str,
        default=os.getenv("LOAD_BEARER_SERVER_ID", f"{DEFAULT_SERVER_ID_PREFIX}{uuid4()}"),
        help="Specifies the identifier stamped on every log record.\n"
        "If not provided, the value is read from the LOAD_BEARER_SERVER_ID environment variable.\n"
        f"If that is also absent, the default value will be {DEFAULT_SERVER_ID_PREFIX}uuid4().",
    )

    parser.add_argument(
        "-lt",
        "--logging-type",
        type=str,
        default=os.getenv("LOAD_BEARER_LOGGING_TYPE", DEFAULT_LOGGING_TYPE),
        help="Specifies the logging configuration type to use.\n"
        "Allowed values: dev, prod, custom (case insensitive).\n"
        "For 'dev' and 'prod', system will use built-in configurations.\n"
        "For 'custom', the --logging-config-file argument is required.",
    )

    parser.add_argument(
        "-lcf",
        "--logging-config-file",
        type=str,
        default=os.getenv("LOAD_BEARER_LOGGING_CONFIG_FILE", DEFAULT_LOGGING_CONFIG_FILE),
        help="Path to custom logging configuration file.\n"
        "Required when --logging-type is set to 'custom'.",
    )

    parser.add_argument(
        "-al",
        "--access-log",
        type=str,
        default=os.getenv("LOAD_BEARER_ACCESS_LOG", DEFAULT_ACCESS_LOG),
        help="Specifies whether every served request is written to the access log.\n"
        "If not provided, the value is read from the LOAD_BEARER_ACCESS_LOG environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_ACCESS_LOG} is used.",
    )

    args: Any = parser.parse_args(argv)

    access_log = args.access_log.lower() == "true"

    return ServerContext(
        host=args.host,
        port=args.port,
        server_id=args.server_id,
        logging_type=args.logging_type,
        logging_config_file=args.logging_config_file,
        access_log=access_log,
    )
