"""
Logging configuration module for the load-bearer server.

This module configures logging from the ServerContext. It supports built-in
configurations for development and production, and a custom configuration
loaded from a user-supplied JSON file.
"""

import json
import logging.config
import os
from typing import Any, Callable, Dict

from load_bearer.config import ServerContext

# server_id of records created before configure_logging runs.
UNCONFIGURED_SERVER_ID = "-"

RecordFactory = Callable[..., logging.LogRecord]


def configure_logging(context: ServerContext) -> None:
    """
    Configure logging for the application based on the provided configuration.

    Supported logging types:
    - dev: Development logging configuration
    - prod: Production logging configuration
    - custom: Custom logging configuration from a specified file

    Once the configuration is applied, every new log record carries the
    server ID of the context as `server_id`, so formatters can use
    %(server_id)s. Until then records carry UNCONFIGURED_SERVER_ID.

    Args:
        context: Configuration context containing logging settings.

    Raises:
        ValueError: If the logging type is invalid or if a custom logging
            configuration file is not provided when using the 'custom' type.
    """
    logging_type: str = context.logging_type.lower()
    if not logging_type:
        raise ValueError("Logging type must be provided.")
    elif logging_type == "dev":
        file_path = _get_local_package_file_path("logging-config-dev.json")
        _load_logging_config(file_path)
    elif logging_type == "prod":
        file_path = _get_local_package_file_path("logging-config-prod.json")
        _load_logging_config(file_path)
    elif logging_type == "custom":
        if not context.logging_config_file:
            raise ValueError("Custom logging configuration file must be provided.")
        else:
            _load_logging_config(context.logging_config_file)
    else:
        raise ValueError(
            f"Invalid logging type: {context.logging_type}. Allowed values are: dev, prod, custom"
        )

    install_server_id(context.server_id)

    logging.debug(f"Logging configured for server {context.server_id}.")


def _load_logging_config(config_file: str) -> None:
    """
    Load logging configuration from a JSON file and apply it with dictConfig.

    Args:
        config_file: Path to the JSON file containing logging configuration.

    Raises:
        RuntimeError: If the file is not found, contains invalid JSON, or
            if there is any other error loading the configuration.
    """
    try:
        with open(config_file) as f:
            config: Dict[str, Any] = json.load(f)
            logging.config.dictConfig(config)
    except FileNotFoundError as err:
        raise RuntimeError(f"Logging config file not found: {config_file}") from err
    except json.JSONDecodeError as err:
        raise RuntimeError(f"Invalid JSON format in logging config file: {config_file}") from err
    except Exception as err:
        raise RuntimeError(f"Error loading logging config: {str(err)}") from err


def _get_local_package_file_path(config_file: str) -> str:
    """Return the absolute path of a file shipped next to this module."""
    return os.path.join(os.path.dirname(__file__), config_file)


class _ServerIdRecordFactory:
    """
    Log record factory stamping the server ID on every record it creates.

    It wraps whichever factory was installed before it, and stamps records
    at creation time, so records from every logger (aiohttp's included)
    carry the attribute no matter which handler formats them.
    """

    def __init__(self, wrapped: RecordFactory, server_id: str) -> None:
        self._wrapped: RecordFactory = wrapped
        self.server_id: str = server_id

    def __call__(self, *args: Any, **kwargs: Any) -> logging.LogRecord:
        record = self._wrapped(*args, **kwargs)
        record.server_id = self.server_id
        return record


def install_server_id(server_id: str) -> None:
    """
    Make every log record created from now on carry the given server ID.

    The factory is installed once; later calls only change the ID.

    Args:
        server_id: Value for the `server_id` attribute of new records.
    """
    factory = logging.getLogRecordFactory()
    if isinstance(factory, _ServerIdRecordFactory):
        factory.server_id = server_id
    else:
        logging.setLogRecordFactory(_ServerIdRecordFactory(factory, server_id))


install_server_id(UNCONFIGURED_SERVER_ID)
