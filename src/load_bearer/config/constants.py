"""
Constants for the load-bearer server.

This module defines default values for all configurable parameters of the
server, plus the fixed paths and bodies of the HTTP surface. The defaults are
used as fallback values when neither command-line arguments nor environment
variables are provided.
"""

# Listener defaults
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000

# Server identity defaults
DEFAULT_SERVER_ID_PREFIX = "load-bearer-"

# Access log defaults
DEFAULT_ACCESS_LOG = "true"

# Logging configuration defaults
DEFAULT_LOGGING_TYPE = "prod"
DEFAULT_LOGGING_CONFIG_FILE = ""

# HTTP surface
NULL_RESPONSE_PATH = "/"
DELAYED_RESPONSE_PATH = "/delay"
BLOCKING_RESPONSE_PATH = "/block"

DELAY_PARAMETER = "delay"
# Delays are C ints: parsed values saturate at these bounds.
DELAY_INT_MAX = 2**31 - 1
DELAY_INT_MIN = -(2**31)
SUCCESS_STATUS = 200
NULL_RESPONSE_BODY = b"OK"
WAITED_BODY_TEMPLATE = "Waited {wait} ms"
