"""Project defaults and client property keys."""

# Client properties file keys (-f <config file>)
CONNECT_TIMEOUT_KEY = "client.connectTimeout"
OP_TIMEOUT_KEY = "client.opTimeout"
MAX_CONTENT_LENGTH_KEY = "client.maxContentLength"

DEFAULT_CONNECT_TIMEOUT = 30.0
DEFAULT_OP_TIMEOUT = 300.0

# Largest response body accepted from the meta server (bytes).
DEFAULT_MAX_CONTENT_LENGTH = 512 << 20

# Upper bound for the response header block (bytes).
MAX_RESPONSE_HEADER_BYTES = 64 << 10
