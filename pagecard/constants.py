"""
Constants for pagecard.

Defaults used by the content reader and the config system.
"""

# Network timeouts (in seconds)
DEFAULT_REQUEST_TIMEOUT = 10

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; pagecard/1.0; +https://github.com/mvader/pagecard)"

# Metadata namespaces
OPEN_GRAPH_PREFIX = "og:"
TWITTER_PREFIX = "twitter:"

# Output
DEFAULT_OUTPUT_FORMAT = "json"
DEFAULT_JSON_INDENT = 2
