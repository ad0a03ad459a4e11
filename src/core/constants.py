"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Request decoding
DEFAULT_BODY_ENCODING = "utf-8"
DEFAULT_INTEGER_BITS = 32
JSON_CONTENT_TYPES = {"application/json", "text/json"}
JSON_SUFFIX = "+json"
