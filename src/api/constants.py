"""API-related constants."""

# HTTP Status Codes
HTTP_500_INTERNAL_SERVER_ERROR = 500

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Request handling
PARAMETER_METHODS = ["GET", "POST"]
FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}
JSON_MEDIA_TYPE = "application/json"

# Response bodies
OK_BODY = "ok"
