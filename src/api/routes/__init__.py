"""Sample endpoints.

- **request_param**: Query and form parameter binding
- **request_body_json**: JSON request body binding
"""

from src.api.routes.request_body_json import router as request_body_json_router
from src.api.routes.request_param import router as request_param_router

__all__ = ["request_body_json_router", "request_param_router"]
