"""orjson-backed JSON responses.

``ORJSONResponse`` is the application's default response class. Handlers
that return a bound ``HelloData`` and the error handlers both go through
it, so every JSON body is encoded the same way.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ORJSONResponse(JSONResponse):
    """JSON response serialized with orjson, keys sorted."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize. Pydantic models are dumped
                in JSON mode first.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")

        return orjson.dumps(content, option=orjson.OPT_SORT_KEYS)
