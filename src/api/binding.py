"""Bridge between FastAPI requests and the request decoder.

``build_payload`` gathers what the decoder needs from a Starlette request.
``decoded`` and ``entity`` turn a schema and a mode into FastAPI
dependencies that hand handlers a typed value, or raise
``RequestDecodingError`` for the exception handlers to answer.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from loguru import logger

from src.api.constants import FORM_CONTENT_TYPES
from src.core.config import Settings, get_settings
from src.decoding import DecodeMode, RequestDecoder, RequestPayload, TargetSchema


async def build_payload(request: Request) -> RequestPayload:
    """Build a decoder payload from a request.

    Query parameters come first, then string fields of a form body. File
    uploads are not parameters and are skipped.

    Args:
        request: The incoming request.

    Returns:
        RequestPayload: Parameters, body bytes, content type and headers.
    """
    items = list(request.query_params.multi_items())
    body = await request.body()
    content_type = request.headers.get("content-type")

    media_type = content_type.split(";", 1)[0].strip().lower() if content_type else None
    if body and media_type in FORM_CONTENT_TYPES:
        # Starlette replays the cached body to the form parser
        form = await request.form()
        items.extend(
            (name, value) for name, value in form.multi_items() if isinstance(value, str)
        )

    return RequestPayload.from_items(
        items,
        body=body or None,
        content_type=content_type,
        headers=dict(request.headers),
    )


def get_decoder(
    settings: Annotated[Settings, Depends(get_settings)],
) -> RequestDecoder:
    """Provide a decoder configured from the application settings."""
    return RequestDecoder.from_settings(settings)


class RequestEntity[T]:
    """A decoded body together with the request headers.

    Args:
        body: The decoded body value.
        headers: Request headers, names lower-cased.
    """

    def __init__(self, body: T, headers: dict[str, str]) -> None:
        self.body = body
        self.headers = headers

    def __repr__(self) -> str:
        return f"RequestEntity(body={self.body!r})"


def decoded(
    schema: TargetSchema | None, mode: DecodeMode = DecodeMode.PARAMETERS
) -> Callable[..., Awaitable[Any]]:
    """Create a dependency that decodes the request with ``schema``.

    Args:
        schema: Target shape; ``None`` for RAW_BODY mode.
        mode: How the request is interpreted.

    Returns:
        Callable[..., Awaitable[Any]]: A FastAPI dependency returning the
            decoded value.
    """

    async def dependency(
        request: Request,
        decoder: Annotated[RequestDecoder, Depends(get_decoder)],
    ) -> Any:  # noqa: ANN401 - the schema decides the type
        payload = await build_payload(request)
        result = decoder.decode(payload, schema, mode)
        if not result.ok:
            logger.info("Request could not be decoded: {}", result.failure)
        return result.unwrap()

    return dependency


def entity(
    schema: TargetSchema, mode: DecodeMode = DecodeMode.STRUCTURED_BODY
) -> Callable[..., Awaitable[RequestEntity[Any]]]:
    """Create a dependency returning the decoded body with the headers."""

    async def dependency(
        request: Request,
        decoder: Annotated[RequestDecoder, Depends(get_decoder)],
    ) -> RequestEntity[Any]:
        payload = await build_payload(request)
        body = decoder.decode(payload, schema, mode).unwrap()
        return RequestEntity(body, payload.headers)

    return dependency
