"""JSON request body samples.

The body ``{"username": "hello", "age": 20}`` is read five ways: as raw
bytes, as a string parsed in the handler, bound straight to ``HelloData``,
bound inside an entity that also carries the headers, and bound then
returned as the JSON response.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.api.binding import RequestEntity, build_payload, decoded, entity, get_decoder
from src.api.constants import JSON_MEDIA_TYPE, OK_BODY
from src.api.schemas.hello import HELLO_DATA, HelloData
from src.api.utils.responses import ORJSONResponse
from src.decoding import DecodeMode, RequestDecoder, RequestPayload

router = APIRouter(tags=["request-body-json"], default_response_class=PlainTextResponse)


def _parse_message_body(message_body: str, decoder: RequestDecoder) -> HelloData:
    """Parse a JSON message body read as text into HelloData.

    Raises:
        RequestDecodingError: If the text is not a JSON HelloData.
    """
    payload = RequestPayload(
        body=message_body.encode(decoder.body_encoding),
        content_type=JSON_MEDIA_TYPE,
    )
    return decoder.decode(payload, HELLO_DATA, DecodeMode.STRUCTURED_BODY).unwrap()


@router.post("/request-body-json-v1")
async def request_body_json_v1(
    request: Request,
    decoder: Annotated[RequestDecoder, Depends(get_decoder)],
) -> str:
    """Read the body off the request, then parse it by hand."""
    payload = await build_payload(request)
    message_body = decoder.decode(payload, mode=DecodeMode.RAW_BODY).unwrap()
    logger.info("messageBody = {}", message_body)

    data = _parse_message_body(message_body, decoder)
    logger.info("username = {}, age = {}", data.username, data.age)
    return OK_BODY


@router.post("/request-body-json-v2")
async def request_body_json_v2(
    message_body: Annotated[str, Depends(decoded(None, DecodeMode.RAW_BODY))],
    decoder: Annotated[RequestDecoder, Depends(get_decoder)],
) -> str:
    """Receive the body as a string, then parse it in the handler."""
    data = _parse_message_body(message_body, decoder)
    logger.info("username = {}, age = {}", data.username, data.age)
    return OK_BODY


@router.post("/request-body-json-v3")
async def request_body_json_v3(
    hello_data: Annotated[
        HelloData, Depends(decoded(HELLO_DATA, DecodeMode.STRUCTURED_BODY))
    ],
) -> str:
    """Bind the JSON body straight to HelloData."""
    logger.info("username = {}, age = {}", hello_data.username, hello_data.age)
    return OK_BODY


@router.post("/request-body-json-v4")
async def request_body_json_v4(
    http_entity: Annotated[RequestEntity[HelloData], Depends(entity(HELLO_DATA))],
) -> str:
    """Bind the JSON body inside an entity that also carries the headers."""
    data = http_entity.body
    logger.info(
        "username = {}, age = {}",
        data.username,
        data.age,
        content_type=http_entity.headers.get("content-type"),
    )
    return OK_BODY


@router.post("/request-body-json-v5", response_class=ORJSONResponse)
async def request_body_json_v5(
    hello_data: Annotated[
        HelloData, Depends(decoded(HELLO_DATA, DecodeMode.STRUCTURED_BODY))
    ],
) -> HelloData:
    """Bind the JSON body and send the bound value back as JSON."""
    logger.info("username={}, age={}", hello_data.username, hello_data.age)
    return hello_data
