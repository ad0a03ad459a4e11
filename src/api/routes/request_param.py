"""Request parameter samples.

Each endpoint reads ``username`` and ``age`` from the query string or a
form body, from fully manual to whole-object binding, logs them and
answers ``ok``.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.api.binding import build_payload, decoded
from src.api.constants import OK_BODY, PARAMETER_METHODS
from src.api.schemas.hello import HELLO_DATA, HelloData
from src.decoding import (
    CoercionError,
    DecodeFailure,
    DecodeMode,
    FieldSpec,
    FieldType,
    MapStyle,
    TargetSchema,
    coerce,
)

router = APIRouter(tags=["request-param"], default_response_class=PlainTextResponse)

EXPLICIT_BINDING = TargetSchema(
    [
        FieldSpec(name="member_name", binding="username"),
        FieldSpec(name="member_age", field_type=FieldType.INTEGER, binding="age"),
    ],
    name="explicit_binding",
)

INFERRED_BINDING = TargetSchema(
    [
        FieldSpec(name="username"),
        FieldSpec(name="age", field_type=FieldType.INTEGER),
    ],
    name="inferred_binding",
)

# Plain simple-type arguments bind by name but are not required
IMPLICIT_BINDING = TargetSchema(
    [
        FieldSpec(name="username", required=False),
        FieldSpec(name="age", field_type=FieldType.INTEGER, required=False),
    ],
    name="implicit_binding",
)

REQUIRED_BINDING = TargetSchema(
    [
        FieldSpec(name="username", required=True),
        FieldSpec(name="age", field_type=FieldType.OPTIONAL_INTEGER, required=False),
    ],
    name="required_binding",
)

# Defaults also replace empty values: /request-param-default?username=
DEFAULT_BINDING = TargetSchema(
    [
        FieldSpec(name="username", required=True, default="guest"),
        FieldSpec(
            name="age", field_type=FieldType.INTEGER, required=False, default="-1"
        ),
    ],
    name="default_binding",
)

PARAM_MAP = TargetSchema(
    [FieldSpec(name="param_map", map_style=MapStyle.FIRST)], name="param_map"
)

MULTI_PARAM_MAP = TargetSchema(
    [FieldSpec(name="param_map", map_style=MapStyle.ALL)], name="multi_param_map"
)

HELLO_DATA_BINDING = TargetSchema(
    [
        FieldSpec(name="username", required=False),
        FieldSpec(name="age", field_type=FieldType.INTEGER, required=False),
    ],
    model=HelloData,
)


@router.api_route("/request-param-v1", methods=PARAMETER_METHODS)
async def request_param_v1(request: Request) -> str:
    """Read the parameters off the raw payload and convert age by hand."""
    payload = await build_payload(request)
    username = payload.first("username")
    if "age" not in payload:
        raise DecodeFailure.missing_required("age").to_error()
    try:
        age = coerce(payload.first("age"), FieldType.INTEGER, field="age")
    except CoercionError as e:
        raise DecodeFailure.type_mismatch(e.field, e.detail).to_error(e) from e

    logger.info("username = {}, age = {}", username, age)
    return OK_BODY


@router.api_route("/request-param-v2", methods=PARAMETER_METHODS)
async def request_param_v2(
    params: Annotated[dict[str, Any], Depends(decoded(EXPLICIT_BINDING))],
) -> str:
    """Bind parameters to differently named values with explicit names."""
    logger.info(
        "username = {}, age = {}", params["member_name"], params["member_age"]
    )
    return OK_BODY


@router.api_route("/request-param-v3", methods=PARAMETER_METHODS)
async def request_param_v3(
    params: Annotated[dict[str, Any], Depends(decoded(INFERRED_BINDING))],
) -> str:
    """Bind parameters whose names match the values they fill."""
    logger.info("username = {}, age = {}", params["username"], params["age"])
    return OK_BODY


@router.api_route("/request-param-v4", methods=PARAMETER_METHODS)
async def request_param_v4(
    params: Annotated[dict[str, Any], Depends(decoded(IMPLICIT_BINDING))],
) -> str:
    """Bind simple values without marking them as request parameters.

    A missing ``age`` is a type mismatch: a plain integer cannot be absent.
    """
    logger.info("username = {}, age = {}", params["username"], params["age"])
    return OK_BODY


@router.api_route("/request-param-required", methods=PARAMETER_METHODS)
async def request_param_required(
    params: Annotated[dict[str, Any], Depends(decoded(REQUIRED_BINDING))],
) -> str:
    """Require ``username``; ``age`` may be absent.

    An empty ``username`` counts as present and passes.
    """
    logger.info("username = {}, age = {}", params["username"], params["age"])
    return OK_BODY


@router.api_route("/request-param-default", methods=PARAMETER_METHODS)
async def request_param_default(
    params: Annotated[dict[str, Any], Depends(decoded(DEFAULT_BINDING))],
) -> str:
    """Fall back to ``guest`` and ``-1`` for absent or empty values."""
    logger.info("username = {}, age = {}", params["username"], params["age"])
    return OK_BODY


@router.api_route("/request-param-map", methods=PARAMETER_METHODS)
async def request_param_map(
    params: Annotated[dict[str, Any], Depends(decoded(PARAM_MAP))],
) -> str:
    """Collect every parameter into a map, first value per name."""
    param_map = params["param_map"]
    logger.info(
        "username = {}, age = {}", param_map.get("username"), param_map.get("age")
    )
    return OK_BODY


@router.api_route("/request-param-multi-map", methods=PARAMETER_METHODS)
async def request_param_multi_map(
    params: Annotated[dict[str, Any], Depends(decoded(MULTI_PARAM_MAP))],
) -> str:
    """Collect every parameter into a map of value lists."""
    param_map = params["param_map"]
    logger.info(
        "username = {}, age = {}", param_map.get("username"), param_map.get("age")
    )
    return OK_BODY


@router.api_route("/model-attribute-v1", methods=PARAMETER_METHODS)
async def model_attribute_v1(
    hello_data: Annotated[
        HelloData, Depends(decoded(HELLO_DATA_BINDING, DecodeMode.MODEL_ATTRIBUTE))
    ],
) -> str:
    """Populate a HelloData from parameters with a hand-written schema."""
    logger.info("username = {}, age = {}", hello_data.username, hello_data.age)
    return OK_BODY


@router.api_route("/model-attribute-v2", methods=PARAMETER_METHODS)
async def model_attribute_v2(
    hello_data: Annotated[
        HelloData, Depends(decoded(HELLO_DATA, DecodeMode.MODEL_ATTRIBUTE))
    ],
) -> str:
    """Populate a HelloData from parameters with the schema derived from it."""
    logger.info("username = {}, age = {}", hello_data.username, hello_data.age)
    return OK_BODY
