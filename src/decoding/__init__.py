"""Request decoding: from raw request data to typed values.

- **payload**: ``RequestPayload``, the per-request input with a one-shot body
- **schema**: ``TargetSchema`` and ``FieldSpec``, the declared target shape
- **coercion**: ``coerce``, the single place raw values become field types
- **failures**: ``DecodeFailure``, the typed failure value
- **decoder**: ``RequestDecoder`` and its decode modes
"""

from src.decoding.coercion import CoercionError, FieldType, ValueSource, coerce
from src.decoding.decoder import DecodeMode, DecodeResult, RequestDecoder, decode
from src.decoding.failures import DecodeFailure, FailureKind
from src.decoding.payload import BodyAlreadyConsumedError, RequestPayload
from src.decoding.schema import FieldSpec, MapStyle, TargetSchema

__all__ = [
    "BodyAlreadyConsumedError",
    "CoercionError",
    "DecodeFailure",
    "DecodeMode",
    "DecodeResult",
    "FailureKind",
    "FieldSpec",
    "FieldType",
    "MapStyle",
    "RequestDecoder",
    "RequestPayload",
    "TargetSchema",
    "ValueSource",
    "coerce",
    "decode",
]
