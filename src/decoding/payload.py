"""Raw request input handed to the decoder."""

from collections.abc import Iterable, Mapping, Sequence

from src.core.constants import JSON_CONTENT_TYPES, JSON_SUFFIX
from src.core.types import ParamValues


class BodyAlreadyConsumedError(RuntimeError):
    """The payload's body was read before."""


class RequestPayload:
    """Parameters, body and content type of one inbound request.

    The parameter mapping is copied on construction, so later changes to
    the caller's mapping are not seen. The body is a one-shot resource:
    ``consume_body`` succeeds once.

    Args:
        params: Parameter name to one value or a sequence of values.
        body: Raw body bytes, if the request had a body.
        content_type: Declared ``Content-Type`` header value.
        headers: Request headers, used by handlers that want them.
    """

    def __init__(
        self,
        params: Mapping[str, str | Sequence[str]] | None = None,
        body: bytes | None = None,
        content_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._params: ParamValues = {}
        for name, values in (params or {}).items():
            if isinstance(values, str):
                self._params[name] = [values]
            else:
                self._params[name] = list(values)
        self._body = body
        self._body_consumed = False
        self.content_type = content_type
        self.headers: dict[str, str] = dict(headers or {})

    @classmethod
    def from_items(
        cls,
        items: Iterable[tuple[str, str]],
        body: bytes | None = None,
        content_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> "RequestPayload":
        """Build a payload from ``(name, value)`` pairs in arrival order."""
        params: ParamValues = {}
        for name, value in items:
            params.setdefault(name, []).append(value)
        return cls(params, body=body, content_type=content_type, headers=headers)

    @property
    def params(self) -> ParamValues:
        """A copy of the parameter mapping."""
        return {name: list(values) for name, values in self._params.items()}

    def get_all(self, name: str) -> list[str]:
        """All values supplied for ``name``; empty when absent."""
        return list(self._params.get(name, ()))

    def first(self, name: str) -> str | None:
        """The first value supplied for ``name``, or ``None`` when absent."""
        values = self._params.get(name)
        return values[0] if values else None

    def __contains__(self, name: object) -> bool:
        return bool(self._params.get(name)) if isinstance(name, str) else False

    @property
    def media_type(self) -> str | None:
        """The content type without parameters, lower-cased."""
        if not self.content_type:
            return None
        return self.content_type.split(";", 1)[0].strip().lower() or None

    @property
    def is_json(self) -> bool:
        media_type = self.media_type
        return media_type is not None and (
            media_type in JSON_CONTENT_TYPES or media_type.endswith(JSON_SUFFIX)
        )

    @property
    def body_consumed(self) -> bool:
        return self._body_consumed

    def consume_body(self) -> bytes | None:
        """Hand out the body bytes, once.

        Returns:
            bytes | None: The body, or ``None`` if the request had none.

        Raises:
            BodyAlreadyConsumedError: If the body was consumed before.
        """
        if self._body_consumed:
            raise BodyAlreadyConsumedError("Request body has already been consumed")
        self._body_consumed = True
        body, self._body = self._body, None
        return body

    def __repr__(self) -> str:
        return (
            f"RequestPayload(params={sorted(self._params)}, "
            f"content_type={self.content_type!r}, "
            f"body_consumed={self._body_consumed})"
        )
