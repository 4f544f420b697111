"""orjson-based JSON serializer."""

from collections.abc import Mapping
from typing import IO, Any, Optional

import msgspec

from ..exceptions import check_not_none
from ..reflection import PUBLIC_MODEL
from .base import normalize_settings, resolve_name
from .settings import OrjsonSettings

try:
    import orjson

    HAS_ORJSON = True
except ImportError:
    HAS_ORJSON = False


def _default(obj: Any) -> Any:
    return PUBLIC_MODEL.to_builtins(obj)


def _dec_hook(tp: type, obj: Any) -> Any:
    return PUBLIC_MODEL.from_builtins(obj, tp)


class OrjsonJsonSerializer:
    """JSON serializer using orjson.

    orjson writes the payload; typed values are rebuilt from the parsed
    document with ``msgspec.convert``.
    """

    def __init__(self, name: str | None = "default", settings: OrjsonSettings | None = None):
        if not HAS_ORJSON:
            raise ImportError(
                "orjson is required for OrjsonJsonSerializer. "
                "Install with: pip install polyserial[orjson]"
            )
        self._name = resolve_name(name)
        self.settings = settings
        self.option = _option(settings or OrjsonSettings())

    @classmethod
    def from_config(
        cls, name: str | None, settings: Mapping[str, Any] | None
    ) -> "OrjsonJsonSerializer":
        """Create a serializer from a config entry."""
        values = normalize_settings(settings)
        return cls(name, msgspec.convert(values, OrjsonSettings) if values else None)

    @property
    def name(self) -> str:
        return self._name

    def serialize_to_stream(self, stream: IO[bytes], item: Any, type_: type) -> None:
        check_not_none(stream=stream, item=item, type_=type_)
        stream.write(orjson.dumps(item, default=_default, option=self.option))

    def deserialize_from_stream(self, stream: IO[bytes], type_: type) -> Any:
        check_not_none(stream=stream, type_=type_)
        return self._convert(orjson.loads(stream.read()), type_)

    def serialize_to_string(self, item: Any, type_: type) -> str:
        check_not_none(item=item, type_=type_)
        return orjson.dumps(item, default=_default, option=self.option).decode("utf-8")

    def deserialize_from_string(self, data: str, type_: type) -> Any:
        check_not_none(data=data, type_=type_)
        return self._convert(orjson.loads(data), type_)

    def _convert(self, raw: Any, type_: type) -> Any:
        return msgspec.convert(raw, Optional[type_], dec_hook=_dec_hook)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def _option(settings: OrjsonSettings) -> int:
    option = 0
    if settings.indent_2:
        option |= orjson.OPT_INDENT_2
    if settings.sort_keys:
        option |= orjson.OPT_SORT_KEYS
    if settings.naive_utc:
        option |= orjson.OPT_NAIVE_UTC
    if settings.non_str_keys:
        option |= orjson.OPT_NON_STR_KEYS
    return option
