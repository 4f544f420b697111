"""msgspec-based default JSON serializer."""

import functools
from collections.abc import Mapping
from typing import IO, Any, Optional

import msgspec

from ..exceptions import check_not_none
from ..reflection import PUBLIC_MODEL
from .base import normalize_settings, resolve_name
from .settings import JsonSettings


def _enc_hook(obj: Any) -> Any:
    # Only reached for types msgspec does not support natively
    return PUBLIC_MODEL.to_builtins(obj)


def _dec_hook(tp: type, obj: Any) -> Any:
    return PUBLIC_MODEL.from_builtins(obj, tp)


class DefaultJsonSerializer:
    """JSON serializer using msgspec.

    Dataclasses, msgspec Structs, attrs classes and builtin types are handled
    by msgspec directly; other classes are serialized through their public
    annotated attributes. Output is UTF-8 without a byte order mark.
    """

    def __init__(self, name: str | None = "default", settings: JsonSettings | None = None):
        self._name = resolve_name(name)
        self.settings = settings
        options = settings or JsonSettings()
        self.encoder = msgspec.json.Encoder(enc_hook=_enc_hook, order=options.order)
        self._decoder_for = functools.lru_cache(maxsize=128)(self._make_decoder)

    @classmethod
    def from_config(
        cls, name: str | None, settings: Mapping[str, Any] | None
    ) -> "DefaultJsonSerializer":
        """Create a serializer from a config entry."""
        values = normalize_settings(settings)
        return cls(name, msgspec.convert(values, JsonSettings) if values else None)

    @property
    def name(self) -> str:
        return self._name

    def serialize_to_stream(self, stream: IO[bytes], item: Any, type_: type) -> None:
        check_not_none(stream=stream, item=item, type_=type_)
        stream.write(self._encode(item))

    def deserialize_from_stream(self, stream: IO[bytes], type_: type) -> Any:
        check_not_none(stream=stream, type_=type_)
        return self._decoder_for(type_).decode(stream.read())

    def serialize_to_string(self, item: Any, type_: type) -> str:
        check_not_none(item=item, type_=type_)
        return self._encode(item).decode("utf-8")

    def deserialize_from_string(self, data: str, type_: type) -> Any:
        check_not_none(data=data, type_=type_)
        return self._decoder_for(type_).decode(data)

    def _encode(self, item: Any) -> bytes:
        data = self.encoder.encode(item)
        if self.settings is not None and self.settings.indent is not None:
            data = msgspec.json.format(data, indent=self.settings.indent)
        return data

    def _make_decoder(self, type_: Any) -> msgspec.json.Decoder:
        strict = self.settings.strict if self.settings is not None else True
        return msgspec.json.Decoder(
            type=Optional[type_], strict=strict, dec_hook=_dec_hook
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
