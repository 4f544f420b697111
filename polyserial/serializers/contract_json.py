"""Data contract JSON serializer."""

from collections.abc import Mapping
from typing import IO, Any

import msgspec

from ..exceptions import check_not_none
from ..reflection import CONTRACT_MODEL
from .base import normalize_settings, resolve_name
from .settings import DataContractJsonSettings


class DataContractJsonSerializer:
    """JSON serializer that only writes explicitly marked data members.

    Types must be decorated with :func:`~polyserial.contract.data_contract`
    and mark their members with :class:`~polyserial.contract.DataMember`.
    Objects are rebuilt without calling ``__init__``.
    """

    def __init__(
        self, name: str | None = "default", settings: DataContractJsonSettings | None = None
    ):
        self._name = resolve_name(name)
        self.settings = settings
        self.encoder = msgspec.json.Encoder()
        self.decoder = msgspec.json.Decoder()

    @classmethod
    def from_config(
        cls, name: str | None, settings: Mapping[str, Any] | None
    ) -> "DataContractJsonSerializer":
        """Create a serializer from a config entry."""
        values = normalize_settings(settings)
        return cls(name, msgspec.convert(values, DataContractJsonSettings) if values else None)

    @property
    def name(self) -> str:
        return self._name

    def serialize_to_stream(self, stream: IO[bytes], item: Any, type_: type) -> None:
        check_not_none(stream=stream, item=item, type_=type_)
        stream.write(self._encode(item))

    def deserialize_from_stream(self, stream: IO[bytes], type_: type) -> Any:
        check_not_none(stream=stream, type_=type_)
        return CONTRACT_MODEL.from_builtins(self.decoder.decode(stream.read()), type_)

    def serialize_to_string(self, item: Any, type_: type) -> str:
        check_not_none(item=item, type_=type_)
        return self._encode(item).decode("utf-8")

    def deserialize_from_string(self, data: str, type_: type) -> Any:
        check_not_none(data=data, type_=type_)
        return CONTRACT_MODEL.from_builtins(self.decoder.decode(data), type_)

    def _encode(self, item: Any) -> bytes:
        settings = self.settings or DataContractJsonSettings()
        payload = CONTRACT_MODEL.to_builtins(item, emit_none=settings.emit_default_values)
        data = self.encoder.encode(payload)
        if settings.indent is not None:
            data = msgspec.json.format(data, indent=settings.indent)
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
