"""xmltodict-based XML serializer."""

import inspect
from collections.abc import Mapping
from typing import IO, Any, Optional

import msgspec

from ..exceptions import check_not_none
from ..reflection import PUBLIC_MODEL, is_object_type, is_sequence_type, item_type, strip_optional
from .base import normalize_settings, resolve_name
from .settings import XmltodictSettings

try:
    import xmltodict

    HAS_XMLTODICT = True
except ImportError:
    HAS_XMLTODICT = False


def _enc_hook(obj: Any) -> Any:
    return PUBLIC_MODEL.to_builtins(obj)


def _dec_hook(tp: type, obj: Any) -> Any:
    return PUBLIC_MODEL.from_builtins(obj, tp)


def _member_type(tp: Any, key: str) -> Any:
    tp = strip_optional(tp)
    if not is_object_type(tp):
        return None
    for member in PUBLIC_MODEL.members_of(tp):
        if member.key == key:
            return strip_optional(member.type)
    return None


def _sequence_members(type_: Any, names: tuple[str, ...]):
    """Build an xmltodict ``force_list`` callable for ``type_``.

    ``path`` holds the ``(name, attributes)`` pairs of the enclosing elements,
    starting with the root element that stands for ``type_`` itself.
    """

    def force_list(path, key, value):
        if key in names:
            return True
        if not path:
            return False
        tp = type_
        for name, _ in path[1:]:
            tp = _member_type(tp, name)
            if tp is None:
                return False
            if is_sequence_type(tp):
                tp = item_type(tp)
        member_type = _member_type(tp, key)
        return member_type is not None and is_sequence_type(member_type)

    return force_list


class XmltodictXmlSerializer:
    """XML serializer using xmltodict.

    Values are flattened to builtins with msgspec, written with
    ``xmltodict.unparse`` under a root element named after the type, and
    rebuilt with a non-strict ``msgspec.convert`` since all XML text is
    parsed as strings. Repeated elements are read as lists wherever the
    target type declares a sequence member, so single-item lists survive a
    round trip. Names in ``force_list`` are always read as lists.
    """

    def __init__(self, name: str | None = "default", settings: XmltodictSettings | None = None):
        if not HAS_XMLTODICT:
            raise ImportError(
                "xmltodict is required for XmltodictXmlSerializer. "
                "Install with: pip install polyserial[xmltodict]"
            )
        self._name = resolve_name(name)
        self.settings = settings

    @classmethod
    def from_config(
        cls, name: str | None, settings: Mapping[str, Any] | None
    ) -> "XmltodictXmlSerializer":
        """Create a serializer from a config entry."""
        values = normalize_settings(settings)
        return cls(name, msgspec.convert(values, XmltodictSettings) if values else None)

    @property
    def name(self) -> str:
        return self._name

    def serialize_to_stream(self, stream: IO[bytes], item: Any, type_: type) -> None:
        check_not_none(stream=stream, item=item, type_=type_)
        stream.write(self._unparse(item, type_).encode("utf-8"))

    def deserialize_from_stream(self, stream: IO[bytes], type_: type) -> Any:
        check_not_none(stream=stream, type_=type_)
        return self._parse(stream.read(), type_)

    def serialize_to_string(self, item: Any, type_: type) -> str:
        check_not_none(item=item, type_=type_)
        return self._unparse(item, type_)

    def deserialize_from_string(self, data: str, type_: type) -> Any:
        check_not_none(data=data, type_=type_)
        return self._parse(data, type_)

    @property
    def _settings(self) -> XmltodictSettings:
        return self.settings or XmltodictSettings()

    def _unparse(self, item: Any, type_: type) -> str:
        if inspect.isabstract(type_):
            type_ = type(item)
        settings = self._settings
        payload = {PUBLIC_MODEL.type_name(type_): msgspec.to_builtins(item, enc_hook=_enc_hook)}
        return xmltodict.unparse(
            payload,
            encoding="utf-8",
            full_document=settings.full_document,
            pretty=settings.pretty,
            indent=settings.indent,
            attr_prefix=settings.attr_prefix,
        )

    def _parse(self, data: str | bytes, type_: type) -> Any:
        settings = self._settings
        document = xmltodict.parse(
            data,
            attr_prefix=settings.attr_prefix,
            force_list=_sequence_members(type_, settings.force_list),
        )
        (content,) = document.values()
        return msgspec.convert(
            content, Optional[type_], strict=False, dec_hook=_dec_hook
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
