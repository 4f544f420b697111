"""Reflection-based default XML serializer."""

import inspect
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import IO, Any

import msgspec

from ..exceptions import check_not_none
from ..reflection import PUBLIC_MODEL
from ._elementtree import (
    XSD_NAMESPACE,
    XSI_NAMESPACE,
    ElementReader,
    ElementWriter,
    declaration,
)
from .base import normalize_settings, resolve_name
from .settings import DefaultXmlConfig, XmlReaderSettings, XmlWriterSettings


class DefaultXmlSerializer:
    """XML serializer that reflects over public annotated attributes.

    Each attribute becomes a child element named after it; ``None`` values
    are omitted. When the requested type is abstract, serialization uses the
    runtime type of the item instead. Abstract types cannot be deserialized
    and raise ``TypeError``.
    """

    def __init__(
        self,
        name: str | None = "default",
        namespaces: Mapping[str, str] | None = None,
        writer_settings: XmlWriterSettings | None = None,
        reader_settings: XmlReaderSettings | None = None,
    ):
        self._name = resolve_name(name)
        self.namespaces = dict(namespaces) if namespaces is not None else None
        self.writer_settings = writer_settings
        self.reader_settings = reader_settings

    @classmethod
    def from_config(
        cls, name: str | None, settings: Mapping[str, Any] | None
    ) -> "DefaultXmlSerializer":
        """Create a serializer from a config entry."""
        config = msgspec.convert(normalize_settings(settings), DefaultXmlConfig)
        return cls(
            name,
            namespaces=config.namespaces,
            writer_settings=config.writer_settings,
            reader_settings=config.reader_settings,
        )

    @property
    def name(self) -> str:
        return self._name

    def serialize_to_stream(self, stream: IO[bytes], item: Any, type_: type) -> None:
        check_not_none(stream=stream, item=item, type_=type_)
        encoding = self._writer.encoding
        stream.write(self._write(item, type_, encoding).encode(encoding))

    def deserialize_from_stream(self, stream: IO[bytes], type_: type) -> Any:
        check_not_none(stream=stream, type_=type_)
        return self._read(ET.parse(stream).getroot(), type_)

    def serialize_to_string(self, item: Any, type_: type) -> str:
        check_not_none(item=item, type_=type_)
        return self._write(item, type_, self._writer.encoding)

    def deserialize_from_string(self, data: str, type_: type) -> Any:
        check_not_none(data=data, type_=type_)
        return self._read(ET.fromstring(data), type_)

    @property
    def _writer(self) -> XmlWriterSettings:
        return self.writer_settings or XmlWriterSettings()

    def _write(self, item: Any, type_: type, encoding: str) -> str:
        type_ = _check_type(type_, item)
        settings = self._writer
        if self.namespaces is not None:
            namespaces = self.namespaces
        elif settings.omit_xsi_namespaces:
            namespaces = {}
        else:
            namespaces = {"xsi": XSI_NAMESPACE, "xsd": XSD_NAMESPACE}
        writer = ElementWriter(PUBLIC_MODEL, namespaces)
        root = writer.build(PUBLIC_MODEL.type_name(type_), item, type_)
        if settings.indent is not None:
            ET.indent(root, space=settings.indent)
        body = ET.tostring(root, encoding="unicode")
        if not settings.xml_declaration:
            return body
        separator = "\n" if settings.indent is not None else ""
        return declaration(encoding) + separator + body

    def _read(self, root: ET.Element, type_: type) -> Any:
        if inspect.isabstract(type_):
            raise TypeError(f"Cannot deserialize abstract type {type_.__qualname__!r}")
        settings = self.reader_settings or XmlReaderSettings()
        reader = ElementReader(PUBLIC_MODEL, settings.ignore_unknown_elements)
        return reader.read(root, type_, PUBLIC_MODEL.type_name(type_))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def _check_type(type_: type, item: Any) -> type:
    """Return the runtime type of ``item`` when ``type_`` is abstract."""
    return type(item) if inspect.isabstract(type_) else type_
