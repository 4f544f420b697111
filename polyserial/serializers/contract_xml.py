"""Data contract XML serializer."""

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import IO, Any

import msgspec

from ..contract import get_data_contract
from ..exceptions import check_not_none
from ..reflection import CONTRACT_MODEL
from ._elementtree import XSI_NAMESPACE, ElementReader, ElementWriter, declaration
from .base import normalize_settings, resolve_name
from .settings import DataContractXmlSettings

# Strings are in-memory text, so the string form declares utf-16 while the
# stream form is written as utf-8 without a declaration.
STRING_ENCODING = "utf-16"


class DataContractXmlSerializer:
    """XML serializer that only writes explicitly marked data members.

    The root element is named after the contract and declares the contract
    namespace as the default namespace. Objects are rebuilt without calling
    ``__init__``.
    """

    def __init__(
        self, name: str | None = "default", settings: DataContractXmlSettings | None = None
    ):
        self._name = resolve_name(name)
        self.settings = settings

    @classmethod
    def from_config(
        cls, name: str | None, settings: Mapping[str, Any] | None
    ) -> "DataContractXmlSerializer":
        """Create a serializer from a config entry."""
        values = normalize_settings(settings)
        return cls(name, msgspec.convert(values, DataContractXmlSettings) if values else None)

    @property
    def name(self) -> str:
        return self._name

    def serialize_to_stream(self, stream: IO[bytes], item: Any, type_: type) -> None:
        check_not_none(stream=stream, item=item, type_=type_)
        root = self._build(item, type_)
        stream.write(ET.tostring(root, encoding="unicode").encode("utf-8"))

    def deserialize_from_stream(self, stream: IO[bytes], type_: type) -> Any:
        check_not_none(stream=stream, type_=type_)
        return self._read(ET.parse(stream).getroot(), type_)

    def serialize_to_string(self, item: Any, type_: type) -> str:
        check_not_none(item=item, type_=type_)
        root = self._build(item, type_)
        return declaration(STRING_ENCODING) + ET.tostring(root, encoding="unicode")

    def deserialize_from_string(self, data: str, type_: type) -> Any:
        check_not_none(data=data, type_=type_)
        return self._read(ET.fromstring(data), type_)

    def _root_name(self, type_: type) -> tuple[str, str]:
        settings = self.settings or DataContractXmlSettings()
        contract = get_data_contract(type_)
        if contract is None:
            raise TypeError(f"Type {type_.__qualname__!r} is not marked with @data_contract")
        return (
            settings.root_name or contract.name,
            settings.root_namespace if settings.root_namespace is not None else contract.namespace,
        )

    def _build(self, item: Any, type_: type) -> ET.Element:
        root_name, namespace = self._root_name(type_)
        namespaces = {"": namespace, "i": XSI_NAMESPACE}
        root = ElementWriter(CONTRACT_MODEL, namespaces, nil_prefix="i").build(
            root_name, item, type_
        )
        settings = self.settings or DataContractXmlSettings()
        if settings.indent is not None:
            ET.indent(root, space=settings.indent)
        return root

    def _read(self, root: ET.Element, type_: type) -> Any:
        root_name, _ = self._root_name(type_)
        return ElementReader(CONTRACT_MODEL).read(root, type_, root_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
