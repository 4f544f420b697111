"""Settings types for the built-in serializers.

Settings are frozen so an adapter's behaviour cannot change after it has
been registered. Each type can be built from a plain mapping (for example a
config file section) with ``msgspec.convert``.
"""

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class JsonSettings:
    """Settings for :class:`DefaultJsonSerializer`."""

    indent: int | None = None  # None writes compact JSON
    order: Literal["deterministic", "sorted"] | None = None
    strict: bool = True


@dataclass(frozen=True)
class XmlWriterSettings:
    """Settings applied when writing XML."""

    encoding: str = "utf-8"
    indent: str | None = None
    xml_declaration: bool = True
    omit_xsi_namespaces: bool = False


@dataclass(frozen=True)
class XmlReaderSettings:
    """Settings applied when reading XML."""

    ignore_unknown_elements: bool = True


@dataclass(frozen=True)
class DefaultXmlConfig:
    """Config-file shape of :class:`DefaultXmlSerializer` settings."""

    namespaces: dict[str, str] | None = None
    writer_settings: XmlWriterSettings | None = None
    reader_settings: XmlReaderSettings | None = None


@dataclass(frozen=True)
class DataContractJsonSettings:
    """Settings for :class:`DataContractJsonSerializer`."""

    indent: int | None = None
    emit_default_values: bool = True


@dataclass(frozen=True)
class DataContractXmlSettings:
    """Settings for :class:`DataContractXmlSerializer`."""

    root_name: str | None = None
    root_namespace: str | None = None
    indent: str | None = None


@dataclass(frozen=True)
class OrjsonSettings:
    """Settings for :class:`OrjsonJsonSerializer`.

    Each flag maps onto the orjson option of the same name.
    """

    indent_2: bool = False
    sort_keys: bool = False
    naive_utc: bool = False
    non_str_keys: bool = False


@dataclass(frozen=True)
class XmltodictSettings:
    """Settings for :class:`XmltodictXmlSerializer`."""

    pretty: bool = False
    indent: str = "\t"
    attr_prefix: str = "@"
    full_document: bool = True
    force_list: tuple[str, ...] = field(default_factory=tuple)
