"""Serializer adapters for polyserial."""

from .base import DEFAULT_NAME, Serializer
from .contract_json import DataContractJsonSerializer
from .contract_xml import DataContractXmlSerializer
from .default_json import DefaultJsonSerializer
from .default_xml import DefaultXmlSerializer
from .orjson_serializer import OrjsonJsonSerializer
from .settings import (
    DataContractJsonSettings,
    DataContractXmlSettings,
    JsonSettings,
    OrjsonSettings,
    XmlReaderSettings,
    XmltodictSettings,
    XmlWriterSettings,
)
from .xmltodict_serializer import XmltodictXmlSerializer

__all__ = [
    "DEFAULT_NAME",
    "Serializer",
    "DefaultJsonSerializer",
    "DefaultXmlSerializer",
    "DataContractJsonSerializer",
    "DataContractXmlSerializer",
    "OrjsonJsonSerializer",
    "XmltodictXmlSerializer",
    "JsonSettings",
    "XmlWriterSettings",
    "XmlReaderSettings",
    "DataContractJsonSettings",
    "DataContractXmlSettings",
    "OrjsonSettings",
    "XmltodictSettings",
]

# Adapters that can be named by class name alone in config files
BUILTIN_ADAPTERS: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        DefaultJsonSerializer,
        DefaultXmlSerializer,
        DataContractJsonSerializer,
        DataContractXmlSerializer,
        OrjsonJsonSerializer,
        XmltodictXmlSerializer,
    )
}
