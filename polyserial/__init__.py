"""polyserial is a library for JSON and XML serialization through named,
configurable serializers.

Copyright (c) 2025 Felix Geilert
"""

__version__ = "0.1.0"

from .config import (
    ConfigProvider,
    MappingConfigProvider,
    SerializerConfig,
    YamlConfigProvider,
)
from .contract import DataMember, data_contract
from .dispatch import (
    default_registry,
    from_json,
    from_json_stream,
    from_xml,
    from_xml_stream,
    json_serializers,
    set_json_serializers,
    set_xml_serializers,
    to_json,
    to_json_stream,
    to_xml,
    to_xml_stream,
    xml_serializers,
)
from .exceptions import (
    ArgumentNullError,
    ConfigurationError,
    DuplicateSerializerNameError,
    LockedStateError,
    PolyserialError,
    SerializerNotFoundError,
)
from .registry import SerializerRegistry
from .serializers import (
    DataContractJsonSerializer,
    DataContractXmlSerializer,
    DefaultJsonSerializer,
    DefaultXmlSerializer,
    OrjsonJsonSerializer,
    Serializer,
    XmltodictXmlSerializer,
)

__all__ = [
    "__version__",
    "Serializer",
    "SerializerRegistry",
    "DefaultJsonSerializer",
    "DefaultXmlSerializer",
    "DataContractJsonSerializer",
    "DataContractXmlSerializer",
    "OrjsonJsonSerializer",
    "XmltodictXmlSerializer",
    "DataMember",
    "data_contract",
    "ConfigProvider",
    "SerializerConfig",
    "MappingConfigProvider",
    "YamlConfigProvider",
    "default_registry",
    "to_json",
    "to_json_stream",
    "from_json",
    "from_json_stream",
    "to_xml",
    "to_xml_stream",
    "from_xml",
    "from_xml_stream",
    "set_json_serializers",
    "set_xml_serializers",
    "json_serializers",
    "xml_serializers",
    "PolyserialError",
    "ArgumentNullError",
    "LockedStateError",
    "SerializerNotFoundError",
    "DuplicateSerializerNameError",
    "ConfigurationError",
]
