"""Serialize and deserialize through named serializers.

Every function looks up a serializer by name (``"default"`` unless given)
in a registry and forwards the call to it. Without an explicit
``registry`` argument the process-wide registry is used; it is created on
first use from :func:`~polyserial.config.default_config_provider`.
"""

import threading
from collections.abc import Iterable, Mapping
from typing import IO, Any, TypeVar

from .registry import SerializerRegistry
from .serializers import Serializer
from .serializers.base import DEFAULT_NAME

T = TypeVar("T")

_default_registry: SerializerRegistry | None = None
_default_registry_lock = threading.Lock()


def default_registry() -> SerializerRegistry:
    """Return the process-wide serializer registry."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = SerializerRegistry()
    return _default_registry


def set_json_serializers(
    serializers: Iterable[Serializer], *, registry: SerializerRegistry | None = None
) -> None:
    """Set the JSON serializers before they are first used."""
    (registry or default_registry()).set_json_serializers(serializers)


def set_xml_serializers(
    serializers: Iterable[Serializer], *, registry: SerializerRegistry | None = None
) -> None:
    """Set the XML serializers before they are first used."""
    (registry or default_registry()).set_xml_serializers(serializers)


def json_serializers(
    *, registry: SerializerRegistry | None = None
) -> Mapping[str, Serializer]:
    """Return the JSON serializers, locking them."""
    return (registry or default_registry()).json_serializers


def xml_serializers(
    *, registry: SerializerRegistry | None = None
) -> Mapping[str, Serializer]:
    """Return the XML serializers, locking them."""
    return (registry or default_registry()).xml_serializers


def to_json(
    item: Any,
    type_: type | None = None,
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> str:
    """Serialize ``item`` to a JSON string.

    Args:
        item: The object to serialize
        type_: Type to serialize the object as (defaults to ``type(item)``)
        name: Name of the JSON serializer to use
        registry: Registry to look the serializer up in

    Returns:
        The JSON string
    """
    serializer = (registry or default_registry()).get_json_serializer(name)
    return serializer.serialize_to_string(item, _type_of(item, type_))


def to_json_stream(
    item: Any,
    stream: IO[bytes],
    type_: type | None = None,
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> None:
    """Serialize ``item`` as JSON into a binary stream."""
    serializer = (registry or default_registry()).get_json_serializer(name)
    serializer.serialize_to_stream(stream, item, _type_of(item, type_))


def from_json(
    data: str,
    type_: type[T],
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> T:
    """Deserialize a JSON string into an object of ``type_``."""
    serializer = (registry or default_registry()).get_json_serializer(name)
    return serializer.deserialize_from_string(data, type_)


def from_json_stream(
    stream: IO[bytes],
    type_: type[T],
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> T:
    """Deserialize JSON from a binary stream into an object of ``type_``."""
    serializer = (registry or default_registry()).get_json_serializer(name)
    return serializer.deserialize_from_stream(stream, type_)


def to_xml(
    item: Any,
    type_: type | None = None,
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> str:
    """Serialize ``item`` to an XML string.

    Args:
        item: The object to serialize
        type_: Type to serialize the object as (defaults to ``type(item)``)
        name: Name of the XML serializer to use
        registry: Registry to look the serializer up in

    Returns:
        The XML string
    """
    serializer = (registry or default_registry()).get_xml_serializer(name)
    return serializer.serialize_to_string(item, _type_of(item, type_))


def to_xml_stream(
    item: Any,
    stream: IO[bytes],
    type_: type | None = None,
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> None:
    """Serialize ``item`` as XML into a binary stream."""
    serializer = (registry or default_registry()).get_xml_serializer(name)
    serializer.serialize_to_stream(stream, item, _type_of(item, type_))


def from_xml(
    data: str,
    type_: type[T],
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> T:
    """Deserialize an XML string into an object of ``type_``."""
    serializer = (registry or default_registry()).get_xml_serializer(name)
    return serializer.deserialize_from_string(data, type_)


def from_xml_stream(
    stream: IO[bytes],
    type_: type[T],
    *,
    name: str = DEFAULT_NAME,
    registry: SerializerRegistry | None = None,
) -> T:
    """Deserialize XML from a binary stream into an object of ``type_``."""
    serializer = (registry or default_registry()).get_xml_serializer(name)
    return serializer.deserialize_from_stream(stream, type_)


def _type_of(item: Any, type_: type | None) -> type | None:
    if type_ is not None:
        return type_
    # None items keep a None type so the serializer reports the item
    return None if item is None else type(item)
