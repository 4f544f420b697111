"""Named serializer registry."""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .config import ConfigProvider, default_config_provider
from .exceptions import (
    ArgumentNullError,
    DuplicateSerializerNameError,
    SerializerNotFoundError,
)
from .semimutable import Semimutable
from .serializers import DefaultJsonSerializer, DefaultXmlSerializer, Serializer
from .serializers.base import DEFAULT_NAME

DEFAULT_NAMESPACE = "polyserial"
JSON = "json"
XML = "xml"

logger = logging.getLogger(__name__)


class SerializerRegistry:
    """Holds the JSON and XML serializers of an application, keyed by name.

    Each map is built the first time it is read, from the
    ``<namespace>:JsonSerializers`` / ``<namespace>:XmlSerializers`` config
    sections. A map with no configured entries gets a single ``"default"``
    serializer. Once read, a map is locked: it can only be replaced with
    ``set_json_serializers`` / ``set_xml_serializers`` before that point.

    Args:
        config_provider: Source of serializer configuration. Defaults to
            :func:`~polyserial.config.default_config_provider`, resolved on
            first load.
        namespace: Prefix of the config sections
    """

    def __init__(
        self,
        config_provider: ConfigProvider | None = None,
        namespace: str = DEFAULT_NAMESPACE,
    ):
        self.config_provider = config_provider
        self.namespace = namespace
        self._json = Semimutable(lambda: self._load(JSON, DefaultJsonSerializer))
        self._xml = Semimutable(lambda: self._load(XML, DefaultXmlSerializer))

    @property
    def json_serializers(self) -> Mapping[str, Serializer]:
        """The JSON serializers, loading and locking them if needed."""
        return self._json.value

    @property
    def xml_serializers(self) -> Mapping[str, Serializer]:
        """The XML serializers, loading and locking them if needed."""
        return self._xml.value

    @property
    def is_json_locked(self) -> bool:
        return self._json.is_locked

    @property
    def is_xml_locked(self) -> bool:
        return self._xml.is_locked

    def set_json_serializers(self, serializers: Iterable[Serializer]) -> None:
        """Set the JSON serializers.

        This can only be used until the JSON serializers have been read;
        after that they are locked.

        Raises:
            ArgumentNullError: If serializers is None
            DuplicateSerializerNameError: If two serializers share a name
            LockedStateError: If the JSON serializers are already locked
        """
        self._set(self._json, serializers, JSON)

    def set_xml_serializers(self, serializers: Iterable[Serializer]) -> None:
        """Set the XML serializers.

        This can only be used until the XML serializers have been read;
        after that they are locked.

        Raises:
            ArgumentNullError: If serializers is None
            DuplicateSerializerNameError: If two serializers share a name
            LockedStateError: If the XML serializers are already locked
        """
        self._set(self._xml, serializers, XML)

    def find_json_serializer(self, name: str = DEFAULT_NAME) -> Serializer | None:
        """Return the JSON serializer named ``name``, or None."""
        return self.json_serializers.get(name)

    def find_xml_serializer(self, name: str = DEFAULT_NAME) -> Serializer | None:
        """Return the XML serializer named ``name``, or None."""
        return self.xml_serializers.get(name)

    def get_json_serializer(self, name: str = DEFAULT_NAME) -> Serializer:
        """Return the JSON serializer named ``name``.

        Raises:
            SerializerNotFoundError: If no JSON serializer has that name
        """
        serializer = self.find_json_serializer(name)
        if serializer is None:
            raise SerializerNotFoundError(name, JSON)
        return serializer

    def get_xml_serializer(self, name: str = DEFAULT_NAME) -> Serializer:
        """Return the XML serializer named ``name``.

        Raises:
            SerializerNotFoundError: If no XML serializer has that name
        """
        serializer = self.find_xml_serializer(name)
        if serializer is None:
            raise SerializerNotFoundError(name, XML)
        return serializer

    def _set(
        self,
        target: Semimutable[Mapping[str, Serializer]],
        serializers: Iterable[Serializer],
        format: str,
    ) -> None:
        if serializers is None:
            raise ArgumentNullError("serializers")
        mapping = _to_mapping(serializers, format)
        target.set_value(mapping)
        logger.debug("Set %d %s serializers: %s", len(mapping), format.upper(), list(mapping))

    def _load(self, format: str, default_type: type) -> Mapping[str, Serializer]:
        section = f"{self.namespace}:{format.capitalize()}Serializers"
        provider = self.config_provider or default_config_provider()
        entries = provider.get_serializer_list(section)
        if not entries:
            logger.debug(
                "No %s serializers configured in %r; using %s",
                format.upper(),
                section,
                default_type.__name__,
            )
            return MappingProxyType({DEFAULT_NAME: default_type()})

        serializers = [
            (entry.adapter_type or default_type).from_config(entry.name, entry.settings)
            for entry in entries
        ]
        mapping = _to_mapping(serializers, format)
        logger.debug(
            "Loaded %d %s serializers from %r: %s",
            len(mapping),
            format.upper(),
            section,
            list(mapping),
        )
        return mapping


def _to_mapping(
    serializers: Iterable[Serializer], format: str
) -> Mapping[str, Serializer]:
    mapping: dict[str, Serializer] = {}
    for serializer in serializers:
        if serializer.name in mapping:
            raise DuplicateSerializerNameError(serializer.name, format)
        mapping[serializer.name] = serializer
    return MappingProxyType(mapping)
