"""Base serialization interface."""

from collections.abc import Mapping
from typing import IO, Any, Protocol, runtime_checkable

DEFAULT_NAME = "default"


@runtime_checkable
class Serializer(Protocol):
    """Protocol for named serializers.

    Every adapter exposes the same four operations regardless of the codec
    library behind it. Streams are binary; strings are text.
    """

    @property
    def name(self) -> str:
        """The key this serializer is registered under."""
        ...

    def serialize_to_stream(self, stream: IO[bytes], item: Any, type_: type) -> None:
        """Serialize ``item`` as ``type_`` to ``stream``."""
        ...

    def deserialize_from_stream(self, stream: IO[bytes], type_: type) -> Any:
        """Deserialize one value of ``type_`` from ``stream``."""
        ...

    def serialize_to_string(self, item: Any, type_: type) -> str:
        """Serialize ``item`` as ``type_`` to a string."""
        ...

    def deserialize_from_string(self, data: str, type_: type) -> Any:
        """Deserialize one value of ``type_`` from ``data``."""
        ...


def resolve_name(name: str | None) -> str:
    """Return ``name``, or the default name when it is None or empty."""
    return name or DEFAULT_NAME


def normalize_settings(settings: Mapping[str, Any] | None) -> dict[str, Any]:
    """Lower-case the top-level keys of a settings mapping from config."""
    if not settings:
        return {}
    return {str(key).lower(): value for key, value in settings.items()}
