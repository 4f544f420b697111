"""Exception types for polyserial."""


class PolyserialError(Exception):
    """Base exception for all polyserial errors."""

    pass


class ArgumentNullError(PolyserialError, ValueError):
    """Raised when a required argument is None."""

    def __init__(self, param_name: str):
        self.param_name = param_name
        super().__init__(f"Value cannot be None. (Parameter '{param_name}')")


class LockedStateError(PolyserialError, RuntimeError):
    """Raised when a locked registry map is set again."""

    pass


class SerializerNotFoundError(PolyserialError, LookupError):
    """Raised when no serializer is registered under the requested name."""

    def __init__(self, name: str, format: str):
        self.name = name
        self.format = format
        super().__init__(f"No {format.upper()} serializer named {name!r} is registered")


class DuplicateSerializerNameError(PolyserialError, ValueError):
    """Raised when two serializers in the same map share a name."""

    def __init__(self, name: str, format: str):
        self.name = name
        self.format = format
        super().__init__(
            f"Duplicate {format.upper()} serializer name: {name!r}"
        )


class ConfigurationError(PolyserialError):
    """Raised when a serializer configuration entry is malformed."""

    pass


def check_not_none(**arguments: object) -> None:
    """Raise ArgumentNullError for the first argument that is None."""
    for param_name, value in arguments.items():
        if value is None:
            raise ArgumentNullError(param_name)
