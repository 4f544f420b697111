"""A value that is computed or set at most once, then locked."""

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from .exceptions import LockedStateError

T = TypeVar("T")


class Semimutable(Generic[T]):
    """Holds a value that locks on first read or first explicit set.

    Reading an unloaded value runs ``factory`` exactly once, even under
    concurrent first access. If the factory raises, the value stays
    unloaded and the next read tries again. Setting succeeds only while
    the value is unloaded.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._value: T | None = None
        self._locked = False

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def value(self) -> T:
        if not self._locked:
            with self._lock:
                if not self._locked:
                    self._value = self._factory()
                    self._locked = True
        return self._value  # type: ignore[return-value]

    def set_value(self, value: T) -> None:
        """Set and lock the value.

        Raises:
            LockedStateError: If the value was already read or set
        """
        with self._lock:
            if self._locked:
                raise LockedStateError(
                    "Value is locked; it can only be set before it is first read"
                )
            self._value = value
            self._locked = True
