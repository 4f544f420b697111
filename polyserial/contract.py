"""Data contract annotations.

Data-contract serializers only read and write members that are explicitly
marked, instead of every public attribute::

    @data_contract(namespace="urn:orders")
    @dataclass
    class Order:
        id: Annotated[int, DataMember(order=1)]
        note: Annotated[str | None, DataMember(name="Note")] = None
        cache: dict | None = None  # not serialized
"""

from dataclasses import dataclass
from typing import Any

CONTRACT_NAMESPACE_PREFIX = "http://schemas.datacontract.org/2004/07/"


@dataclass(frozen=True)
class DataMember:
    """Marks an annotated attribute as part of a data contract."""

    name: str | None = None
    order: int | None = None
    required: bool = False


@dataclass(frozen=True)
class DataContract:
    """Contract metadata attached to a class by :func:`data_contract`."""

    name: str
    namespace: str


def data_contract(
    cls: type | None = None, *, name: str | None = None, namespace: str | None = None
) -> Any:
    """Mark a class as a data contract.

    Can be used bare (``@data_contract``) or with arguments. The contract
    name defaults to the class name and the namespace to one derived from
    the defining module.
    """

    def wrap(target: type) -> type:
        target.__data_contract__ = DataContract(  # type: ignore[attr-defined]
            name=name or target.__name__,
            namespace=(
                namespace
                if namespace is not None
                else CONTRACT_NAMESPACE_PREFIX + target.__module__
            ),
        )
        return target

    if cls is None:
        return wrap
    return wrap(cls)


def get_data_contract(cls: type) -> DataContract | None:
    """Return the contract declared directly on ``cls``, if any.

    Contracts are not inherited: a subclass must be marked itself.
    """
    if not isinstance(cls, type):
        return None
    return vars(cls).get("__data_contract__")
