"""Object reflection shared by the built-in serializers.

An :class:`ObjectModel` decides which members of a class are serialized and
how instances are rebuilt on the way back. Two models are provided:

- :data:`PUBLIC_MODEL` reads every public annotated attribute and rebuilds
  objects through their constructor.
- :data:`CONTRACT_MODEL` reads only :class:`~polyserial.contract.DataMember`
  annotated attributes of :func:`~polyserial.contract.data_contract` classes
  and rebuilds objects without calling ``__init__``.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import types
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin
from uuid import UUID

from .contract import DataMember, get_data_contract

SCALAR_TYPES: tuple[type, ...] = (
    str,
    bool,
    int,
    float,
    Decimal,
    UUID,
    datetime,
    date,
    time,
)
SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class Member:
    """A serialized attribute of a class."""

    attr: str  # Python attribute name
    key: str  # name on the wire
    type: Any
    order: int | None = None
    required: bool = False


@functools.cache
def public_members(cls: type) -> tuple[Member, ...]:
    """Return the public annotated attributes of ``cls``.

    Dataclasses contribute their fields in declaration order; other classes
    contribute their (inherited) class annotations.
    """
    hints = typing.get_type_hints(cls)
    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls)]
    else:
        names = [n for n, hint in hints.items() if get_origin(hint) is not ClassVar]
    return tuple(
        Member(attr=n, key=n, type=hints.get(n, Any))
        for n in names
        if not n.startswith("_")
    )


@functools.cache
def contract_members(cls: type) -> tuple[Member, ...]:
    """Return the data members of a data contract class.

    Members without an explicit order come first, sorted by wire name,
    followed by ordered members sorted by order and then wire name.
    """
    if get_data_contract(cls) is None:
        raise TypeError(
            f"Type {cls.__qualname__!r} is not marked with @data_contract"
        )
    members = []
    for attr, hint in typing.get_type_hints(cls, include_extras=True).items():
        if get_origin(hint) is not Annotated:
            continue
        member_type, *extras = get_args(hint)
        marker = next((e for e in extras if isinstance(e, DataMember)), None)
        if marker is None:
            continue
        members.append(
            Member(
                attr=attr,
                key=marker.name or attr,
                type=member_type,
                order=marker.order,
                required=marker.required,
            )
        )
    return tuple(
        sorted(members, key=lambda m: (m.order is not None, m.order or 0, m.key))
    )


def create_instance(cls: type, values: dict[str, Any]) -> Any:
    """Build ``cls`` through its constructor, then assign the rest."""
    if dataclasses.is_dataclass(cls):
        init_names = {f.name for f in dataclasses.fields(cls) if f.init}
        obj = cls(**{k: v for k, v in values.items() if k in init_names})
        for key, value in values.items():
            if key not in init_names:
                object.__setattr__(obj, key, value)
        return obj
    obj = cls()
    for key, value in values.items():
        setattr(obj, key, value)
    return obj


def restore_instance(cls: type, values: dict[str, Any]) -> Any:
    """Build ``cls`` without calling its constructor.

    Dataclass defaults are applied to fields missing from ``values``.
    """
    obj = cls.__new__(cls)
    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            if f.name in values:
                continue
            if f.default is not dataclasses.MISSING:
                object.__setattr__(obj, f.name, f.default)
            elif f.default_factory is not dataclasses.MISSING:
                object.__setattr__(obj, f.name, f.default_factory())
    for key, value in values.items():
        object.__setattr__(obj, key, value)
    return obj


def is_optional(tp: Any) -> bool:
    return _is_union(tp) and type(None) in get_args(tp)


def strip_optional(tp: Any) -> Any:
    """Return ``X`` for ``X | None``; other types are returned unchanged."""
    if _is_union(tp):
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def item_type(tp: Any) -> Any:
    """Return the element type of a sequence annotation."""
    args = get_args(tp)
    if not args:
        return Any
    return args[0]


def is_sequence_type(tp: Any) -> bool:
    origin = get_origin(tp) or tp
    return isinstance(origin, type) and issubclass(origin, SEQUENCE_TYPES) and not (
        issubclass(origin, (str, bytes))
    )


def is_mapping_type(tp: Any) -> bool:
    origin = get_origin(tp) or tp
    return isinstance(origin, type) and issubclass(origin, (Mapping, dict))


def is_object_type(tp: Any) -> bool:
    """Return True for classes serialized member by member."""
    return (
        isinstance(tp, type)
        and get_origin(tp) is None
        and not issubclass(tp, SCALAR_TYPES + SEQUENCE_TYPES + (Enum, Mapping, bytes))
        and tp is not object
        and tp is not Any
        and tp is not type(None)
    )


def format_scalar(value: Any) -> str | None:
    """Return the text form of a scalar, or None if ``value`` is not one."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (str, int, float, Decimal, UUID)):
        return str(value)
    return None


def parse_scalar(data: Any, tp: Any) -> Any:
    """Convert ``data`` (a JSON scalar or XML text) to scalar type ``tp``."""
    if tp is Any or tp is object:
        return data
    if isinstance(tp, type) and issubclass(tp, Enum):
        return _enum_member(tp, data)
    if tp is bool:
        if isinstance(data, bool):
            return data
        text = str(data).strip().lower()
        if text in ("true", "1"):
            return True
        if text in ("false", "0"):
            return False
        raise ValueError(f"Invalid boolean value: {data!r}")
    if tp is str:
        return data if isinstance(data, str) else str(data)
    if tp in (datetime, date, time):
        return data if isinstance(data, tp) else tp.fromisoformat(data)
    if tp in (int, float, Decimal, UUID):
        return data if type(data) is tp else tp(data)
    raise TypeError(f"Unsupported scalar type: {tp!r}")


def _enum_member(tp: type[Enum], data: Any) -> Enum:
    for member in tp:
        if member.value == data:
            return member
    if isinstance(data, str):
        if data in tp.__members__:
            return tp[data]
        for member in tp:
            if str(member.value) == data:
                return member
    raise ValueError(f"{data!r} is not a valid {tp.__qualname__}")


def _is_union(tp: Any) -> bool:
    return get_origin(tp) is Union or isinstance(tp, types.UnionType)


class ObjectModel:
    """Member selection plus instance construction strategy."""

    def __init__(
        self,
        members_of: Callable[[type], tuple[Member, ...]],
        construct: Callable[[type, dict[str, Any]], Any],
    ):
        self.members_of = members_of
        self.construct = construct

    def type_name(self, tp: Any) -> str:
        """Return the root element name used for values of ``tp``."""
        contract = get_data_contract(tp) if isinstance(tp, type) else None
        if contract is not None:
            return contract.name
        if is_sequence_type(tp):
            element = self.type_name(item_type(tp))
            return "ArrayOf" + element[:1].upper() + element[1:]
        return _XML_TYPE_NAMES.get(tp, getattr(tp, "__name__", "anyType"))

    def to_builtins(self, value: Any, *, emit_none: bool = True) -> Any:
        """Convert ``value`` to JSON-compatible builtins."""
        if value is None or isinstance(value, (str, int, float)):
            return value
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (datetime, date, time, Decimal, UUID)):
            return format_scalar(value)
        if isinstance(value, Mapping):
            return {
                str(k): self.to_builtins(v, emit_none=emit_none)
                for k, v in value.items()
            }
        if isinstance(value, SEQUENCE_TYPES):
            return [self.to_builtins(v, emit_none=emit_none) for v in value]
        if not is_object_type(type(value)):
            raise TypeError(f"Cannot serialize values of type {type(value).__qualname__!r}")
        result = {}
        for member in self.members_of(type(value)):
            member_value = getattr(value, member.attr, None)
            if member_value is None and not emit_none:
                continue
            result[member.key] = self.to_builtins(member_value, emit_none=emit_none)
        return result

    def from_builtins(self, data: Any, tp: Any) -> Any:
        """Rebuild a value of ``tp`` from JSON-compatible builtins."""
        if _is_union(tp):
            if data is None and is_optional(tp):
                return None
            candidates = [a for a in get_args(tp) if a is not type(None)]
            if len(candidates) == 1:
                return self.from_builtins(data, candidates[0])
            errors = []
            for candidate in candidates:
                try:
                    return self.from_builtins(data, candidate)
                except (TypeError, ValueError) as e:
                    errors.append(e)
            raise TypeError(f"{data!r} does not match any of {tp!r}: {errors}")
        if data is None:
            return None
        if is_sequence_type(tp):
            origin = get_origin(tp) or tp
            if not isinstance(data, list):
                raise TypeError(f"Expected an array for {tp!r}, got {type(data).__name__}")
            element = item_type(tp)
            return origin(self.from_builtins(v, element) for v in data)
        if is_mapping_type(tp):
            if not isinstance(data, Mapping):
                raise TypeError(f"Expected an object for {tp!r}, got {type(data).__name__}")
            args = get_args(tp)
            value_type = args[1] if len(args) == 2 else Any
            return {k: self.from_builtins(v, value_type) for k, v in data.items()}
        if is_object_type(tp):
            if inspect.isabstract(tp):
                raise TypeError(f"Cannot deserialize abstract type {tp.__qualname__!r}")
            if not isinstance(data, Mapping):
                raise TypeError(
                    f"Expected an object for {tp.__qualname__!r}, got {type(data).__name__}"
                )
            values = {}
            for member in self.members_of(tp):
                if member.key in data:
                    values[member.attr] = self.from_builtins(data[member.key], member.type)
                elif member.required:
                    raise ValueError(
                        f"Required member {member.key!r} of {tp.__qualname__!r} is missing"
                    )
            return self.construct(tp, values)
        return parse_scalar(data, tp)


_XML_TYPE_NAMES: dict[Any, str] = {
    str: "string",
    int: "int",
    bool: "boolean",
    float: "double",
    Decimal: "decimal",
    UUID: "guid",
    datetime: "dateTime",
    date: "date",
    time: "time",
    Any: "anyType",
    object: "anyType",
}

PUBLIC_MODEL = ObjectModel(public_members, create_instance)
"""Public annotated attributes, rebuilt through the constructor."""

CONTRACT_MODEL = ObjectModel(contract_members, restore_instance)
"""Data members of data contracts, rebuilt without the constructor."""
