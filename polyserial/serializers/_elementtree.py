"""ElementTree codec shared by the reflection and data contract XML serializers."""

import inspect
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any, get_origin

from ..reflection import (
    ObjectModel,
    format_scalar,
    is_mapping_type,
    is_object_type,
    is_sequence_type,
    item_type,
    strip_optional,
)

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"


def declaration(encoding: str) -> str:
    return f'<?xml version="1.0" encoding="{encoding}"?>'


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` part of an ElementTree tag."""
    return tag.rsplit("}", 1)[-1]


class ElementWriter:
    """Builds an element tree for one value.

    Namespace declarations are written as plain ``xmlns`` attributes so the
    output does not depend on ElementTree's global prefix registry.
    """

    def __init__(
        self,
        model: ObjectModel,
        namespaces: Mapping[str, str] | None = None,
        nil_prefix: str = "xsi",
    ):
        self.model = model
        self.namespaces = dict(namespaces or {})
        self.nil_prefix = nil_prefix
        self._root: ET.Element | None = None

    def build(self, tag: str, value: Any, tp: Any) -> ET.Element:
        root = ET.Element(tag)
        for prefix, uri in self.namespaces.items():
            root.set(f"xmlns:{prefix}" if prefix else "xmlns", uri)
        self._root = root
        self._write(root, value, tp)
        return root

    def _write(self, elem: ET.Element, value: Any, tp: Any) -> None:
        if value is None:
            self._mark_nil(elem)
            return
        text = format_scalar(value)
        if text is not None:
            elem.text = text
            return
        if isinstance(value, Mapping):
            raise TypeError("Mappings cannot be serialized to XML")
        if is_sequence_type(type(value)):
            declared = item_type(strip_optional(tp))
            for item in value:
                child_type = declared if declared is not Any else type(item)
                child = ET.SubElement(elem, self.model.type_name(strip_optional(child_type)))
                self._write(child, item, child_type)
            return
        if not is_object_type(type(value)):
            raise TypeError(f"Cannot serialize values of type {type(value).__qualname__!r}")
        for member in self.model.members_of(type(value)):
            member_value = getattr(value, member.attr, None)
            if member_value is None:
                continue
            child = ET.SubElement(elem, member.key)
            self._write(child, member_value, member.type)

    def _mark_nil(self, elem: ET.Element) -> None:
        if self._root is None:
            raise RuntimeError("ElementWriter.build must be called before writing values")
        if self.nil_prefix not in self.namespaces:
            self.namespaces[self.nil_prefix] = XSI_NAMESPACE
            self._root.set(f"xmlns:{self.nil_prefix}", XSI_NAMESPACE)
        elem.set(f"{self.nil_prefix}:nil", "true")


class ElementReader:
    """Rebuilds a value from an element tree."""

    def __init__(self, model: ObjectModel, ignore_unknown_elements: bool = True):
        self.model = model
        self.ignore_unknown_elements = ignore_unknown_elements

    def read(self, root: ET.Element, tp: Any, expected_tag: str) -> Any:
        if local_name(root.tag) != expected_tag:
            raise ValueError(
                f"Unexpected root element <{local_name(root.tag)}>, expected <{expected_tag}>"
            )
        return self._read(root, tp)

    def _read(self, elem: ET.Element, tp: Any) -> Any:
        if _is_nil(elem):
            return None
        tp = strip_optional(tp)
        if is_sequence_type(tp):
            element = item_type(tp)
            return (get_origin(tp) or tp)(self._read(child, element) for child in elem)
        if is_mapping_type(tp):
            raise TypeError("Mappings cannot be deserialized from XML")
        if is_object_type(tp):
            if inspect.isabstract(tp):
                raise TypeError(f"Cannot deserialize abstract type {tp.__qualname__!r}")
            return self._read_object(elem, tp)
        return self.model.from_builtins(elem.text or "", tp)

    def _read_object(self, elem: ET.Element, tp: type) -> Any:
        children = {local_name(child.tag): child for child in elem}
        members = self.model.members_of(tp)
        values = {}
        for member in members:
            child = children.get(member.key)
            if child is None:
                if member.required:
                    raise ValueError(
                        f"Required member {member.key!r} of {tp.__qualname__!r} is missing"
                    )
                continue
            values[member.attr] = self._read(child, member.type)
        if not self.ignore_unknown_elements:
            unknown = set(children) - {m.key for m in members}
            if unknown:
                raise ValueError(
                    f"Unknown elements for {tp.__qualname__!r}: {sorted(unknown)}"
                )
        return self.model.construct(tp, values)


def _is_nil(elem: ET.Element) -> bool:
    return any(
        local_name(key) == "nil" and value == "true" for key, value in elem.attrib.items()
    )
