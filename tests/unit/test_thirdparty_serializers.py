"""Unit tests for the orjson and xmltodict serializers."""

import io
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from xml.parsers.expat import ExpatError

import pytest

orjson = pytest.importorskip("orjson")
xmltodict = pytest.importorskip("xmltodict")

from polyserial import OrjsonJsonSerializer, XmltodictXmlSerializer  # noqa: E402
from polyserial.serializers import OrjsonSettings, XmltodictSettings  # noqa: E402
from polyserial.serializers import orjson_serializer, xmltodict_serializer  # noqa: E402


@dataclass
class TypeForSerializer:
    PropA: int = 0
    PropB: bool = False
    PropC: str | None = None


class PlainTypeForSerializer:
    PropA: int
    PropB: bool
    PropC: str | None = None


@dataclass
class Event:
    title: str
    day: date
    attendees: list[str] = field(default_factory=list)


@dataclass
class InvoiceLine:
    sku: str
    codes: list[str] = field(default_factory=list)


@dataclass
class Invoice:
    number: int
    lines: list[InvoiceLine] = field(default_factory=list)
    tags: tuple[str, ...] = ()
    note: str | None = None


class LooseRecord:
    tags: list
    extra: Any = None


EXPECTED_ITEM = TypeForSerializer(PropA=5, PropB=True, PropC="PropC")
EXPECTED_JSON = '{"PropA":5,"PropB":true,"PropC":"PropC"}'
EXPECTED_XML_BODY = (
    "<TypeForSerializer><PropA>5</PropA><PropB>true</PropB><PropC>PropC</PropC>"
    "</TypeForSerializer>"
)


class TestOrjsonJsonSerializer:
    """Test the orjson adapter."""

    def test_defaults(self):
        serializer = OrjsonJsonSerializer()

        assert serializer.name == "default"
        assert serializer.settings is None
        assert serializer.option == 0

    def test_serialize(self):
        serializer = OrjsonJsonSerializer("fast")
        stream = io.BytesIO()

        serializer.serialize_to_stream(stream, EXPECTED_ITEM, TypeForSerializer)

        assert stream.getvalue() == EXPECTED_JSON.encode("utf-8")
        assert serializer.serialize_to_string(EXPECTED_ITEM, TypeForSerializer) == EXPECTED_JSON

    def test_deserialize(self):
        serializer = OrjsonJsonSerializer()

        assert serializer.deserialize_from_string(EXPECTED_JSON, TypeForSerializer) == EXPECTED_ITEM
        assert (
            serializer.deserialize_from_stream(
                io.BytesIO(EXPECTED_JSON.encode("utf-8")), TypeForSerializer
            )
            == EXPECTED_ITEM
        )

    def test_plain_class_round_trip(self):
        item = PlainTypeForSerializer()
        item.PropA = 1
        item.PropB = False
        serializer = OrjsonJsonSerializer()

        json = serializer.serialize_to_string(item, PlainTypeForSerializer)
        result = serializer.deserialize_from_string(json, PlainTypeForSerializer)

        assert json == '{"PropA":1,"PropB":false,"PropC":null}'
        assert (result.PropA, result.PropB, result.PropC) == (1, False, None)

    def test_nested_round_trip(self):
        event = Event("Launch", date(2024, 6, 1), ["ann", "bo"])
        serializer = OrjsonJsonSerializer()

        json = serializer.serialize_to_string(event, Event)

        assert '"day":"2024-06-01"' in json
        assert serializer.deserialize_from_string(json, Event) == event

    def test_untyped_members_of_plain_class(self):
        item = LooseRecord()
        item.tags = [1, 2]
        item.extra = 3
        serializer = OrjsonJsonSerializer()

        result = serializer.deserialize_from_string(
            serializer.serialize_to_string(item, LooseRecord), LooseRecord
        )

        assert (result.tags, result.extra) == ([1, 2], 3)

    def test_options_from_config(self):
        serializer = OrjsonJsonSerializer.from_config(
            "pretty", {"Indent_2": True, "sort_keys": True}
        )

        json = serializer.serialize_to_string({"b": 1, "a": 2}, dict)

        assert serializer.settings == OrjsonSettings(indent_2=True, sort_keys=True)
        assert serializer.option == orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS
        assert json == '{\n  "a": 2,\n  "b": 1\n}'

    def test_malformed_input_propagates_codec_error(self):
        with pytest.raises(orjson.JSONDecodeError):
            OrjsonJsonSerializer().deserialize_from_string("{", TypeForSerializer)

    def test_missing_library(self, monkeypatch):
        """Test the install hint when orjson is unavailable."""
        monkeypatch.setattr(orjson_serializer, "HAS_ORJSON", False)

        with pytest.raises(ImportError, match="polyserial\\[orjson\\]"):
            OrjsonJsonSerializer()


class TestXmltodictXmlSerializer:
    """Test the xmltodict adapter."""

    def test_defaults(self):
        serializer = XmltodictXmlSerializer()

        assert serializer.name == "default"
        assert serializer.settings is None

    def test_serialize(self):
        serializer = XmltodictXmlSerializer()
        stream = io.BytesIO()

        xml = serializer.serialize_to_string(EXPECTED_ITEM, TypeForSerializer)
        serializer.serialize_to_stream(stream, EXPECTED_ITEM, TypeForSerializer)

        assert xml.startswith('<?xml version="1.0" encoding="utf-8"?>')
        assert xml.endswith(EXPECTED_XML_BODY)
        assert stream.getvalue() == xml.encode("utf-8")

    def test_without_declaration(self):
        serializer = XmltodictXmlSerializer(settings=XmltodictSettings(full_document=False))

        assert serializer.serialize_to_string(EXPECTED_ITEM, TypeForSerializer) == EXPECTED_XML_BODY

    def test_deserialize(self):
        """Test that XML text is converted back to typed values."""
        serializer = XmltodictXmlSerializer()

        assert serializer.deserialize_from_string(EXPECTED_XML_BODY, TypeForSerializer) == EXPECTED_ITEM
        assert (
            serializer.deserialize_from_stream(
                io.BytesIO(EXPECTED_XML_BODY.encode("utf-8")), TypeForSerializer
            )
            == EXPECTED_ITEM
        )

    def test_force_list(self):
        """Test single-item lists with force_list."""
        serializer = XmltodictXmlSerializer.from_config(
            None, {"Force_List": ["attendees"]}
        )
        event = Event("Launch", date(2024, 6, 1), ["ann"])

        xml = serializer.serialize_to_string(event, Event)

        assert serializer.settings == XmltodictSettings(force_list=("attendees",))
        assert "<attendees>ann</attendees>" in xml
        assert serializer.deserialize_from_string(xml, Event) == event

    def test_single_item_lists(self):
        """Test that one-element sequences are read back as sequences."""
        serializer = XmltodictXmlSerializer()
        invoice = Invoice(1, [InvoiceLine("A", ["x"])], ("paid",))

        xml = serializer.serialize_to_string(invoice, Invoice)

        assert "<lines><sku>A</sku><codes>x</codes></lines>" in xml
        assert serializer.deserialize_from_string(xml, Invoice) == invoice

    @pytest.mark.parametrize("count", [0, 2])
    def test_other_list_lengths(self, count):
        serializer = XmltodictXmlSerializer()
        invoice = Invoice(2, [InvoiceLine(str(i)) for i in range(count)])

        xml = serializer.serialize_to_string(invoice, Invoice)

        assert serializer.deserialize_from_string(xml, Invoice) == invoice

    def test_configured_names_are_forced(self):
        """Test that configured force_list names are always read as lists."""
        serializer = XmltodictXmlSerializer(settings=XmltodictSettings(force_list=("note",)))
        xml = serializer.serialize_to_string(Invoice(3, note="n"), Invoice)

        assert serializer.deserialize_from_string(xml, dict)["note"] == ["n"]

    def test_untyped_members(self):
        item = LooseRecord()
        item.tags = ["a"]
        item.extra = "x"
        serializer = XmltodictXmlSerializer()

        result = serializer.deserialize_from_string(
            serializer.serialize_to_string(item, LooseRecord), LooseRecord
        )

        assert (result.tags, result.extra) == (["a"], "x")

    def test_pretty(self):
        serializer = XmltodictXmlSerializer(
            settings=XmltodictSettings(pretty=True, indent="  ", full_document=False)
        )

        xml = serializer.serialize_to_string(EXPECTED_ITEM, TypeForSerializer)

        assert xml.startswith("<TypeForSerializer>\n  <PropA>5</PropA>")

    def test_malformed_input_propagates_parse_error(self):
        with pytest.raises(ExpatError):
            XmltodictXmlSerializer().deserialize_from_string("<unclosed>", TypeForSerializer)

    def test_missing_library(self, monkeypatch):
        """Test the install hint when xmltodict is unavailable."""
        monkeypatch.setattr(xmltodict_serializer, "HAS_XMLTODICT", False)

        with pytest.raises(ImportError, match="polyserial\\[xmltodict\\]"):
            XmltodictXmlSerializer()
