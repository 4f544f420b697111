"""Example demonstrating named JSON and XML serializers."""

import io
import os
import tempfile
from dataclasses import dataclass, field
from datetime import date
from typing import Annotated

import polyserial
from polyserial import (
    DataContractXmlSerializer,
    DataMember,
    DefaultJsonSerializer,
    DefaultXmlSerializer,
    SerializerRegistry,
    YamlConfigProvider,
    data_contract,
)
from polyserial.serializers import JsonSettings, XmlWriterSettings


@dataclass
class LineItem:
    sku: str
    quantity: int


@dataclass
class Invoice:
    number: int
    issued: date
    paid: bool = False
    lines: list[LineItem] = field(default_factory=list)


@data_contract(namespace="urn:example:customers")
@dataclass
class Customer:
    customer_id: Annotated[int, DataMember(name="Id", order=1, required=True)]
    name: Annotated[str, DataMember(name="Name", order=2)]
    notes: str = ""  # not part of the contract


CONFIG = """
polyserial:
  JsonSerializers:
    - name: default
    - name: pretty
      settings:
        indent: 2
  XmlSerializers:
    - name: default
    - type: DataContractXmlSerializer
      name: contract
"""


def create_invoice():
    """Create a sample invoice."""
    return Invoice(
        number=1001,
        issued=date(2024, 3, 1),
        lines=[LineItem("BOLT-10", 200), LineItem("NUT-10", 200)],
    )


def main():
    """Run serialization examples."""
    invoice = create_invoice()

    # Example 1: Process-wide registry with defaults
    print("=== Default Serializers ===")
    json = polyserial.to_json(invoice)
    print(f"JSON: {json}")
    print(f"Round trip equal: {polyserial.from_json(json, Invoice) == invoice}")

    xml = polyserial.to_xml(invoice)
    print(f"XML: {xml}")
    print(f"Round trip equal: {polyserial.from_xml(xml, Invoice) == invoice}")

    # The maps are now locked
    try:
        polyserial.set_json_serializers([DefaultJsonSerializer("late")])
    except polyserial.LockedStateError as e:
        print(f"Cannot reconfigure: {e}")

    # Example 2: An explicitly configured registry
    print("\n=== Explicit Registry ===")
    registry = SerializerRegistry()
    registry.set_json_serializers(
        [
            DefaultJsonSerializer(),
            DefaultJsonSerializer("pretty", JsonSettings(indent=2)),
        ]
    )
    registry.set_xml_serializers(
        [
            DefaultXmlSerializer(),
            DefaultXmlSerializer("pretty", writer_settings=XmlWriterSettings(indent="  ")),
            DataContractXmlSerializer("contract"),
        ]
    )
    print(polyserial.to_json(invoice, name="pretty", registry=registry))
    print(polyserial.to_xml(invoice, name="pretty", registry=registry))

    customer = Customer(customer_id=7, name="Ada", notes="internal")
    stream = io.BytesIO()
    polyserial.to_xml_stream(customer, stream, name="contract", registry=registry)
    print(f"\nContract stream: {stream.getvalue().decode('utf-8')}")
    stream.seek(0)
    restored = polyserial.from_xml_stream(stream, Customer, name="contract", registry=registry)
    print(f"Restored: {restored}")

    try:
        polyserial.to_json(invoice, name="nonexistent", registry=registry)
    except polyserial.SerializerNotFoundError as e:
        print(f"Lookup failed: {e}")

    # Example 3: Registry configured from a YAML file
    print("\n=== YAML Configuration ===")
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
        f.write(CONFIG)
        config_path = f.name

    try:
        registry = SerializerRegistry(YamlConfigProvider(config_path))
        print(f"JSON serializers: {list(registry.json_serializers)}")
        print(f"XML serializers: {list(registry.xml_serializers)}")
        print(registry.get_xml_serializer("contract").serialize_to_string(customer, Customer))
    finally:
        os.remove(config_path)

    # Example 4: Third-party codecs
    print("\n=== Third-party Codecs ===")
    try:
        fast = polyserial.OrjsonJsonSerializer("fast")
        print(fast.serialize_to_string(invoice, Invoice))
    except ImportError:
        print("orjson support not installed. Run: pip install polyserial[orjson]")

    try:
        xmltodict_serializer = polyserial.XmltodictXmlSerializer("xmltodict")
        print(xmltodict_serializer.serialize_to_string(invoice, Invoice))
    except ImportError:
        print("xmltodict support not installed. Run: pip install polyserial[xmltodict]")


if __name__ == "__main__":
    main()
