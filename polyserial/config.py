"""Configuration providers for serializer registries.

A config section lists the serializers of one map. Section paths use ``:``
separators and are matched case-insensitively, so ``polyserial:JsonSerializers``
finds the ``JsonSerializers`` list below the ``polyserial`` key of::

    polyserial:
      JsonSerializers:
        - name: default
        - name: pretty
          settings:
            indent: 2
        - type: OrjsonJsonSerializer
          name: fast
      XmlSerializers:
        settings:
          writer_settings:
            indent: "  "

A section may hold a single entry instead of a list. Each entry accepts
``type`` (a built-in adapter class name or an import path), ``name`` and
``settings``; any other keys are folded into ``settings``.
"""

import importlib
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError
from .serializers import BUILTIN_ADAPTERS

CONFIG_PATH_ENV = "POLYSERIAL_CONFIG"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerializerConfig:
    """One configured serializer: its name, adapter type and settings.

    ``adapter_type`` is None when the entry does not name one; the registry
    then uses the default adapter of the map being built.
    """

    name: str | None = None
    adapter_type: type | None = None
    settings: Mapping[str, Any] = field(default_factory=dict)


@runtime_checkable
class ConfigProvider(Protocol):
    """Protocol for serializer configuration sources."""

    def get_serializer_list(self, section: str) -> list[SerializerConfig] | None:
        """Return the serializers configured under ``section``, if any."""
        ...


class MappingConfigProvider:
    """Config provider backed by a nested mapping."""

    def __init__(self, data: Mapping[str, Any] | None = None):
        self.data = data or {}

    def get_serializer_list(self, section: str) -> list[SerializerConfig] | None:
        node = _find_section(self.data, section)
        if node is None:
            return None
        if isinstance(node, Mapping):
            node = [node]
        elif not isinstance(node, list):
            raise ConfigurationError(
                f"Section {section!r} must be a list or a mapping, got {type(node).__name__}"
            )
        return [_parse_entry(entry, section, index) for index, entry in enumerate(node)]


class YamlConfigProvider(MappingConfigProvider):
    """Config provider that reads a YAML (or JSON) file once."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")
        data = yaml.safe_load(self.path.read_text()) or {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Config file {self.path} must contain a mapping")
        logger.debug("Loaded serializer config from %s", self.path)
        super().__init__(data)


def default_config_provider() -> ConfigProvider:
    """Return the provider used by the process-wide registry.

    Reads the file named by ``POLYSERIAL_CONFIG`` when set; otherwise no
    serializers are configured and registries fall back to their defaults.
    """
    path = os.environ.get(CONFIG_PATH_ENV)
    if path:
        return YamlConfigProvider(path)
    return MappingConfigProvider()


def resolve_adapter_type(spec: str) -> type:
    """Resolve a built-in adapter name or an import path to a class.

    Accepts ``DefaultJsonSerializer``, ``package.module.Class`` and
    ``package.module:Class``.
    """
    if spec in BUILTIN_ADAPTERS:
        return BUILTIN_ADAPTERS[spec]

    if ":" in spec:
        module_name, _, attr_path = spec.partition(":")
        candidates = [(module_name, attr_path)]
    else:
        parts = spec.split(".")
        candidates = [
            (".".join(parts[:i]), ".".join(parts[i:])) for i in range(len(parts) - 1, 0, -1)
        ]

    for module_name, attr_path in candidates:
        try:
            obj: Any = importlib.import_module(module_name)
            for part in attr_path.split("."):
                obj = getattr(obj, part)
        except (ImportError, AttributeError):
            continue
        if isinstance(obj, type):
            return obj
    raise ConfigurationError(f"Cannot resolve serializer type {spec!r}")


def _find_section(data: Mapping[str, Any], section: str) -> Any:
    node: Any = data
    for segment in section.split(":"):
        if not isinstance(node, Mapping):
            return None
        match = next(
            (value for key, value in node.items() if str(key).lower() == segment.lower()),
            None,
        )
        if match is None:
            return None
        node = match
    return node


def _parse_entry(entry: Any, section: str, index: int) -> SerializerConfig:
    if not isinstance(entry, Mapping):
        raise ConfigurationError(
            f"Entry {index} of section {section!r} must be a mapping, got {type(entry).__name__}"
        )
    fields = {str(key).lower(): value for key, value in entry.items()}
    type_spec = fields.pop("type", None)
    name = fields.pop("name", None)
    settings = fields.pop("settings", None) or {}
    if not isinstance(settings, Mapping):
        raise ConfigurationError(
            f"Settings of entry {index} in section {section!r} must be a mapping"
        )
    settings = {**fields, **settings}
    adapter_type = resolve_adapter_type(str(type_spec)) if type_spec else None
    return SerializerConfig(
        name=None if name is None else str(name),
        adapter_type=adapter_type,
        settings=settings,
    )
