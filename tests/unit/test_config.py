"""Unit tests for configuration providers."""

import pytest

from polyserial import (
    ConfigurationError,
    DataContractXmlSerializer,
    DefaultJsonSerializer,
    MappingConfigProvider,
    SerializerConfig,
    SerializerRegistry,
    YamlConfigProvider,
)
from polyserial.config import (
    CONFIG_PATH_ENV,
    ConfigProvider,
    default_config_provider,
    resolve_adapter_type,
)
from polyserial.serializers import JsonSettings, XmlWriterSettings

CONFIG_YAML = """
polyserial:
  JsonSerializers:
    - name: default
    - name: pretty
      settings:
        indent: 2
    - type: DataContractJsonSerializer
      name: contract
  XmlSerializers:
    settings:
      writer_settings:
        indent: "  "
"""


class TestMappingConfigProvider:
    """Test section lookup and entry parsing."""

    def test_is_a_config_provider(self):
        assert isinstance(MappingConfigProvider(), ConfigProvider)

    def test_missing_section(self):
        provider = MappingConfigProvider({"polyserial": {}})

        assert provider.get_serializer_list("polyserial:JsonSerializers") is None
        assert provider.get_serializer_list("other:JsonSerializers") is None

    def test_section_lookup_is_case_insensitive(self):
        provider = MappingConfigProvider({"PolySerial": {"jsonserializers": [{"Name": "x"}]}})

        entries = provider.get_serializer_list("polyserial:JsonSerializers")

        assert entries == [SerializerConfig(name="x")]

    def test_single_entry_mapping(self):
        provider = MappingConfigProvider({"s": {"name": "only"}})

        assert provider.get_serializer_list("s") == [SerializerConfig(name="only")]

    def test_entry_fields(self):
        """Test type resolution, name and settings merging."""
        provider = MappingConfigProvider(
            {
                "s": [
                    {
                        "Type": "DefaultJsonSerializer",
                        "name": 42,
                        "settings": {"indent": 2},
                        "order": "sorted",
                    }
                ]
            }
        )

        (entry,) = provider.get_serializer_list("s")

        assert entry.adapter_type is DefaultJsonSerializer
        assert entry.name == "42"
        assert entry.settings == {"order": "sorted", "indent": 2}

    def test_section_must_be_list_or_mapping(self):
        provider = MappingConfigProvider({"s": "nope"})

        with pytest.raises(ConfigurationError, match="must be a list or a mapping"):
            provider.get_serializer_list("s")

    def test_entry_must_be_mapping(self):
        provider = MappingConfigProvider({"s": ["nope"]})

        with pytest.raises(ConfigurationError, match="Entry 0"):
            provider.get_serializer_list("s")

    def test_settings_must_be_mapping(self):
        provider = MappingConfigProvider({"s": [{"settings": [1, 2]}]})

        with pytest.raises(ConfigurationError, match="Settings of entry 0"):
            provider.get_serializer_list("s")


class TestResolveAdapterType:
    """Test adapter type specs."""

    def test_builtin_name(self):
        assert resolve_adapter_type("DataContractXmlSerializer") is DataContractXmlSerializer

    def test_dotted_path(self):
        spec = "polyserial.serializers.contract_xml.DataContractXmlSerializer"

        assert resolve_adapter_type(spec) is DataContractXmlSerializer

    def test_colon_path(self):
        spec = "polyserial.serializers:DataContractXmlSerializer"

        assert resolve_adapter_type(spec) is DataContractXmlSerializer

    @pytest.mark.parametrize(
        "spec",
        [
            "NoSuchSerializer",
            "polyserial.serializers.NoSuchSerializer",
            "no_such_module:Thing",
            "polyserial.serializers:DEFAULT_NAME",
        ],
    )
    def test_unresolvable(self, spec):
        with pytest.raises(ConfigurationError, match="Cannot resolve"):
            resolve_adapter_type(spec)


class TestYamlConfigProvider:
    """Test YAML-backed configuration."""

    def test_loads_file(self, tmp_path):
        path = tmp_path / "serializers.yaml"
        path.write_text(CONFIG_YAML)

        provider = YamlConfigProvider(path)
        entries = provider.get_serializer_list("polyserial:JsonSerializers")

        assert [entry.name for entry in entries] == ["default", "pretty", "contract"]
        assert entries[1].settings == {"indent": 2}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            YamlConfigProvider(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert YamlConfigProvider(path).get_serializer_list("polyserial:JsonSerializers") is None

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            YamlConfigProvider(path)

    def test_registry_from_yaml(self, tmp_path):
        path = tmp_path / "serializers.yaml"
        path.write_text(CONFIG_YAML)

        registry = SerializerRegistry(YamlConfigProvider(path))

        assert registry.json_serializers["pretty"].settings == JsonSettings(indent=2)
        assert registry.xml_serializers["default"].writer_settings == XmlWriterSettings(
            indent="  "
        )


class TestDefaultConfigProvider:
    """Test the environment-selected provider."""

    def test_without_environment(self, monkeypatch):
        monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)

        provider = default_config_provider()

        assert isinstance(provider, MappingConfigProvider)
        assert provider.get_serializer_list("polyserial:JsonSerializers") is None

    def test_with_environment(self, monkeypatch, tmp_path):
        path = tmp_path / "serializers.yaml"
        path.write_text(CONFIG_YAML)
        monkeypatch.setenv(CONFIG_PATH_ENV, str(path))

        provider = default_config_provider()

        assert isinstance(provider, YamlConfigProvider)
        assert provider.path == path
