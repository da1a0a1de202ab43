from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import yaml

from chip8.core.exceptions import ConfigurationError
from chip8.utils.config_loader import (
    CpuConfig,
    MachineConfig,
    MemoryConfig,
    _get_config_path,
    _load_yaml_file,
    clear_config_cache,
    config_from_dict,
    get_config,
    load_config,
)


class TestMemoryConfig:
    def test_defaults(self):
        cfg = MemoryConfig()
        assert cfg.size == 4096
        assert cfg.program_start == 0x200
        assert cfg.font_base == 0
        assert cfg.program_capacity == 4096 - 0x200

    def test_immutable(self):
        cfg = MemoryConfig()
        with pytest.raises(AttributeError):
            cfg.size = 0


class TestGetConfigPath:
    def test_default_points_at_bundled_file(self):
        path = Path(_get_config_path())
        assert path.name == "config.yaml"
        assert path.parent.name == "chip8"
        assert path.exists()

    def test_explicit_path(self):
        assert _get_config_path("/tmp/custom.yaml") == "/tmp/custom.yaml"


class TestLoadYamlFile:
    def test_invalid_yaml(self, temp_yaml_file):
        temp_yaml_file.write_text("memory: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            _load_yaml_file(temp_yaml_file)

    def test_missing_file(self):
        with pytest.raises(ConfigurationError):
            _load_yaml_file(Path("/nonexistent/chip8.yaml"))

    def test_empty_file(self, temp_yaml_file):
        temp_yaml_file.write_text("", encoding="utf-8")
        assert _load_yaml_file(temp_yaml_file) == {}

    def test_non_mapping_root(self, temp_yaml_file):
        temp_yaml_file.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            _load_yaml_file(temp_yaml_file)


class TestConfigFromDict:
    def test_valid_config(self, machine_config_dict):
        cfg = config_from_dict(machine_config_dict)
        assert isinstance(cfg, MachineConfig)
        assert cfg.cpu.rng_seed == 1234
        assert cfg.display.width == 64

    def test_missing_sections_use_defaults(self):
        assert config_from_dict({}) == MachineConfig()

    def test_unknown_key(self, machine_config_dict):
        machine_config_dict["memory"]["bogus"] = 1
        with pytest.raises(ConfigurationError):
            config_from_dict(machine_config_dict)

    def test_non_integer_value(self, machine_config_dict):
        machine_config_dict["display"]["width"] = "wide"
        with pytest.raises(ConfigurationError):
            config_from_dict(machine_config_dict)

    @pytest.mark.parametrize(
        "section, key, value",
        [
            ("memory", "size", 0),
            ("memory", "size", 0x20000),
            ("memory", "program_start", 0x201),
            ("memory", "program_start", 0x20),
            ("memory", "program_start", 4096),
            ("memory", "font_base", 4090),
            ("display", "height", 0),
            ("stack", "depth", 0),
            ("cpu", "unknown_opcode", "ignore"),
        ],
    )
    def test_invalid_values(self, machine_config_dict, section, key, value):
        machine_config_dict[section][key] = value
        with pytest.raises(ConfigurationError):
            config_from_dict(machine_config_dict)

    @pytest.mark.parametrize(
        "section, key, value",
        [
            ("memory", "size", 4096.7),
            ("memory", "program_start", "0x200"),
            ("display", "width", True),
            ("stack", "depth", 16.0),
            ("cpu", "rng_seed", "1234"),
        ],
    )
    def test_non_int_types_rejected(self, machine_config_dict, section, key, value):
        machine_config_dict[section][key] = value
        with pytest.raises(ConfigurationError) as exc_info:
            config_from_dict(machine_config_dict)
        assert exc_info.value.config_key == f"{section}.{key}"

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_return_skips_call_requires_bool(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            config_from_dict({"cpu": {"return_skips_call": value}})
        assert exc_info.value.config_key == "cpu.return_skips_call"

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            config_from_dict({"memory": [4096]})

    def test_cpu_section(self):
        cfg = config_from_dict({"cpu": {"unknown_opcode": "skip", "return_skips_call": True}})
        assert cfg.cpu == CpuConfig(unknown_opcode="skip", rng_seed=None, return_skips_call=True)


class TestLoadConfig:
    def test_load_config_success(self, temp_yaml_file, machine_config_dict):
        with temp_yaml_file.open("w", encoding="utf-8") as fh:
            yaml.dump(machine_config_dict, fh)
        cfg = load_config(path=str(temp_yaml_file))
        assert cfg.cpu.rng_seed == 1234

    def test_bundled_config_matches_defaults(self):
        assert load_config() == MachineConfig()

    def test_hex_literals_in_yaml(self, temp_yaml_file):
        temp_yaml_file.write_text("memory:\n  program_start: 0x300\n", encoding="utf-8")
        assert load_config(str(temp_yaml_file)).memory.program_start == 0x300


class TestGetConfig:
    def test_get_config_caches(self):
        with patch("chip8.utils.config_loader._LOADER_CACHE", {}):
            with patch("chip8.utils.config_loader.load_config") as mock_load:
                mock_config = Mock(spec=MachineConfig)
                mock_load.return_value = mock_config
                assert get_config() is mock_config
                assert get_config() is mock_config
                mock_load.assert_called_once_with()

    def test_clear_config_cache(self):
        first = get_config()
        clear_config_cache()
        second = get_config()
        assert first == second
        assert first is not second
