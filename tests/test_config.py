"""Tests for config module."""

import pytest
import tomllib
from pathlib import Path

from mlw.config import (
    DEFAULT_CONFIG,
    WatchConfiguration,
    generate_default_config,
    load_config,
)
from mlw.exceptions import ConfigError


def write_config(tmp_path, body):
    config_file = tmp_path / "mlw.toml"
    config_file.write_text(body)
    return config_file


class TestWatchConfiguration:
    """Tests for WatchConfiguration class."""

    def test_default_values(self):
        config = WatchConfiguration(paths=("./src",))
        assert config.paths == ("./src",)
        assert config.script_type is None
        assert config.script_args == ()
        assert config.delay == 2
        assert config.ignore_pattern is None
        assert config.verbose is False
        assert config.stop_timeout == 5.0

    def test_paths_and_args_become_tuples(self):
        config = WatchConfiguration(paths=["a", Path("b")], script_args=["--dev"])
        assert config.paths == ("a", "b")
        assert config.script_args == ("--dev",)

    def test_immutable(self):
        config = WatchConfiguration(paths=("./src",))
        with pytest.raises(AttributeError):
            config.delay = 5

    def test_negative_delay_rejected(self):
        with pytest.raises(ConfigError):
            WatchConfiguration(paths=("./src",), delay=-1)

    def test_non_integer_delay_rejected(self):
        with pytest.raises(ConfigError):
            WatchConfiguration(paths=("./src",), delay=1.5)
        with pytest.raises(ConfigError):
            WatchConfiguration(paths=("./src",), delay=True)

    def test_zero_delay_allowed(self):
        assert WatchConfiguration(paths=("./src",), delay=0).delay == 0

    def test_non_positive_stop_timeout_rejected(self):
        with pytest.raises(ConfigError):
            WatchConfiguration(paths=("./src",), stop_timeout=0)

    def test_from_dict(self):
        config = WatchConfiguration.from_dict({
            "path": ["./src", "./lib"],
            "delay": 3,
            "verbose": True,
            "ignore_pattern": ".*\\.git.*",
            "script_type": "go",
            "script_args": ["--dev"],
            "stop_timeout": 2,
        })
        assert config.paths == ("./src", "./lib")
        assert config.delay == 3
        assert config.verbose is True
        assert config.ignore_pattern == ".*\\.git.*"
        assert config.script_type == "go"
        assert config.script_args == ("--dev",)
        assert config.stop_timeout == 2.0

    def test_from_dict_single_path_string(self):
        config = WatchConfiguration.from_dict({"path": "./src", "delay": 1})
        assert config.paths == ("./src",)

    def test_from_dict_missing_delay(self):
        with pytest.raises(ConfigError, match="delay"):
            WatchConfiguration.from_dict({"path": ["./src"]})

    def test_from_dict_bad_path_type(self):
        with pytest.raises(ConfigError, match="path"):
            WatchConfiguration.from_dict({"path": 3, "delay": 1})

    def test_from_dict_bad_script_args(self):
        with pytest.raises(ConfigError, match="script_args"):
            WatchConfiguration.from_dict({"path": ["./src"], "delay": 1, "script_args": "--dev"})

    def test_from_dict_verbose_must_be_bool(self):
        with pytest.raises(ConfigError, match="verbose"):
            WatchConfiguration.from_dict({"path": ["./src"], "delay": 1, "verbose": "no"})
        with pytest.raises(ConfigError, match="verbose"):
            WatchConfiguration.from_dict({"path": ["./src"], "delay": 1, "verbose": 1})


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        config_file = write_config(tmp_path, f"""
path = ["{src}"]
delay = 1
script_type = "python"
script_args = ["--reload"]
""")
        config = load_config(config_file)
        assert config.paths == (str(src),)
        assert config.delay == 1
        assert config.script_type == "python"
        assert config.script_args == ("--reload",)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read config file"):
            load_config(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        config_file = write_config(tmp_path, "path = [\n")
        with pytest.raises(ConfigError, match="Failed to parse config file"):
            load_config(config_file)

    def test_nonexistent_path(self, tmp_path):
        config_file = write_config(tmp_path, f"""
path = ["{tmp_path / 'missing'}"]
delay = 1
""")
        with pytest.raises(ConfigError, match="do not exist"):
            load_config(config_file)

    def test_empty_path_list(self, tmp_path):
        config_file = write_config(tmp_path, "path = []\ndelay = 1\n")
        with pytest.raises(ConfigError, match="do not exist"):
            load_config(config_file)

    def test_unknown_script_type_loads(self, tmp_path):
        # Script types are resolved when the script is started
        config_file = write_config(tmp_path, f"""
path = ["{tmp_path}"]
delay = 1
script_type = "cobol"
""")
        assert load_config(config_file).script_type == "cobol"


class TestGenerateDefaultConfig:
    """Tests for generate_default_config function."""

    def test_writes_default(self, tmp_path):
        output = tmp_path / "mlw.toml"
        generate_default_config(output)
        assert output.read_text() == DEFAULT_CONFIG

    def test_refuses_to_overwrite(self, tmp_path):
        output = tmp_path / "mlw.toml"
        output.write_text("delay = 1\n")
        with pytest.raises(ConfigError, match="already exists"):
            generate_default_config(output)
        assert output.read_text() == "delay = 1\n"

    def test_default_config_parses(self):
        raw = tomllib.loads(DEFAULT_CONFIG)
        config = WatchConfiguration.from_dict(raw)
        assert config.paths == ("./src",)
        assert config.delay == 2
        assert config.verbose is True
        assert config.ignore_pattern == ".*\\.git.*"
        assert config.script_type == "node"
        assert config.script_args == ()
