"""Tests for configuration management."""

import pytest
import yaml

from src.msbuild_junit.config import (
    DEFAULT_COMPILED_EXTENSIONS,
    ConfigurationError,
    LoggerConfig,
    _parse_env_bool,
    load_config,
    parse_parameters,
    validate_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("MSBUILD_JUNIT_OUTPUT", "MSBUILD_JUNIT_EXTENSIONS", "MSBUILD_JUNIT_INDENT"):
        monkeypatch.delenv(var, raising=False)


class TestParseParameters:
    """Tests for the logger parameter string."""

    def test_single_path(self):
        assert parse_parameters("report.xml") == "report.xml"

    def test_strips_whitespace(self):
        assert parse_parameters("  out/report.xml ") == "out/report.xml"

    def test_none_raises(self):
        with pytest.raises(ConfigurationError, match="Log file was not set"):
            parse_parameters(None)

    def test_empty_raises(self):
        with pytest.raises(ConfigurationError, match="Log file was not set"):
            parse_parameters("")

    def test_empty_first_item_raises(self):
        with pytest.raises(ConfigurationError, match="Log file was not set"):
            parse_parameters(";other")

    def test_too_many_parameters(self):
        with pytest.raises(ConfigurationError, match="Too many parameters"):
            parse_parameters("report.xml;verbose")

    def test_trailing_separator_counts_as_extra(self):
        with pytest.raises(ConfigurationError, match="Too many parameters"):
            parse_parameters("report.xml;")


class TestLoggerConfig:
    """Tests for LoggerConfig dataclass."""

    def test_defaults(self):
        config = LoggerConfig()
        assert config.output is None
        assert config.compiled_extensions == DEFAULT_COMPILED_EXTENSIONS
        assert config.indent is True

    def test_extensions_normalized(self):
        config = LoggerConfig(compiled_extensions=[".CPP", " h "])
        assert config.compiled_extensions == ["cpp", "h"]

    def test_extensions_from_comma_string(self):
        config = LoggerConfig(compiled_extensions="cpp,cxx")
        assert config.compiled_extensions == ["cpp", "cxx"]

    def test_default_extensions_not_shared(self):
        c1 = LoggerConfig()
        c2 = LoggerConfig()
        c1.compiled_extensions.append("cxx")
        assert "cxx" not in c2.compiled_extensions


class TestParseEnvBool:
    """Tests for _parse_env_bool helper."""

    def test_returns_none_when_not_set(self):
        assert _parse_env_bool("NONEXISTENT_VAR_12345") is None

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_truthy(self, monkeypatch, value):
        monkeypatch.setenv("TEST_BOOL_VAR", value)
        assert _parse_env_bool("TEST_BOOL_VAR") is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off"])
    def test_falsy(self, monkeypatch, value):
        monkeypatch.setenv("TEST_BOOL_VAR", value)
        assert _parse_env_bool("TEST_BOOL_VAR") is False

    def test_raises_on_invalid_value(self, monkeypatch):
        monkeypatch.setenv("TEST_BOOL_VAR", "maybe")
        with pytest.raises(ConfigurationError, match="must be a boolean"):
            _parse_env_bool("TEST_BOOL_VAR")


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_defaults_without_file(self):
        config = load_config()
        assert config.output is None
        assert config.indent is True

    def test_load_from_yaml_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            yaml.dump({"output": "build.xml", "compiled_extensions": ["cpp", "cxx"], "indent": False})
        )
        config = load_config(str(config_file))
        assert config.output == "build.xml"
        assert config.compiled_extensions == ["cpp", "cxx"]
        assert config.indent is False

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"output": "from-file.xml"}))
        monkeypatch.setenv("MSBUILD_JUNIT_OUTPUT", "from-env.xml")
        config = load_config(str(config_file))
        assert config.output == "from-env.xml"

    def test_parameters_override_env(self, monkeypatch):
        monkeypatch.setenv("MSBUILD_JUNIT_OUTPUT", "from-env.xml")
        config = load_config(parameters="from-params.xml")
        assert config.output == "from-params.xml"

    def test_invalid_parameters_raise(self):
        with pytest.raises(ConfigurationError, match="Too many parameters"):
            load_config(parameters="a.xml;b.xml")

    def test_env_extensions(self, monkeypatch):
        monkeypatch.setenv("MSBUILD_JUNIT_EXTENSIONS", "cpp, cc ,")
        config = load_config()
        assert config.compiled_extensions == ["cpp", "cc"]

    def test_env_indent(self, monkeypatch):
        monkeypatch.setenv("MSBUILD_JUNIT_INDENT", "false")
        assert load_config().indent is False

    def test_invalid_yaml_raises(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(":\ninvalid: [yaml: {broken")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(config_file))

    def test_non_mapping_yaml_raises(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(str(config_file))

    def test_unknown_key_raises(self, tmp_path):
        config_file = tmp_path / "extra.yaml"
        config_file.write_text(yaml.dump({"output": "a.xml", "colour": "blue"}))
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(str(config_file))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_config(str(tmp_path / "nope.yaml"))

    def test_empty_yaml_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        config = load_config(str(config_file))
        assert config.compiled_extensions == DEFAULT_COMPILED_EXTENSIONS


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid(self):
        assert validate_config(LoggerConfig(output="report.xml")) == []

    def test_missing_output(self):
        errors = validate_config(LoggerConfig())
        assert any("output is required" in e for e in errors)

    def test_empty_extensions(self):
        errors = validate_config(LoggerConfig(output="r.xml", compiled_extensions=[]))
        assert any("at least one extension" in e for e in errors)

    def test_invalid_extension(self):
        errors = validate_config(LoggerConfig(output="r.xml", compiled_extensions=["c|pp"]))
        assert any("invalid extension" in e for e in errors)

    def test_non_bool_indent(self):
        errors = validate_config(LoggerConfig(output="r.xml", indent="yes"))
        assert any("indent" in e for e in errors)
