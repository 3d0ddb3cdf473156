"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tfexport.config import EdgeGridConfig, ExporterConfig, load_config
from tfexport.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "AKAMAI_HOST",
        "AKAMAI_CLIENT_TOKEN",
        "AKAMAI_CLIENT_SECRET",
        "AKAMAI_ACCESS_TOKEN",
        "AKAMAI_ACCOUNT_KEY",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


class TestFromEdgerc:
    def test_reads_named_section(self, edgerc_file):
        config = ExporterConfig.from_edgerc(edgerc_file, "papi")

        assert config.edgegrid.host == "akab-papi.luna.akamaiapis.net"
        assert config.edgegrid.client_token == "ct-papi"
        assert config.edgegrid.max_body == 2048
        assert config.export.section == "papi"

    def test_account_key_is_passed_through(self, edgerc_file):
        config = ExporterConfig.from_edgerc(edgerc_file, "default", account_key="1-ABC")

        assert config.edgegrid.account_key == "1-ABC"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ExporterConfig.from_edgerc(tmp_path / "nope")

    def test_missing_section(self, edgerc_file):
        with pytest.raises(ConfigurationError, match="Section 'gtm' not found"):
            ExporterConfig.from_edgerc(edgerc_file, "gtm")

    def test_missing_keys(self, tmp_path):
        path = tmp_path / ".edgerc"
        path.write_text("[default]\nhost = h\nclient_token = t\n")

        with pytest.raises(ConfigurationError, match="client_secret, access_token"):
            ExporterConfig.from_edgerc(path)


class TestFromFile:
    def test_round_trip_through_yaml(self, tmp_path, edgegrid_config):
        path = tmp_path / "conf" / "config.yaml"
        original = ExporterConfig(edgegrid=edgegrid_config)
        original.export.page_size = 50

        original.to_file(path)
        loaded = ExporterConfig.from_file(path)

        assert loaded.edgegrid == edgegrid_config
        assert loaded.export.page_size == 50
        assert loaded.export.tf_work_path == Path(".")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("edgegrid: [unclosed")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ExporterConfig.from_file(path)

    def test_unknown_edgegrid_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "edgegrid:\n"
            "  host: h.example\n"
            "  client_token: ct\n"
            "  client_secret: cs\n"
            "  access_token: at\n"
            "  max-body: 10\n"
        )

        with pytest.raises(ConfigurationError, match="Unknown key.*'edgegrid'.*max-body"):
            ExporterConfig.from_file(path)

    def test_unknown_export_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("export:\n  pagesize: 10\n")

        with pytest.raises(ConfigurationError, match="pagesize"):
            ExporterConfig.from_file(path)

    def test_logging_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: DEBUG\n  format: json\n  file: logs/export.log\n")

        config = ExporterConfig.from_file(path)

        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"
        assert config.logging.file == Path("logs/export.log")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="expected dictionary"):
            ExporterConfig.from_file(path)


class TestFromEnv:
    def test_no_host_means_no_credentials(self):
        assert ExporterConfig.from_env().edgegrid is None

    def test_reads_credentials(self, monkeypatch):
        monkeypatch.setenv("AKAMAI_HOST", "h.example")
        monkeypatch.setenv("AKAMAI_CLIENT_TOKEN", "ct")
        monkeypatch.setenv("AKAMAI_CLIENT_SECRET", "cs")
        monkeypatch.setenv("AKAMAI_ACCESS_TOKEN", "at")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = ExporterConfig.from_env()

        assert config.edgegrid == EdgeGridConfig("h.example", "ct", "cs", "at")
        assert config.logging.level == "DEBUG"

    def test_partial_credentials(self, monkeypatch):
        monkeypatch.setenv("AKAMAI_HOST", "h.example")

        with pytest.raises(ConfigurationError, match="environment"):
            ExporterConfig.from_env()


class TestLoadConfig:
    def test_falls_back_to_edgerc(self, edgerc_file):
        config = load_config(edgerc=edgerc_file, section="papi", account_key="1-XYZ")

        assert config.edgegrid.client_token == "ct-papi"
        assert config.edgegrid.account_key == "1-XYZ"
        assert config.export.section == "papi"

    def test_environment_wins_over_edgerc(self, monkeypatch, edgerc_file):
        monkeypatch.setenv("AKAMAI_HOST", "env.example")
        monkeypatch.setenv("AKAMAI_CLIENT_TOKEN", "ct")
        monkeypatch.setenv("AKAMAI_CLIENT_SECRET", "cs")
        monkeypatch.setenv("AKAMAI_ACCESS_TOKEN", "at")

        config = load_config(edgerc=edgerc_file)

        assert config.edgegrid.host == "env.example"

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            load_config(config_file=tmp_path / "missing.yaml")
