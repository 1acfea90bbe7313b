"""Tests for configuration loading and validation."""

import pytest

from less_census.config import CensusConfig, load_config
from less_census.exceptions import ConfigurationError, InvalidConfigError


class TestCensusConfig:
    """Defaults and validation."""

    def test_defaults(self):
        config = CensusConfig()
        assert config.backend == "process"
        assert config.max_depth == 64
        assert config.scan_statements is False
        assert config.report_format == "json"
        assert config.pool_size >= 1

    def test_explicit_pool_size(self):
        assert CensusConfig(workers=3).pool_size == 3

    def test_max_file_size_bytes(self):
        assert CensusConfig(max_file_size_mb=1).max_file_size_bytes == 1024 * 1024

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workers": 0},
            {"backend": "fiber"},
            {"start_method": "clone"},
            {"poll_interval_seconds": 0},
            {"max_file_size_mb": 0},
            {"extensions": ["less"]},
            {"max_depth": 0},
            {"report_format": "xml"},
            {"top": -1},
            {"verbosity": "chatty"},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            CensusConfig(**kwargs)

    def test_frozen(self):
        config = CensusConfig()
        with pytest.raises(AttributeError):
            config.workers = 2


class TestLoadConfig:
    """Merging files, environment and overrides."""

    def test_defaults_without_sources(self, isolated_config):
        assert load_config() == CensusConfig()

    def test_project_file(self, isolated_config):
        (isolated_config / "less-census.toml").write_text('backend = "thread"\ntop = 3\n')
        config = load_config()
        assert config.backend == "thread"
        assert config.top == 3

    def test_census_table(self, isolated_config):
        (isolated_config / "less-census.toml").write_text("[census]\nworkers = 2\n")
        assert load_config().workers == 2

    def test_global_file_is_overridden_by_project_file(self, isolated_config):
        (isolated_config / "home" / ".less-census.toml").write_text("top = 4\nworkers = 6\n")
        (isolated_config / "less-census.toml").write_text("top = 7\n")
        config = load_config()
        assert config.top == 7
        assert config.workers == 6

    def test_explicit_file(self, isolated_config):
        path = isolated_config / "custom.toml"
        path.write_text('extensions = [".less"]\nrecursive = true\n')
        config = load_config(path)
        assert config.extensions == [".less"]
        assert config.recursive is True

    def test_missing_explicit_file(self, isolated_config):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(isolated_config / "nope.toml")

    def test_invalid_toml(self, isolated_config):
        (isolated_config / "less-census.toml").write_text("top = = 3\n")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_unknown_key(self, isolated_config):
        (isolated_config / "less-census.toml").write_text("colour = 1\n")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_environment(self, isolated_config, monkeypatch):
        monkeypatch.setenv("LESS_CENSUS_WORKERS", "5")
        monkeypatch.setenv("LESS_CENSUS_SCAN_STATEMENTS", "yes")
        monkeypatch.setenv("LESS_CENSUS_EXTENSIONS", ".less, .css")
        monkeypatch.setenv("LESS_CENSUS_MAX_FILE_SIZE_MB", "2.5")
        config = load_config()
        assert config.workers == 5
        assert config.scan_statements is True
        assert config.extensions == [".less", ".css"]
        assert config.max_file_size_mb == 2.5

    def test_environment_beats_files(self, isolated_config, monkeypatch):
        (isolated_config / "less-census.toml").write_text("top = 3\n")
        monkeypatch.setenv("LESS_CENSUS_TOP", "9")
        assert load_config().top == 9

    def test_bad_environment_value(self, isolated_config, monkeypatch):
        monkeypatch.setenv("LESS_CENSUS_RECURSIVE", "maybe")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config()
        assert exc_info.value.key == "LESS_CENSUS_RECURSIVE"

    def test_overrides_win(self, isolated_config, monkeypatch):
        monkeypatch.setenv("LESS_CENSUS_TOP", "9")
        assert load_config(top=1).top == 1

    def test_none_overrides_are_ignored(self, isolated_config):
        (isolated_config / "less-census.toml").write_text("top = 3\n")
        assert load_config(top=None).top == 3

    def test_verbosity_flags(self, isolated_config):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_verbosity_from_file_and_environment(self, isolated_config, monkeypatch):
        (isolated_config / "less-census.toml").write_text('verbosity = "verbose"\nlog_file = "census.log"\n')
        config = load_config()
        assert config.verbosity == "verbose"
        assert config.log_file == "census.log"

        monkeypatch.setenv("LESS_CENSUS_VERBOSITY", "quiet")
        assert load_config().verbosity == "quiet"
        assert load_config(verbose=True).verbosity == "verbose"

    def test_invalid_override(self, isolated_config):
        with pytest.raises(ConfigurationError):
            load_config(backend="fiber")
