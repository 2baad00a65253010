"""Tests for the quillpad configuration."""

import pytest
import yaml
from pydantic import ValidationError

from quillpad.config import (
	LogLevelEnum,
	QuillpadConfig,
	Utf8ErrorsEnum,
	conf,
	config_helper,
	get_config_value,
	set_config_value,
)
from quillpad.consts import MAX_FILE_SIZE
from quillpad.enums import EncodingTag
from quillpad.services.search_service import SearchDirection


class TestDefaults:
	"""Tests for default configuration values."""

	def test_defaults(self, config):
		"""Default values match the documented ones."""
		assert config.general.log_level == LogLevelEnum.INFO
		assert config.encoding.ansi_codepage == "cp1252"
		assert config.encoding.utf8_errors == Utf8ErrorsEnum.STRICT
		assert config.encoding.default_encoding == EncodingTag.UTF8
		assert config.files.max_size == MAX_FILE_SIZE
		assert config.search.match_case is False
		assert config.search.direction == SearchDirection.FORWARD

	def test_conf_is_cached(self):
		"""conf() returns the same instance."""
		assert conf() is conf()


class TestValidation:
	"""Tests for configuration validation."""

	def test_codepage_normalised(self):
		"""Code page aliases are normalised to the codec name."""
		config = QuillpadConfig(encoding={"ansi_codepage": "windows-1252"})
		assert config.encoding.ansi_codepage == "cp1252"

	@pytest.mark.parametrize("codepage", ["no-such-codec", "utf-8", "utf-16"])
	def test_invalid_codepage(self, codepage):
		"""Unknown and multi-byte codecs are rejected."""
		with pytest.raises(ValidationError):
			QuillpadConfig(encoding={"ansi_codepage": codepage})

	def test_negative_max_size(self):
		"""The size limit cannot be negative."""
		with pytest.raises(ValidationError):
			QuillpadConfig(files={"max_size": -1})

	def test_direction_by_name(self):
		"""The search direction can be given by name."""
		config = QuillpadConfig(search={"direction": "backward"})
		assert config.search.direction == SearchDirection.BACKWARD

	def test_env_override(self, monkeypatch):
		"""Settings can be overridden with QUILLPAD_ variables."""
		monkeypatch.setenv("QUILLPAD_SEARCH__MATCH_CASE", "true")
		assert QuillpadConfig().search.match_case is True


class TestSaveConfig:
	"""Tests for saving the configuration."""

	def test_save_writes_non_default_values(self, config_dir):
		"""Only values differing from the defaults are saved."""
		config = QuillpadConfig(general={"log_level": "debug"})
		config.save()
		with (config_dir / "config.yml").open(encoding="UTF-8") as config_file:
			saved = yaml.safe_load(config_file)
		assert saved["general"] == {"log_level": "debug"}

	def test_search_existing_path_prefers_existing_parent(self, tmp_path):
		"""The first path with an existing parent is chosen."""
		missing = tmp_path / "missing" / "config.yml"
		existing = tmp_path / "config.yml"
		assert (
			config_helper.search_existing_path([missing, existing]) == existing
		)

	def test_saved_file_is_loaded(self):
		"""A saved value is read back from the config file."""
		QuillpadConfig(search={"match_case": True}).save()
		assert QuillpadConfig().search.match_case is True


class TestConfigFileIsolation:
	"""Tests for the config file location used by the test suite."""

	def test_yaml_file_in_config_dir(self, config_dir):
		"""Settings are read from the temporary config directory."""
		(config_dir / "config.yml").write_text(
			"encoding:\n  ansi_codepage: cp437\n", encoding="UTF-8"
		)
		assert QuillpadConfig().encoding.ansi_codepage == "cp437"

	def test_no_config_file_gives_defaults(self, config_dir):
		"""Without a config file every setting has its default."""
		assert not (config_dir / "config.yml").exists()
		assert QuillpadConfig().encoding.ansi_codepage == "cp1252"


class TestConfigValues:
	"""Tests for get_config_value and set_config_value."""

	def test_get_value(self, config):
		"""Values are returned in their file form."""
		assert get_config_value(config, "encoding.ansi_codepage") == "cp1252"
		assert get_config_value(config, "search.direction") == 1

	@pytest.mark.parametrize(
		"key", ["search", "search.unknown", "unknown.match_case", ""]
	)
	def test_unknown_key(self, config, key):
		"""Keys must name an existing setting."""
		with pytest.raises(KeyError):
			get_config_value(config, key)
		with pytest.raises(KeyError):
			set_config_value(config, key, "1")

	def test_set_value_converts(self, config):
		"""Typed values are converted and validated."""
		updated = set_config_value(config, "search.match_case", "true")
		assert updated.search.match_case is True
		updated = set_config_value(updated, "files.max_size", "1024")
		assert updated.files.max_size == 1024
		assert updated.search.match_case is True
		assert config.search.match_case is False

	def test_set_direction_by_name(self, config):
		"""Directions are set by name."""
		updated = set_config_value(config, "search.direction", "backward")
		assert updated.search.direction == SearchDirection.BACKWARD

	def test_set_invalid_value(self, config):
		"""Invalid values are rejected."""
		with pytest.raises(ValidationError):
			set_config_value(config, "encoding.ansi_codepage", "utf-8")
