"""Common test fixtures for quillpad."""

import os

import pytest

from quillpad import global_vars
from quillpad.config import QuillpadConfig, config_helper
from quillpad.config.main_config import config_file_name, get_quillpad_config
from quillpad.editor_session import EditorSession

FOX_TEXT = "The quick fox. The lazy fox."


@pytest.fixture
def config_dir(tmp_path):
	"""Return the directory standing in for the user config directory."""
	path = tmp_path / "config"
	path.mkdir()
	return path


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, config_dir):
	"""Keep tests away from the user config file and QUILLPAD_ variables."""
	for key in [k for k in os.environ if k.startswith("QUILLPAD_")]:
		monkeypatch.delenv(key)
	monkeypatch.setattr(global_vars, "user_data_path", None)
	monkeypatch.setattr(config_helper, "user_config_path", config_dir)
	monkeypatch.setitem(
		QuillpadConfig.model_config,
		"yaml_file",
		config_dir / config_file_name,
	)
	get_quillpad_config.cache_clear()
	yield
	get_quillpad_config.cache_clear()


@pytest.fixture
def config():
	"""Return a configuration with default values."""
	return QuillpadConfig()


@pytest.fixture
def session(config):
	"""Return an empty editor session."""
	return EditorSession(config)


@pytest.fixture
def fox_text():
	"""Return the text used by the search examples."""
	return FOX_TEXT


@pytest.fixture
def write_file(tmp_path):
	"""Return a helper writing raw bytes to a file of the temp directory."""

	def _write(data: bytes, name: str = "test.txt"):
		file_path = tmp_path / name
		file_path.write_bytes(data)
		return file_path

	return _write
