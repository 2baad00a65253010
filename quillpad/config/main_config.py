import codecs
import logging
from functools import cache

from pydantic import BaseModel, Field, field_validator

from quillpad.consts import DEFAULT_ANSI_CODEPAGE, MAX_FILE_SIZE
from quillpad.enums import EncodingTag
from quillpad.services.search_service import SearchDirection

from .config_enums import LogLevelEnum, Utf8ErrorsEnum
from .config_helper import (
	QuillpadBaseSettings,
	get_settings_config_dict,
	save_config_file,
)

log = logging.getLogger(__name__)

config_file_name = "config.yml"


class GeneralSettings(BaseModel):
	log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO)


class EncodingSettings(BaseModel):
	ansi_codepage: str = Field(default=DEFAULT_ANSI_CODEPAGE)
	utf8_errors: Utf8ErrorsEnum = Field(default=Utf8ErrorsEnum.STRICT)
	default_encoding: EncodingTag = Field(default=EncodingTag.UTF8)

	@field_validator("ansi_codepage")
	@classmethod
	def validate_ansi_codepage(cls, value: str) -> str:
		"""Ensure the code page names a single-byte codec known to Python.

		Args:
			value: The configured code page name.

		Returns:
			The normalised codec name.

		Raises:
			ValueError: If the codec is unknown or not single-byte.
		"""
		try:
			info = codecs.lookup(value)
		except LookupError as err:
			raise ValueError(f"Unknown code page: {value}") from err
		if len("\u00e9\u20ac\u4e00".encode(info.name, errors="replace")) != 3:
			raise ValueError(f"Not a single-byte code page: {value}")
		return info.name


class FilesSettings(BaseModel):
	max_size: int = Field(default=MAX_FILE_SIZE, ge=0)


class SearchSettings(BaseModel):
	match_case: bool = Field(default=False)
	direction: SearchDirection = Field(default=SearchDirection.FORWARD)

	@field_validator("direction", mode="before")
	@classmethod
	def validate_direction(cls, value):
		"""Accept direction names such as ``backward`` besides their values."""
		if isinstance(value, str):
			name = value.strip().upper()
			if name in SearchDirection.__members__:
				return SearchDirection[name]
			if name.isdigit():
				return int(name)
		return value


class QuillpadConfig(QuillpadBaseSettings):
	model_config = get_settings_config_dict(config_file_name)

	general: GeneralSettings = Field(default_factory=GeneralSettings)
	encoding: EncodingSettings = Field(default_factory=EncodingSettings)
	files: FilesSettings = Field(default_factory=FilesSettings)
	search: SearchSettings = Field(default_factory=SearchSettings)

	def save(self):
		save_config_file(
			self.model_dump(
				mode="json",
				by_alias=True,
				exclude_defaults=True,
				exclude_none=True,
			),
			config_file_name,
		)


@cache
def get_quillpad_config() -> QuillpadConfig:
	log.debug("Loading quillpad config")
	return QuillpadConfig()


def set_config_value(
	config: QuillpadConfig, key: str, value: str
) -> QuillpadConfig:
	"""Return a copy of *config* with one setting changed.

	The new value goes through the same validation as the config file.

	Args:
		config: The configuration to start from.
		key: The dotted setting name, e.g. ``search.match_case``.
		value: The new value, as typed by the user.

	Returns:
		The validated configuration.

	Raises:
		KeyError: If *key* does not name a setting.
		pydantic.ValidationError: If *value* is not valid for the setting.
	"""
	get_config_value(config, key)
	values = config.model_dump(mode="json")
	section, _, name = key.partition(".")
	values[section][name] = value
	log.debug("Setting %s to %r", key, value)
	return QuillpadConfig(**values)


def get_config_value(config: QuillpadConfig, key: str):
	"""Return the value of one setting as stored in the config file.

	Args:
		config: The configuration to read.
		key: The dotted setting name, e.g. ``search.match_case``.

	Raises:
		KeyError: If *key* does not name a setting.
	"""
	section, _, name = key.partition(".")
	values = config.model_dump(mode="json")
	if name not in values.get(section, {}):
		raise KeyError(key)
	return values[section][name]
