"""Configuration module for quillpad."""

from .config_enums import LogLevelEnum, Utf8ErrorsEnum
from .main_config import (
	EncodingSettings,
	FilesSettings,
	GeneralSettings,
	QuillpadConfig,
	SearchSettings,
)
from .main_config import get_quillpad_config as conf
from .main_config import get_config_value, set_config_value

__all__ = [
	"conf",
	"EncodingSettings",
	"FilesSettings",
	"GeneralSettings",
	"get_config_value",
	"LogLevelEnum",
	"QuillpadConfig",
	"SearchSettings",
	"set_config_value",
	"Utf8ErrorsEnum",
]
