"""Service layer for loading and saving text files.

Owns the raw byte I/O of documents: files are read whole, their encoding is
detected and their content decoded; on save the text is encoded first and
then written in one go.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from upath import UPath

from quillpad.consts import DEFAULT_ANSI_CODEPAGE, MAX_FILE_SIZE
from quillpad.enums import EncodingTag
from quillpad.services.encoding_service import (
	decode_text,
	detect_encoding,
	encode_text,
)

log = logging.getLogger(__name__)


class SourceTooLargeError(ValueError):
	"""Raised when a file exceeds the maximum size accepted for loading."""


class ReadError(OSError):
	"""Raised when a file cannot be opened or read."""


class WriteError(OSError):
	"""Raised when a file cannot be created or written."""


@dataclass(frozen=True)
class LoadedText:
	"""Content of a loaded text file.

	Attributes:
		text: The decoded text.
		encoding: The encoding detected for the file.
	"""

	text: str
	encoding: EncodingTag


class FileService:
	"""Service providing stateless file operations."""

	@staticmethod
	def read_bytes(
		path: str | os.PathLike, max_size: int = MAX_FILE_SIZE
	) -> bytes:
		"""Read the whole content of a file.

		Args:
			path: The file to read.
			max_size: Largest accepted size in bytes.

		Returns:
			The raw content of the file.

		Raises:
			ReadError: If the file cannot be opened or read.
			SourceTooLargeError: If the file is larger than *max_size*.
		"""
		file_path = UPath(path)
		try:
			size = file_path.stat().st_size
		except OSError as err:
			raise ReadError(f"Unable to open file: {file_path}") from err
		if size > max_size:
			raise SourceTooLargeError(
				f"Unsupported file size: {size} bytes (max {max_size})"
			)
		try:
			return file_path.read_bytes()
		except OSError as err:
			raise ReadError(f"Failed reading file: {file_path}") from err

	@staticmethod
	def load_text_file(
		path: str | os.PathLike,
		max_size: int = MAX_FILE_SIZE,
		ansi_codepage: str = DEFAULT_ANSI_CODEPAGE,
		utf8_errors: str = "strict",
	) -> LoadedText:
		"""Load a text file, detecting its encoding.

		An empty file is an empty UTF-8 document and is not decoded.

		Args:
			path: The file to load.
			max_size: Largest accepted size in bytes.
			ansi_codepage: Python codec name of the ANSI code page.
			utf8_errors: Handling of malformed UTF-8, ``strict`` or ``replace``.

		Returns:
			The decoded text and its detected encoding.

		Raises:
			ReadError: If the file cannot be opened or read.
			SourceTooLargeError: If the file is larger than *max_size*.
			DecodeError: If the content cannot be decoded.
		"""
		data = FileService.read_bytes(path, max_size)
		if not data:
			log.debug("Empty file %s loaded as UTF-8", path)
			return LoadedText(text="", encoding=EncodingTag.UTF8)
		encoding = detect_encoding(data)
		decoded = decode_text(data, encoding, ansi_codepage, utf8_errors)
		log.info("Loaded %s (%s, %d chars)", path, encoding, decoded.length)
		return LoadedText(text=decoded.text, encoding=encoding)

	@staticmethod
	def save_text_file(
		path: str | os.PathLike,
		text: str,
		encoding: EncodingTag,
		ansi_codepage: str = DEFAULT_ANSI_CODEPAGE,
	) -> EncodingTag:
		"""Save text to a file with the given encoding.

		The text is encoded before the file is touched, so an encoding failure
		leaves an existing file intact.

		Args:
			path: The file to write, created or truncated.
			text: The text to save.
			encoding: The encoding to save with.
			ansi_codepage: Python codec name of the ANSI code page.

		Returns:
			The encoding the file was actually written with, which the
			document should carry from now on.

		Raises:
			EncodeError: If the text cannot be encoded.
			WriteError: If the file cannot be created or written.
		"""
		encoding = EncodingTag(encoding)
		data = encode_text(text, encoding, ansi_codepage=ansi_codepage)
		file_path = UPath(path)
		try:
			file_path.write_bytes(data)
		except OSError as err:
			raise WriteError(f"Failed writing file: {file_path}") from err
		saved_encoding = encoding.saved_as
		if saved_encoding != encoding:
			log.info(
				"%s saved as %s instead of %s", path, saved_encoding, encoding
			)
		log.info("Saved %s (%s, %d bytes)", path, saved_encoding, len(data))
		return saved_encoding
