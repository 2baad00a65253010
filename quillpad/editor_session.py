"""Editing session holding the state of the open document.

The session owns the text buffer, the selection, the file path, the
modification flag and the encoding the document will be saved with.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from upath import UPath

from quillpad.consts import APP_NAME, UNTITLED_NAME
from quillpad.enums import EncodingTag
from quillpad.services.encoding_service import utf16_length
from quillpad.services.file_service import FileService
from quillpad.services.search_service import from_utf16_position

if TYPE_CHECKING:
	from quillpad.config import QuillpadConfig

log = logging.getLogger(__name__)


class EditorSession:
	"""State of the document being edited.

	Attributes:
		text: The document text.
		path: The file backing the document, None for a new document.
		encoding: The encoding used when the document is saved.
		modified: Whether the text has unsaved changes.
		selection: The selected ``(start, end)`` span in UTF-16 code units,
			equal bounds for a caret.
	"""

	def __init__(self, config: QuillpadConfig | None = None) -> None:
		"""Initialise an empty, untitled session.

		Args:
			config: Configuration to use, the global configuration when None.
		"""
		if config is None:
			from quillpad.config import conf

			config = conf()
		self.config = config
		self.text = ""
		self.path: UPath | None = None
		self.encoding: EncodingTag = config.encoding.default_encoding
		self.modified = False
		self.selection: tuple[int, int] = (0, 0)

	@property
	def title(self) -> str:
		"""Window title of the document, with a leading ``*`` when modified."""
		name = self.path.name if self.path else UNTITLED_NAME
		prefix = "*" if self.modified else ""
		return f"{prefix}{name} - {APP_NAME}"

	def new(self) -> None:
		"""Start a new, empty document."""
		log.debug("Starting a new document")
		self.text = ""
		self.path = None
		self.encoding = self.config.encoding.default_encoding
		self.modified = False
		self.selection = (0, 0)

	def load(self, path: str | os.PathLike) -> None:
		"""Replace the document with the content of a file.

		The session is left unchanged when the file cannot be loaded.

		Args:
			path: The file to load.

		Raises:
			ReadError: If the file cannot be opened or read.
			SourceTooLargeError: If the file is too large.
			DecodeError: If the content cannot be decoded.
		"""
		loaded = FileService.load_text_file(
			path,
			max_size=self.config.files.max_size,
			ansi_codepage=self.config.encoding.ansi_codepage,
			utf8_errors=str(self.config.encoding.utf8_errors),
		)
		self.text = loaded.text
		self.path = UPath(path)
		self.encoding = loaded.encoding
		self.modified = False
		self.selection = (0, 0)
		log.debug("Document loaded from %s", self.path)

	def save(self, path: str | os.PathLike | None = None) -> None:
		"""Save the document.

		Args:
			path: Target file for a "save as", the current path when None.

		Raises:
			ValueError: If no path is given and the document has none.
			EncodeError: If the text cannot be encoded.
			WriteError: If the file cannot be written.
		"""
		target = UPath(path) if path is not None else self.path
		if target is None:
			raise ValueError("No file path to save the document to")
		self.encoding = FileService.save_text_file(
			target,
			self.text,
			self.encoding,
			ansi_codepage=self.config.encoding.ansi_codepage,
		)
		self.path = target
		self.modified = False

	def set_text(self, text: str) -> None:
		"""Install a new text in the buffer and mark the document modified.

		Args:
			text: The new document text.
		"""
		self.text = text
		self.modified = True
		start, end = self.selection
		self.select(start, end)

	def select(self, start: int, end: int) -> None:
		"""Set the selection, clamped to the text bounds.

		Args:
			start: Start of the selection, in UTF-16 code units.
			end: End of the selection, in UTF-16 code units.
		"""
		length = utf16_length(self.text)
		start = min(max(start, 0), length)
		end = min(max(end, start), length)
		self.selection = (start, end)

	def replace_selection(self, replacement: str) -> None:
		"""Replace the selected text and select the inserted text.

		Args:
			replacement: The text inserted in place of the selection.
		"""
		start, end = (
			from_utf16_position(self.text, pos) for pos in self.selection
		)
		self.set_text(self.text[:start] + replacement + self.text[end:])
		unit_start = utf16_length(self.text[:start])
		self.select(unit_start, unit_start + utf16_length(replacement))
