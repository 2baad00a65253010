from __future__ import annotations

from enum import StrEnum, auto


class EncodingTag(StrEnum):
	UTF8 = auto()
	UTF16LE = auto()
	UTF16BE = auto()
	ANSI = auto()

	@property
	def saved_as(self) -> EncodingTag:
		"""Tag carried by a document after it has been written with this tag.

		Big-endian UTF-16 is never written back: it is saved as UTF-8 with a
		byte-order mark and the document is relabelled.
		"""
		if self is EncodingTag.UTF16BE:
			return EncodingTag.UTF8
		return self
