"""Service layer for text search logic.

Provides the find and replace-all algorithms used on the document buffer,
along with helpers converting positions to and from UTF-16 code units.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


class SearchDirection(enum.IntEnum):
	"""Enumeration for search directions."""

	BACKWARD = enum.auto(0)
	FORWARD = enum.auto()


def utf16_position(text: str, position: int) -> int:
	"""Convert a character position in *text* to a UTF-16 code unit offset.

	Characters outside the Basic Multilingual Plane (BMP) are represented by
	surrogate pairs in UTF-16, taking up two positions instead of one.

	Args:
		text: The input string.
		position: The character position in the string.

	Returns:
		The matching offset in the UTF-16 representation of *text*.
	"""
	relevant_text = text[:position]
	if relevant_text.isascii():
		return len(relevant_text)
	count_high_surrogates = sum(1 for c in relevant_text if ord(c) >= 0x10000)
	return len(relevant_text) + count_high_surrogates


def from_utf16_position(text: str, position: int) -> int:
	"""Convert a UTF-16 code unit offset into a character position in *text*.

	An offset falling between the two halves of a surrogate pair maps to the
	character following that pair.

	Args:
		text: The input string.
		position: The offset in the UTF-16 representation of *text*.

	Returns:
		The matching character position, clamped to the length of *text*.
	"""
	if text.isascii():
		return min(max(position, 0), len(text))
	units = 0
	for index, char in enumerate(text):
		if units >= position:
			return index
		units += 2 if ord(char) >= 0x10000 else 1
	return len(text)


def fold_case(text: str) -> str:
	"""Lower-case *text* for comparison without changing its length.

	Each character is lowered on its own, ignoring context rules such as the
	Greek final sigma. Characters whose lowercase form spans more than one
	character (for instance ``İ``) are kept unchanged so that positions in the
	folded copy are valid positions in *text*.

	Args:
		text: The text to fold.

	Returns:
		The folded copy.
	"""
	if text.isascii():
		return text.lower()
	folded = []
	for char in text:
		low = char.lower()
		folded.append(low if len(low) == 1 else char)
	return "".join(folded)


@dataclass(frozen=True)
class SearchMatch:
	"""Half-open span ``[start, end)`` of a match in the searched text.

	Both offsets count UTF-16 code units.
	"""

	start: int
	end: int


@dataclass(frozen=True)
class ReplaceResult:
	"""Outcome of :meth:`SearchService.replace_all`.

	Attributes:
		text: The text after replacement, the original when nothing matched.
		count: Number of replaced occurrences.
	"""

	text: str
	count: int


class SearchService:
	"""Service providing stateless search operations.

	All methods are static; no instance state is required.
	"""

	@staticmethod
	def prepare(
		text: str, needle: str, match_case: bool
	) -> tuple[str, str]:
		"""Return the haystack and needle copies used for comparison.

		Args:
			text: The text to search within.
			needle: The text to search for.
			match_case: Whether the comparison is case-sensitive.

		Returns:
			The ``(haystack, needle)`` pair, folded when *match_case* is False.
		"""
		if match_case:
			return text, needle
		return fold_case(text), fold_case(needle)

	@staticmethod
	def find(
		text: str,
		needle: str,
		match_case: bool,
		direction: SearchDirection = SearchDirection.FORWARD,
		from_pos: int = 0,
	) -> SearchMatch | None:
		"""Find the next or previous occurrence of *needle* in *text*.

		A forward search returns the first occurrence starting at or after
		*from_pos* and restarts from the top of the text when there is none.
		A backward search returns the last occurrence starting before
		*from_pos* and falls back to the last occurrence of the whole text.

		Args:
			text: The text to search within. It is never modified.
			needle: The text to search for.
			match_case: Whether the search is case-sensitive.
			direction: The search direction.
			from_pos: UTF-16 code unit offset the search starts from, clamped
				to the text.

		Returns:
			The span of the match in *text*, or None when there is none or
			when *needle* is empty.
		"""
		if not needle:
			return None
		haystack, needle_buf = SearchService.prepare(text, needle, match_case)
		pos = from_utf16_position(text, from_pos)
		if direction == SearchDirection.FORWARD:
			index = haystack.find(needle_buf, pos)
			if index < 0 and pos > 0:
				log.debug("Search wrapped to the start of the text")
				index = haystack.find(needle_buf)
		else:
			index = -1
			if pos > 0:
				index = haystack.rfind(
					needle_buf, 0, pos - 1 + len(needle_buf)
				)
			if index < 0 and pos < len(haystack):
				log.debug("Search wrapped to the end of the text")
				index = haystack.rfind(needle_buf, pos)
		if index < 0:
			return None
		return SearchMatch(
			utf16_position(text, index),
			utf16_position(text, index + len(needle_buf)),
		)

	@staticmethod
	def count_matches(text: str, needle: str, match_case: bool) -> int:
		"""Count the non-overlapping occurrences of *needle* in *text*.

		Args:
			text: The text to search within.
			needle: The text to count.
			match_case: Whether the comparison is case-sensitive.

		Returns:
			The number of occurrences, 0 for an empty needle.
		"""
		if not needle:
			return 0
		haystack, needle_buf = SearchService.prepare(text, needle, match_case)
		return haystack.count(needle_buf)

	@staticmethod
	def replace_all(
		text: str, needle: str, replacement: str, match_case: bool
	) -> ReplaceResult:
		"""Replace every occurrence of *needle* in *text* in a single pass.

		Occurrences are found left to right and never overlap. When the search
		is not case-sensitive the untouched parts of the text keep their
		original casing.

		Args:
			text: The text to process. It is never modified.
			needle: The text to replace.
			replacement: The text inserted in place of each occurrence.
			match_case: Whether the search is case-sensitive.

		Returns:
			The new text and the number of replacements.
		"""
		if not needle:
			return ReplaceResult(text, 0)
		haystack, needle_buf = SearchService.prepare(text, needle, match_case)
		count = haystack.count(needle_buf)
		if count == 0:
			return ReplaceResult(text, 0)
		parts: list[str] = []
		cursor = 0
		index = haystack.find(needle_buf)
		while index >= 0:
			parts.append(text[cursor:index])
			parts.append(replacement)
			cursor = index + len(needle_buf)
			index = haystack.find(needle_buf, cursor)
		parts.append(text[cursor:])
		result = "".join(parts)
		log.debug(
			"Replaced %d occurrences, %d -> %d chars",
			count,
			len(text),
			len(result),
		)
		return ReplaceResult(result, count)
