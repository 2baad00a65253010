"""Service layer for text encoding detection and conversion.

Converts raw file bytes into the canonical in-memory text of a document and
back. Four encodings are supported: UTF-8, UTF-16 little endian, UTF-16 big
endian and a single-byte legacy "ANSI" code page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quillpad.consts import (
	BOM_UTF8,
	BOM_UTF16BE,
	BOM_UTF16LE,
	DEFAULT_ANSI_CODEPAGE,
)
from quillpad.enums import EncodingTag

log = logging.getLogger(__name__)


class DecodeError(ValueError):
	"""Raised when raw bytes cannot be decoded with the requested encoding."""


class EncodeError(ValueError):
	"""Raised when text cannot be represented in the requested encoding."""


@dataclass(frozen=True)
class DecodedText:
	"""Text produced by :func:`decode_text`.

	Attributes:
		text: The decoded, encoding agnostic text.
		length: Number of UTF-16 code units in *text*.
	"""

	text: str
	length: int


def utf16_length(text: str) -> int:
	"""Return the number of UTF-16 code units needed to store *text*."""
	if text.isascii():
		return len(text)
	return len(text) + sum(1 for c in text if ord(c) >= 0x10000)


def truncate_utf16(text: str, length: int) -> str:
	"""Keep the first *length* UTF-16 code units of *text*.

	A surrogate pair cut in the middle leaves its high half as an unpaired
	surrogate.
	"""
	if length >= utf16_length(text):
		return text
	units = text.encode("utf-16-le", "surrogatepass")[: max(length, 0) * 2]
	return units.decode("utf-16-le", "surrogatepass")


def join_surrogates(text: str) -> str:
	"""Combine adjacent surrogate halves of *text* into single characters.

	Unpaired surrogates are left in place.

	Args:
		text: Text possibly holding surrogate code points.

	Returns:
		The text with every valid high/low surrogate pair merged.
	"""
	if not any(0xD800 <= ord(c) <= 0xDFFF for c in text):
		return text
	return text.encode("utf-16-le", "surrogatepass").decode(
		"utf-16-le", "surrogatepass"
	)


def _is_valid_utf8(data: bytes) -> bool:
	try:
		data.decode("utf-8")
	except UnicodeDecodeError:
		return False
	return True


def detect_encoding(data: bytes) -> EncodingTag:
	"""Guess the encoding of a raw byte buffer.

	The checks are made in this order, the first match wins:
	1. ``FF FE`` byte-order mark: UTF-16 LE
	2. ``FE FF`` byte-order mark: UTF-16 BE
	3. ``EF BB BF`` byte-order mark: UTF-8
	4. the whole buffer is well-formed UTF-8: UTF-8
	5. anything else: ANSI

	Args:
		data: The raw bytes to inspect.

	Returns:
		The detected encoding. ANSI is the fallback, this function never fails.
	"""
	if data.startswith(BOM_UTF16LE):
		encoding = EncodingTag.UTF16LE
	elif data.startswith(BOM_UTF16BE):
		encoding = EncodingTag.UTF16BE
	elif data.startswith(BOM_UTF8):
		encoding = EncodingTag.UTF8
	elif _is_valid_utf8(data):
		encoding = EncodingTag.UTF8
	else:
		encoding = EncodingTag.ANSI
	log.debug("Detected encoding %s for %d bytes", encoding, len(data))
	return encoding


def _decode_utf16(data: bytes, bom: bytes, codec: str) -> str:
	if data.startswith(bom):
		data = data[len(bom) :]
	if len(data) % 2:
		log.debug("Dropping trailing odd byte of UTF-16 input")
		data = data[:-1]
	return data.decode(codec, "surrogatepass")


def decode_text(
	data: bytes,
	encoding: EncodingTag,
	ansi_codepage: str = DEFAULT_ANSI_CODEPAGE,
	utf8_errors: str = "strict",
) -> DecodedText:
	"""Decode raw bytes into canonical text.

	A leading byte-order mark matching *encoding* is skipped. UTF-16 input is
	read unit by unit: a trailing odd byte is dropped and unpaired surrogates
	are kept as they are. ANSI input maps every byte to one character,
	unmappable bytes become U+FFFD.

	Args:
		data: The raw bytes to decode.
		encoding: The encoding of *data*, usually from :func:`detect_encoding`.
		ansi_codepage: Python codec name of the ANSI code page.
		utf8_errors: ``strict`` to reject malformed UTF-8, ``replace`` to
			substitute U+FFFD.

	Returns:
		The decoded text.

	Raises:
		DecodeError: If the bytes are not valid for *encoding*. No partial
			text is returned.
	"""
	try:
		match encoding:
			case EncodingTag.UTF16LE:
				text = _decode_utf16(data, BOM_UTF16LE, "utf-16-le")
			case EncodingTag.UTF16BE:
				text = _decode_utf16(data, BOM_UTF16BE, "utf-16-be")
			case EncodingTag.UTF8:
				# a lone mark decodes to empty text so that empty documents
				# round-trip through encode_text
				if data.startswith(BOM_UTF8):
					data = data[len(BOM_UTF8) :]
				text = data.decode("utf-8", utf8_errors)
			case EncodingTag.ANSI:
				text = data.decode(ansi_codepage, "replace")
			case _:
				raise DecodeError(f"Unsupported encoding: {encoding!r}")
	except UnicodeDecodeError as err:
		raise DecodeError(f"Unable to decode {encoding} text: {err}") from err
	except LookupError as err:
		raise DecodeError(f"Unknown code page: {ansi_codepage}") from err
	length = utf16_length(text)
	log.debug(
		"Decoded %d bytes as %s into %d code units",
		len(data),
		encoding,
		length,
	)
	return DecodedText(text=text, length=length)


def encode_text(
	text: str,
	encoding: EncodingTag,
	length: int | None = None,
	ansi_codepage: str = DEFAULT_ANSI_CODEPAGE,
) -> bytes:
	"""Encode canonical text into raw bytes ready to be written.

	UTF-8 and UTF-16 LE output always starts with the matching byte-order
	mark. UTF-16 BE is never produced: it is written as UTF-8 with its mark,
	see :attr:`EncodingTag.saved_as`. ANSI output has no mark and is lossy,
	characters missing from the code page become ``?``.

	Args:
		text: The text to encode.
		encoding: The target encoding.
		length: Number of UTF-16 code units of *text* to encode, all when None.
		ansi_codepage: Python codec name of the ANSI code page.

	Returns:
		The encoded bytes.

	Raises:
		EncodeError: If *text* holds an unpaired surrogate and the target is
			UTF-8, or if the code page is unknown.
	"""
	if length is not None:
		text = truncate_utf16(text, length)
	try:
		match encoding:
			case EncodingTag.UTF16LE:
				data = BOM_UTF16LE + text.encode("utf-16-le", "surrogatepass")
			case EncodingTag.ANSI:
				data = join_surrogates(text).encode(ansi_codepage, "replace")
			case EncodingTag.UTF8 | EncodingTag.UTF16BE:
				data = BOM_UTF8 + join_surrogates(text).encode("utf-8")
			case _:
				raise EncodeError(f"Unsupported encoding: {encoding!r}")
	except UnicodeEncodeError as err:
		raise EncodeError(
			f"Unable to encode text as {encoding}: {err}"
		) from err
	except LookupError as err:
		raise EncodeError(f"Unknown code page: {ansi_codepage}") from err
	log.debug(
		"Encoded %d chars as %s into %d bytes", len(text), encoding, len(data)
	)
	return data

