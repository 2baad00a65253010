"""Constant values used in the application."""

# application name
APP_NAME = "quillpad"

# application author
APP_AUTHOR = "quillpad"

# title used for documents that were never saved
UNTITLED_NAME = "Untitled"

# byte-order marks written and recognised for each Unicode encoding
BOM_UTF8 = b"\xef\xbb\xbf"
BOM_UTF16LE = b"\xff\xfe"
BOM_UTF16BE = b"\xfe\xff"

# single-byte code page used for the legacy "ANSI" encoding
DEFAULT_ANSI_CODEPAGE = "cp1252"

# largest file accepted for loading (32-bit length)
MAX_FILE_SIZE = 0xFFFFFFFF

# message reported when a search has no result
NOT_FOUND_MESSAGE = "Cannot find the text."
