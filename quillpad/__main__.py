"""Command-line interface for quillpad.

Exposes the encoding detection, conversion, search and replace operations of
the editor core on files, without any user interface.
"""

import argparse
import logging
import sys

import yaml
from pydantic import ValidationError

from quillpad import global_vars
from quillpad.config import conf, get_config_value, set_config_value
from quillpad.consts import APP_NAME, NOT_FOUND_MESSAGE
from quillpad.editor_session import EditorSession
from quillpad.enums import EncodingTag
from quillpad.logger import (
	logging_uncaught_exceptions,
	set_log_level,
	setup_logging,
)
from quillpad.presenters.find_replace_presenter import format_replaced_message
from quillpad.services.encoding_service import (
	DecodeError,
	EncodeError,
	detect_encoding,
)
from quillpad.services.file_service import (
	FileService,
	ReadError,
	SourceTooLargeError,
	WriteError,
)
from quillpad.services.search_service import SearchDirection, SearchService

log = logging.getLogger(__name__)

# exit code of a search without result
EXIT_NOT_FOUND = 1
# exit code of a file or encoding failure
EXIT_FAILURE = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""Parse command-line arguments.

	Args:
		argv: The arguments to parse, sys.argv when None.

	Returns:
		argparse.Namespace: Parsed command-line arguments with their values.
	"""
	parser = argparse.ArgumentParser(
		prog=APP_NAME, description="Text encoding and search tools"
	)
	parser.add_argument(
		"--log_level",
		"-L",
		type=str,
		default=None,
		help="Set the log level (DEBUG, INFO, WARNING, ERROR, CRITICAL, OFF)",
	)
	subparsers = parser.add_subparsers(dest="command", required=True)

	detect_parser = subparsers.add_parser(
		"detect", help="Print the detected encoding of files"
	)
	detect_parser.add_argument("files", nargs="+", help="Files to inspect")

	convert_parser = subparsers.add_parser(
		"convert", help="Save a file with another encoding"
	)
	convert_parser.add_argument("file", help="File to convert")
	convert_parser.add_argument(
		"--to",
		required=True,
		type=EncodingTag,
		choices=list(EncodingTag),
		dest="encoding",
		help="Target encoding",
	)
	convert_parser.add_argument(
		"--output", "-o", default=None, help="Output file, default in place"
	)

	find_parser = subparsers.add_parser(
		"find", help="Print the position of a text in a file"
	)
	find_parser.add_argument("file", help="File to search")
	find_parser.add_argument("needle", help="Text to search for")
	find_parser.add_argument(
		"--match-case", action="store_true", help="Case-sensitive search"
	)
	find_parser.add_argument(
		"--backward", action="store_true", help="Search backward"
	)
	find_parser.add_argument(
		"--from",
		type=int,
		default=0,
		dest="from_pos",
		help="UTF-16 code unit offset the search starts from",
	)

	replace_parser = subparsers.add_parser(
		"replace", help="Replace every occurrence of a text in a file"
	)
	replace_parser.add_argument("file", help="File to modify")
	replace_parser.add_argument("needle", help="Text to replace")
	replace_parser.add_argument("replacement", help="Replacement text")
	replace_parser.add_argument(
		"--match-case", action="store_true", help="Case-sensitive search"
	)
	replace_parser.add_argument(
		"--output", "-o", default=None, help="Output file, default in place"
	)

	config_parser = subparsers.add_parser(
		"config", help="Show or change the saved configuration"
	)
	config_parser.add_argument(
		"key",
		nargs="?",
		default=None,
		help="Dotted setting name, e.g. search.match_case",
	)
	config_parser.add_argument(
		"value", nargs="?", default=None, help="New value to save"
	)
	return parser.parse_args(argv)


def run_detect(args: argparse.Namespace) -> int:
	max_size = conf().files.max_size
	for file in args.files:
		data = FileService.read_bytes(file, max_size)
		print(f"{file}: {detect_encoding(data)}")
	return 0


def run_convert(args: argparse.Namespace) -> int:
	session = EditorSession()
	session.load(args.file)
	session.encoding = args.encoding
	session.save(args.output)
	print(session.encoding)
	return 0


def run_find(args: argparse.Namespace) -> int:
	session = EditorSession()
	session.load(args.file)
	direction = (
		SearchDirection.BACKWARD if args.backward else SearchDirection.FORWARD
	)
	match = SearchService.find(
		session.text, args.needle, args.match_case, direction, args.from_pos
	)
	if match is None:
		print(NOT_FOUND_MESSAGE)
		return EXIT_NOT_FOUND
	print(f"{match.start}-{match.end}")
	return 0


def run_replace(args: argparse.Namespace) -> int:
	session = EditorSession()
	session.load(args.file)
	result = SearchService.replace_all(
		session.text, args.needle, args.replacement, args.match_case
	)
	if result.count:
		session.set_text(result.text)
		session.save(args.output)
	print(format_replaced_message(result.count))
	return 0


def run_config(args: argparse.Namespace) -> int:
	config = conf()
	try:
		if args.key is None:
			print(
				yaml.dump(
					config.model_dump(mode="json"), indent=2, sort_keys=False
				),
				end="",
			)
			return 0
		if args.value is not None:
			config = set_config_value(config, args.key, args.value)
			config.save()
			conf.cache_clear()
			if args.key == "general.log_level" and not args.log_level:
				set_log_level(config.general.log_level.name)
		print(get_config_value(config, args.key))
	except KeyError:
		print(f"Unknown setting: {args.key}", file=sys.stderr)
		return EXIT_FAILURE
	except ValidationError as err:
		log.error("Invalid value for %s: %s", args.key, err)
		print(err, file=sys.stderr)
		return EXIT_FAILURE
	return 0


COMMANDS = {
	"detect": run_detect,
	"convert": run_convert,
	"find": run_find,
	"replace": run_replace,
	"config": run_config,
}


def main(argv: list[str] | None = None) -> int:
	"""Run the command line and return its exit code.

	Args:
		argv: The arguments to parse, sys.argv when None.

	Returns:
		0 on success, 1 when a search found nothing, 2 on failure.
	"""
	global_vars.args = parse_args(argv)
	setup_logging(global_vars.args.log_level or conf().general.log_level)
	sys.excepthook = logging_uncaught_exceptions
	try:
		return COMMANDS[global_vars.args.command](global_vars.args)
	except (
		ReadError,
		WriteError,
		SourceTooLargeError,
		DecodeError,
		EncodeError,
	) as err:
		log.error("%s failed: %s", global_vars.args.command, err)
		print(err, file=sys.stderr)
		return EXIT_FAILURE


if __name__ == '__main__':
	sys.exit(main())
