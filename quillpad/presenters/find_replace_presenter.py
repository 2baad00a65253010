"""Presenter for the Find and Replace dialogs.

Keeps the last search parameters and applies find next, replace and
replace all to the document of an editor session, leaving the view
responsible only for user interaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from quillpad.consts import NOT_FOUND_MESSAGE
from quillpad.services.search_service import (
	SearchDirection,
	SearchMatch,
	SearchService,
)

if TYPE_CHECKING:
	from quillpad.editor_session import EditorSession

log = logging.getLogger(__name__)


class FindReplaceView(Protocol):
	"""Interface the presenter expects from its view."""

	def show_find_dialog(self) -> None:
		"""Open the Find dialog so the user can enter a search text."""

	def show_not_found(self, message: str) -> None:
		"""Tell the user the search text was not found."""

	def show_message(self, message: str) -> None:
		"""Display an informational message."""


def format_replaced_message(count: int) -> str:
	"""Build the message reporting the result of a replace all.

	Args:
		count: Number of replaced occurrences.

	Returns:
		The message, e.g. ``Replaced 2 occurrences.``
	"""
	suffix = "" if count == 1 else "s"
	return f"Replaced {count} occurrence{suffix}."


class FindReplacePresenter:
	"""Presenter for the Find and Replace dialogs.

	Attributes:
		view: The view receiving notifications.
		session: The editor session whose document is searched.
		find_text: The last text searched for.
		replace_text: The last replacement text.
		match_case: Whether searches are case-sensitive.
		direction: The direction of find next.
	"""

	def __init__(
		self,
		view: FindReplaceView | None,
		session: EditorSession,
	) -> None:
		"""Initialise the presenter.

		Search options are seeded from the session configuration.

		Args:
			view: The view (may be set later via assignment).
			session: The editor session whose document is searched.
		"""
		self.view = view
		self.session = session
		self.find_text = ""
		self.replace_text = ""
		self.match_case = session.config.search.match_case
		self.direction = session.config.search.direction

	def update_options(
		self,
		find_text: str | None = None,
		replace_text: str | None = None,
		match_case: bool | None = None,
		direction: SearchDirection | None = None,
	) -> None:
		"""Remember the values entered in a dialog.

		An empty *find_text* keeps the previous search text.

		Args:
			find_text: The text to search for.
			replace_text: The replacement text.
			match_case: Whether searches are case-sensitive.
			direction: The direction of find next.
		"""
		if find_text:
			self.find_text = find_text
		if replace_text is not None:
			self.replace_text = replace_text
		if match_case is not None:
			self.match_case = match_case
		if direction is not None:
			self.direction = direction

	def _search(
		self, direction: SearchDirection, from_pos: int
	) -> SearchMatch | None:
		return SearchService.find(
			self.session.text,
			self.find_text,
			self.match_case,
			direction,
			from_pos,
		)

	def find_next(self, reverse: bool = False) -> bool:
		"""Select the next occurrence of the search text.

		The search starts at the end of the selection going forward and at
		its start going backward. Without a search text the Find dialog is
		shown instead.

		Args:
			reverse: Search in the direction opposite to the current one.

		Returns:
			True if a match was selected.
		"""
		if not self.find_text:
			if self.view is not None:
				self.view.show_find_dialog()
			return False
		direction = self.direction
		if reverse:
			direction = (
				SearchDirection.BACKWARD
				if direction == SearchDirection.FORWARD
				else SearchDirection.FORWARD
			)
		start, end = self.session.selection
		from_pos = end if direction == SearchDirection.FORWARD else start
		match = self._search(direction, from_pos)
		if match is None:
			log.debug("Text not found: %r", self.find_text)
			if self.view is not None:
				self.view.show_not_found(NOT_FOUND_MESSAGE)
			return False
		self.session.select(match.start, match.end)
		return True

	def replace(self) -> bool:
		"""Replace the occurrence found from the start of the selection.

		An empty search text finds nothing and is reported as not found.

		Returns:
			True if an occurrence was replaced.
		"""
		start, _ = self.session.selection
		match = self._search(self.direction, start)
		if match is None:
			if self.view is not None:
				self.view.show_not_found(NOT_FOUND_MESSAGE)
			return False
		self.session.select(match.start, match.end)
		self.session.replace_selection(self.replace_text)
		return True

	def replace_all(self) -> int:
		"""Replace every occurrence of the search text in the document.

		Returns:
			The number of replaced occurrences.
		"""
		result = SearchService.replace_all(
			self.session.text,
			self.find_text,
			self.replace_text,
			self.match_case,
		)
		if result.count:
			self.session.set_text(result.text)
		log.debug("Replace all: %d occurrences", result.count)
		if self.view is not None:
			self.view.show_message(format_replaced_message(result.count))
		return result.count
