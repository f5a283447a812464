"""Terminal prompt for choosing the target playlist."""

from typing import Callable

from src.domain.errors import SelectionCancelledError
from src.domain.ports import PlaylistSelectorPort


def filter_names(names: list[str], query: str) -> list[str]:
    """Case-insensitive substring search, keeping the original order."""
    needle = query.strip().lower()
    return [name for name in names if needle in name.lower()]


class TerminalPlaylistSelector(PlaylistSelectorPort):
    """Search-first selection: type part of a name, then pick a number.

    An empty search lists every playlist. At the number prompt a plain number
    picks a match and anything else searches again; start with ``/`` to search
    for digits, e.g. ``/2024``. Ctrl-C, Ctrl-D or ``q`` cancels.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        label: str = "Select Playlist",
    ):
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.label = label

    def select(self, names: list[str]) -> str:
        if not names:
            raise SelectionCancelledError("There are no playlists to choose from")

        self.output_fn(f"{self.label} (type to search, empty for all, q to cancel)")
        query = self._ask("Search: ")
        while True:
            matches = filter_names(names, query)
            if not matches:
                self.output_fn(f"No playlist matches {query!r}")
                query = self._ask("Search: ")
                continue

            for index, name in enumerate(matches, start=1):
                self.output_fn(f"{index:>3}. {name}")
            answer = self._ask("Number (or new search, / to search digits): ")
            if answer.startswith("/"):
                query = answer[1:]
                continue
            if answer.isdigit() and 1 <= int(answer) <= len(matches):
                return matches[int(answer) - 1]
            query = answer

    def _ask(self, prompt: str) -> str:
        try:
            answer = self.input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            raise SelectionCancelledError("Playlist selection cancelled") from None
        if answer.strip().lower() == "q":
            raise SelectionCancelledError("Playlist selection cancelled")
        return answer.strip()
