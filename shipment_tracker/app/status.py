"""Map carrier specific status text or codes to a Status."""

from typing import Iterable, Optional, Sequence, Tuple

from ..const import Status
from ..exceptions import InvalidArgument

MATCH_CONTAINS = "contains"
MATCH_PREFIX = "prefix"
MATCH_EXACT = "exact"

StatusTable = Sequence[Tuple[Status, Iterable[str]]]


class StatusResolver:
    """Resolve free text or codes against an ordered needle table.

    Entries are checked in table order and the first needle that matches
    wins, so the table order is the priority order. Text that matches
    nothing resolves to Status.UNKNOWN.
    """

    def __init__(
        self,
        table: StatusTable,
        match: str = MATCH_CONTAINS,
        case_sensitive: bool = True,
    ) -> None:
        if match not in (MATCH_CONTAINS, MATCH_PREFIX, MATCH_EXACT):
            raise InvalidArgument(f"Invalid match mode [{match}]")

        self._match = match
        self._case_sensitive = case_sensitive
        self._table = tuple(
            (Status(status), tuple(self._fold(needle) for needle in needles))
            for status, needles in table
        )

    def _fold(self, value: str) -> str:
        return value if self._case_sensitive else value.casefold()

    def _matches(self, text: str, needle: str) -> bool:
        if self._match == MATCH_EXACT:
            return text == needle
        if self._match == MATCH_PREFIX:
            return text.startswith(needle)
        return needle in text

    def resolve(self, text: Optional[str]) -> Status:
        if not text:
            return Status.UNKNOWN

        text = self._fold(str(text))
        for status, needles in self._table:
            for needle in needles:
                if self._matches(text, needle):
                    return status

        return Status.UNKNOWN

    __call__ = resolve
