"""Query-string normalization for paginated listings."""

from __future__ import annotations

import re
from dataclasses import dataclass
from math import ceil

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5
MAX_LIMIT = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(raw: str | None) -> int | None:
    """Parse the leading integer of *raw* (``"12abc"`` -> 12), else ``None``."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Normalized page, limit and search term."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    search: str = ""

    @classmethod
    def from_query(
        cls,
        page: str | None = None,
        limit: str | None = None,
        search: str | None = None,
    ) -> PageRequest:
        """Build a request from raw query values.

        Missing, unparsable or zero values fall back to the defaults; the page
        is then floored at 1 and the limit clamped to ``[1, MAX_LIMIT]``.
        """
        parsed_page = parse_int_prefix(page) or DEFAULT_PAGE
        parsed_limit = parse_int_prefix(limit) or DEFAULT_LIMIT
        return cls(
            page=max(1, parsed_page),
            limit=max(1, min(MAX_LIMIT, parsed_limit)),
            search=(search or "").strip(),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return ceil(total / self.limit)


__all__ = ["DEFAULT_LIMIT", "DEFAULT_PAGE", "MAX_LIMIT", "PageRequest", "parse_int_prefix"]
