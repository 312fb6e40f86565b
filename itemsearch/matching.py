"""Keyword matching of a single item against its search fields."""

from __future__ import annotations

import logging
import re
from typing import Any

from .models import MatchRecord, SearchField, SearchMode

logger = logging.getLogger(__name__)

KEYWORD_SEPARATOR = re.compile(r"[\s-]")


def split_keywords(text: str | None) -> list[str]:
    """Split query text on whitespace and hyphens.

    Empty fragments left by repeated separators are dropped.
    """
    if not text:
        return []
    return [part for part in KEYWORD_SEPARATOR.split(str(text).strip()) if part]


def _squash(text: str) -> str:
    return "".join(text.split()).lower()


def is_exact_match(text: str | None, keyword: str) -> bool:
    """Equality ignoring case and whitespace."""
    if text is None:
        return False
    return _squash(text) == _squash(keyword)


def is_partial_match(text: str | None, keyword: str) -> bool:
    """Case-insensitive substring containment."""
    if text is None:
        return False
    return keyword.lower() in text.lower()


def field_matches(field: SearchField, keyword: str) -> bool:
    if field.entirely:
        return is_exact_match(field.text, keyword)
    return is_partial_match(field.text, keyword)


def match_item(
    item: Any,
    keywords: list[str],
    fields: list[SearchField],
    mode: SearchMode = SearchMode.GREEDY,
) -> MatchRecord | None:
    """Match one item against the query keywords.

    Every (keyword, field) pair that matches is recorded, so a field can be
    hit by several keywords and a keyword can hit several fields.

    Args:
        item: The item being matched
        keywords: Query keywords in query order
        fields: Resolved search fields of the item
        mode: Acceptance rule applied once all keywords are scanned

    Returns:
        The match record if the item is accepted, None otherwise
    """
    record = MatchRecord(item=item, fields=fields)
    keyword_hits: list[set[int]] = []

    for keyword_index, keyword in enumerate(keywords):
        hits: set[int] = set()
        for field_index, field in enumerate(fields):
            if field_matches(field, keyword):
                hits.add(field_index)
                record.add(field_index, keyword_index, keyword, exact=field.entirely)
        keyword_hits.append(hits)

        if mode.requires_every_keyword and not hits:
            return None

    if not record.matched:
        return None

    if mode.requires_distinct_fields:
        # Cardinality of the union only; not a full assignment check
        covered = set().union(*keyword_hits)
        if len(covered) < len(keywords):
            logger.debug(
                f"Rejected {item!r}: {len(keywords)} keywords share {len(covered)} field(s)"
            )
            return None

    return record
