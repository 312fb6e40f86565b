"""Data models for item search using msgspec for the immutable parts."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

import msgspec

from .exceptions import InvalidSearchModeError


class SearchMode(str, Enum):
    """How keywords of a query must match an item.

    eagle: every keyword must match some field, otherwise the item is dropped.
    fuzzy: an item is kept as soon as any keyword matches any field.
    greedy: like eagle, and the keywords together must hit at least as many
        distinct fields as there are keywords.
    """

    EAGLE = "eagle"
    FUZZY = "fuzzy"
    GREEDY = "greedy"

    @classmethod
    def parse(cls, value: SearchMode | str | None) -> SearchMode:
        """Coerce a mode name (case-insensitive) or None to a SearchMode."""
        if value is None:
            return cls.GREEDY
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                raise InvalidSearchModeError(value) from None
        raise InvalidSearchModeError(value)

    @property
    def requires_every_keyword(self) -> bool:
        return self is not SearchMode.FUZZY

    @property
    def requires_distinct_fields(self) -> bool:
        return self is SearchMode.GREEDY


class SearchField(msgspec.Struct, frozen=True):
    """One searchable facet of an item.

    With ``entirely`` set the field only matches a keyword equal to its whole
    text (ignoring case and whitespace) instead of any contained substring.
    """

    text: str | None = None
    entirely: bool = False


class FieldMatch(msgspec.Struct, frozen=True, kw_only=True):
    """A single keyword hitting a single field."""

    field: SearchField
    field_index: int
    keyword_index: int
    keyword: str
    is_exact: bool


# Anything a provider may hand back for one item
FieldSpec = Union[SearchField, str, Mapping[str, Any], None]
FieldsProvider = Union[
    FieldSpec,
    Iterable[FieldSpec],
    Callable[[Any], Union[FieldSpec, Iterable[FieldSpec]]],
]


@dataclass
class MatchRecord:
    """Match state of one item during a single search call."""

    item: Any
    fields: list[SearchField]
    matched: bool = False
    matches: list[FieldMatch] = field(default_factory=list)

    def add(self, field_index: int, keyword_index: int, keyword: str, exact: bool) -> None:
        """Record that ``keyword`` matched the field at ``field_index``."""
        self.matches.append(
            FieldMatch(
                field=self.fields[field_index],
                field_index=field_index,
                keyword_index=keyword_index,
                keyword=keyword,
                is_exact=exact,
            )
        )
        self.matched = True

    @property
    def matched_field_indexes(self) -> set[int]:
        return {m.field_index for m in self.matches}

    def matches_for_keyword(self, keyword_index: int) -> list[FieldMatch]:
        return [m for m in self.matches if m.keyword_index == keyword_index]


@dataclass
class SearchOptions:
    """Query text, search mode and field provider for one search call."""

    text: str | None = None
    mode: SearchMode | None = None
    fields: FieldsProvider = None

    def __post_init__(self):
        # None leaves the choice to the engine settings
        if self.mode is not None:
            self.mode = SearchMode.parse(self.mode)

    @property
    def has_query(self) -> bool:
        """Whether there is any query text to filter by."""
        return bool(self.text)

    @property
    def has_fields_provider(self) -> bool:
        return self.fields is not None

    @classmethod
    def coerce(cls, options: SearchOptions | Mapping[str, Any] | None) -> SearchOptions:
        """Build options from None, a mapping of option names, or options."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls(**options)
        raise TypeError(f"Unsupported search options: {options!r}")
