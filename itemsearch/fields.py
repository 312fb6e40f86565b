"""Resolution of the searchable fields of an item.

Fields either come from an explicit provider given with the search options
or are derived from the shape of the item itself:

- strings and numbers become a single field holding their text
- mappings, dataclasses and msgspec structs become one field per string or
  numeric value, skipping identifier keys such as ``id`` and ``key``
- items implementing :class:`Searchable` describe their own fields
- anything else becomes a single empty field that never matches
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Collection, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

import msgspec

from .exceptions import FieldsProviderError
from .models import FieldsProvider, SearchField

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_KEYS: tuple[str, ...] = ("id", "key")


@runtime_checkable
class Searchable(Protocol):
    """Items that know which of their parts are searchable."""

    def search_fields(self) -> Iterable[SearchField | str]: ...


def is_number(value: Any) -> bool:
    """Check for int/float values, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def stringify(value: Any) -> str:
    """Render a scalar the way it is shown to users."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _record_items(item: Any) -> Iterable[tuple[Any, Any]] | None:
    """Return key/value pairs for record-like items, None otherwise."""
    if isinstance(item, Mapping):
        return item.items()
    if isinstance(item, msgspec.Struct):
        return msgspec.structs.asdict(item).items()
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return ((f.name, getattr(item, f.name)) for f in dataclasses.fields(item))
    return None


def default_fields(
    item: Any, excluded_keys: Collection[str] = DEFAULT_EXCLUDED_KEYS
) -> list[SearchField]:
    """Derive search fields from the shape of an item.

    Args:
        item: Item to inspect
        excluded_keys: Record keys never turned into fields

    Returns:
        Ordered list of fields; order is the relevance priority
    """
    if isinstance(item, Searchable):
        return normalize_fields(item, list(item.search_fields()))

    if isinstance(item, str) or is_number(item):
        return [SearchField(text=stringify(item))]

    pairs = _record_items(item)
    if pairs is not None:
        return [
            SearchField(text=stringify(value))
            for key, value in pairs
            if key not in excluded_keys
            and (isinstance(value, str) or is_number(value))
        ]

    return [SearchField(text="")]


def _to_field(item: Any, entry: Any) -> SearchField | None:
    if entry is None or isinstance(entry, SearchField):
        return entry
    if isinstance(entry, str):
        return SearchField(text=entry)
    if isinstance(entry, Mapping):
        try:
            return msgspec.convert(entry, SearchField)
        except msgspec.ValidationError as e:
            raise FieldsProviderError(item, f"invalid field {entry!r}: {e}") from e
    raise FieldsProviderError(item, f"unsupported field entry {entry!r}")


def normalize_fields(item: Any, value: Any) -> list[SearchField]:
    """Flatten one level, wrap strings and drop absent entries."""
    if isinstance(value, Iterable) and not isinstance(
        value, (str, Mapping, SearchField)
    ):
        entries = list(value)
    else:
        entries = [value]
    fields = (_to_field(item, entry) for entry in entries)
    return [f for f in fields if f is not None]


def provided_fields(item: Any, provider: FieldsProvider) -> list[SearchField]:
    """Evaluate an explicit provider for one item.

    Raises:
        FieldsProviderError: If the provider raises or returns unusable entries
    """
    if callable(provider):
        try:
            value = provider(item)
        except Exception as e:
            raise FieldsProviderError(item, f"provider raised {e!r}") from e
    else:
        value = provider
    return normalize_fields(item, value)


def resolve_fields(
    item: Any,
    provider: FieldsProvider = None,
    excluded_keys: Collection[str] = DEFAULT_EXCLUDED_KEYS,
) -> list[SearchField]:
    """Resolve the ordered, matchable fields of an item.

    Fields without text are dropped since they can never match a keyword.
    """
    if provider is None:
        fields = default_fields(item, excluded_keys)
    else:
        fields = provided_fields(item, provider)

    usable = [f for f in fields if f.text]
    if len(usable) != len(fields):
        logger.debug(f"Dropped {len(fields) - len(usable)} empty field(s) of {item!r}")
    return usable
