"""Search engine: filter and order items against a free-text query."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any, TypeVar

from .config import SearchSettings
from .fields import resolve_fields
from .matching import match_item, split_keywords
from .models import MatchRecord, SearchMode, SearchOptions
from .ranking import RankingAlgorithm, SignatureRanker

logger = logging.getLogger(__name__)

T = TypeVar("T")

OptionsLike = SearchOptions | Mapping[str, Any] | None


class SearchEngine:
    """Linear in-memory search over a list of items.

    Each call resolves the fields of every item, matches them against the
    query keywords, drops the items the search mode rejects and orders the
    rest by relevance. Nothing is kept between calls.
    """

    def __init__(
        self,
        settings: SearchSettings | None = None,
        ranker: RankingAlgorithm | None = None,
    ):
        """Initialize search engine.

        Args:
            settings: Search settings (default mode, excluded keys, workers)
            ranker: Ranking algorithm to use (default: SignatureRanker)
        """
        self.settings = settings or SearchSettings()
        self.ranker = ranker or SignatureRanker()

    def _options(self, options: OptionsLike) -> SearchOptions:
        opts = SearchOptions.coerce(options)
        if opts.mode is None:
            opts = replace(opts, mode=self.settings.mode)
        return opts

    def _match_one(
        self, item: Any, keywords: list[str], options: SearchOptions
    ) -> MatchRecord | None:
        fields = resolve_fields(item, options.fields, self.settings.excluded_keys)
        return match_item(item, keywords, fields, options.mode)

    def _match_all(
        self, items: list[Any], keywords: list[str], options: SearchOptions
    ) -> list[MatchRecord | None]:
        workers = self.settings.max_workers
        if workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in input order
                return list(
                    executor.map(
                        lambda item: self._match_one(item, keywords, options), items
                    )
                )
        return [self._match_one(item, keywords, options) for item in items]

    def match(self, items: list[T], options: OptionsLike = None) -> list[MatchRecord]:
        """Match items and return the accepted records, most relevant first.

        Args:
            items: Items to search
            options: Query text, search mode and fields provider

        Returns:
            Ranked match records; empty when there is no query
        """
        opts = self._options(options)
        keywords = split_keywords(opts.text)
        if not keywords:
            return []

        start_time = time.time()
        records = [
            r for r in self._match_all(list(items), keywords, opts) if r and r.matched
        ]
        ranked = self.ranker.rank(records)

        logger.debug(
            f"Query {opts.text!r} ({opts.mode.value}, {len(keywords)} keywords) "
            f"matched {len(ranked)}/{len(items)} items "
            f"in {(time.time() - start_time) * 1000:.1f}ms"
        )
        return ranked

    def search(self, items: list[T], options: OptionsLike = None) -> list[T]:
        """Filter and order items by a query.

        Without query text the items are returned unchanged.

        Args:
            items: Items to search
            options: Query text, search mode and fields provider

        Returns:
            Matching items, most relevant first; ties keep input order
        """
        opts = self._options(options)
        if not opts.has_query or not split_keywords(opts.text):
            return items
        return [record.item for record in self.match(items, opts)]


def search_items(items: list[T], options: OptionsLike = None) -> list[T]:
    """Filter and order items by a query using default settings."""
    return SearchEngine().search(items, options)


def create_engine(
    mode: SearchMode | str | None = None,
    max_workers: int = 0,
    ranker: RankingAlgorithm | None = None,
) -> SearchEngine:
    """Create an engine with a given default mode and worker count."""
    settings = SearchSettings(mode=SearchMode.parse(mode), max_workers=max_workers)
    return SearchEngine(settings=settings, ranker=ranker)
