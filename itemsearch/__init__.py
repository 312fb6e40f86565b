"""In-memory keyword search and ranking for arbitrary items.

Main components:
- search_items / SearchEngine: filter and order items by a query
- Field resolution for strings, numbers, records and Searchable items
- Keyword matching under eagle, fuzzy and greedy modes
- Positional match-signature ranking
"""

from .config import Config, SearchSettings, load_config, load_settings
from .engine import SearchEngine, create_engine, search_items
from .exceptions import (
    ConfigError,
    FieldsProviderError,
    InvalidSearchModeError,
    ItemLoadError,
    SearchError,
)
from .fields import Searchable, default_fields, resolve_fields
from .matching import match_item, split_keywords
from .models import FieldMatch, MatchRecord, SearchField, SearchMode, SearchOptions
from .ranking import (
    LexicographicRanker,
    RankingAlgorithm,
    SignatureRanker,
    encode_sequence,
    match_signature,
)

__all__ = [
    # Main entry points
    "search_items",
    "SearchEngine",
    "create_engine",
    # Models
    "SearchField",
    "SearchMode",
    "SearchOptions",
    "MatchRecord",
    "FieldMatch",
    # Fields and matching
    "Searchable",
    "default_fields",
    "resolve_fields",
    "split_keywords",
    "match_item",
    # Ranking
    "RankingAlgorithm",
    "SignatureRanker",
    "LexicographicRanker",
    "encode_sequence",
    "match_signature",
    # Configuration
    "Config",
    "SearchSettings",
    "load_config",
    "load_settings",
    # Errors
    "SearchError",
    "InvalidSearchModeError",
    "FieldsProviderError",
    "ConfigError",
    "ItemLoadError",
]

__version__ = "1.0.0"
