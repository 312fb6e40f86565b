"""Ranking of matched items.

A match record is reduced to two sequences indexed by field position: the
exact-match strength of each field and the partial-match strength of each
field. Earlier fields weigh more, and any exact match outweighs any set of
partial matches.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import MatchRecord

EXACT_STRENGTH = 2
PARTIAL_STRENGTH = 1


def match_sequences(record: MatchRecord) -> tuple[list[int], list[int]]:
    """Build the per-field exact and partial strength sequences.

    A field with both an exact and a partial match only counts as exact.
    """
    size = len(record.fields)
    exact = [0] * size
    partial = [0] * size

    for match in record.matches:
        if match.is_exact:
            exact[match.field_index] = EXACT_STRENGTH

    for match in record.matches:
        if not match.is_exact and not exact[match.field_index]:
            partial[match.field_index] = PARTIAL_STRENGTH

    return exact, partial


def encode_sequence(sequence: Sequence[int]) -> int:
    """Encode a sequence as one integer, earlier positions weighing more.

    Uses base ``max(sequence) + 1`` with the first element at the highest
    power: ``sum(s[j] * base ** (len(s) - j))``.
    """
    if not sequence:
        return 0
    base = max(sequence) + 1
    length = len(sequence)
    return sum(value * base ** (length - j) for j, value in enumerate(sequence))


def match_signature(record: MatchRecord) -> int:
    """Compute the relevance signature of a matched record.

    Python integers never overflow, so the signature is exact for any
    number of fields.
    """
    exact, partial = match_sequences(record)
    return encode_sequence([encode_sequence(exact), encode_sequence(partial)])


class RankingAlgorithm(ABC):
    """Abstract base class for ranking algorithms."""

    @abstractmethod
    def score(self, record: MatchRecord):
        """Calculate a sort key for a record (higher is more relevant)."""
        pass

    def rank(self, records: list[MatchRecord]) -> list[MatchRecord]:
        """Rank records by descending score.

        The sort is stable, so records with equal scores keep their input
        order.
        """
        return sorted(records, key=self.score, reverse=True)


class SignatureRanker(RankingAlgorithm):
    """Rank by the integer match signature."""

    def score(self, record: MatchRecord) -> int:
        return match_signature(record)


class LexicographicRanker(RankingAlgorithm):
    """Rank by comparing the exact sequence, then the partial sequence."""

    def score(self, record: MatchRecord) -> tuple[tuple[int, ...], tuple[int, ...]]:
        exact, partial = match_sequences(record)
        return tuple(exact), tuple(partial)
