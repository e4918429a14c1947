# -*- coding: utf-8 -*-
"""
Candidate tallying and noise filtering.

Turns raw extracted spans into counted Candidate records and removes the
obvious non-entities before classification.

Stage 1 (tally):
    - normalize each span (normalize_candidate)
    - peel leading sentence-connective stopwords ("But Marcus Webb" -> "Marcus Webb")
    - case-sensitive exact-string tally, first-seen order preserved

Stage 2 (filter), a candidate is discarded when:
    - it is empty
    - every word is in the stoplist (articles, connectives, calendar words, "I")
    - the entity-noise predicate rejects it (common/editorial words)
    - its key collides with a registered canon name (any type)

Stage 3 (cap):
    - at most `max_candidates` survive, chosen by descending frequency

Single-word candidates seen only once are kept here but flagged through
needs_confirmation(); the scan processor drops them unless the classifier
places them outside the character bucket.

Example:
    noise_filter = NoiseFilter()
    candidates = noise_filter.tally(extractor.extract(prose))
    survivors = noise_filter.filter(candidates, canon_keys={'marcus webb'})
"""

# Standard library
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set

# Local
from config.scan_config import NOISE_FILTER_CONFIG, SCAN_CONFIG
from canonscan.processing.candidates.name_normalizer import (
    normalize_candidate, normalize_entity_key,
)
from canonscan.processing.entity_heuristics import EntityHeuristics
from canonscan.utils.dataclasses import Candidate

logger = logging.getLogger(__name__)


class NoiseFilter:
    """
    Tally + stoplist + noise predicate + frequency cap.

    Usage:
        noise_filter = NoiseFilter(heuristics=EntityHeuristics())
        survivors = noise_filter.filter(noise_filter.tally(spans), canon_keys)
    """

    def __init__(
        self,
        heuristics: Optional[EntityHeuristics] = None,
        stoplist: Optional[Iterable[str]] = None,
        leading_stopwords: Optional[Iterable[str]] = None,
        max_candidates: Optional[int] = None,
    ):
        """
        Initialize filter.

        Args:
            heuristics: Name predicates (default table-driven implementation)
            stoplist: Words that cannot form a candidate on their own (case-sensitive)
            leading_stopwords: Words peeled off the front of multi-word spans
            max_candidates: Cap on survivors (default from SCAN_CONFIG)
        """
        self.heuristics = heuristics or EntityHeuristics()
        self.stoplist: Set[str] = set(
            stoplist if stoplist is not None else NOISE_FILTER_CONFIG['stoplist']
        )
        self.leading_stopwords: Set[str] = set(
            leading_stopwords if leading_stopwords is not None
            else NOISE_FILTER_CONFIG['leading_stopwords']
        )
        self.max_candidates = max_candidates or SCAN_CONFIG['max_candidates']
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict:
        return {
            'input_count': 0,
            'discard_reasons': defaultdict(int),
            'truncated': 0,
            'output_count': 0,
        }

    # -------------------------------------------------------------------------
    # Stage 1: tally
    # -------------------------------------------------------------------------

    def peel_leading_stopwords(self, name: str) -> str:
        """Drop connective words from the front of a multi-word name."""
        words = name.split(' ')
        while len(words) > 1 and words[0] in self.leading_stopwords:
            words = words[1:]
        return normalize_candidate(' '.join(words))

    def tally(self, spans: Iterable[str]) -> List[Candidate]:
        """
        Normalize and count raw spans.

        Args:
            spans: Raw extracted substrings, duplicates included

        Returns:
            One Candidate per distinct display form, in first-seen order
        """
        by_text: Dict[str, Candidate] = {}
        for index, raw in enumerate(spans):
            name = normalize_candidate(raw)
            if ' ' in name:
                name = self.peel_leading_stopwords(name)
            if not name:
                continue

            candidate = by_text.get(name)
            if candidate is None:
                by_text[name] = Candidate(
                    text=name,
                    normalized_key=normalize_entity_key(name),
                    occurrence_count=1,
                    first_seen=index,
                    raw_forms=[raw],
                )
                continue

            candidate.occurrence_count += 1
            if raw not in candidate.raw_forms:
                candidate.raw_forms.append(raw)

        return list(by_text.values())

    # -------------------------------------------------------------------------
    # Stage 2 + 3: filter and cap
    # -------------------------------------------------------------------------

    def is_stopword_phrase(self, name: str) -> bool:
        """True when every word of the name is in the stoplist."""
        words = name.split()
        return not words or all(w in self.stoplist for w in words)

    def discard_reason(self, candidate: Candidate, canon_keys: Set[str]) -> Optional[str]:
        """
        Reason a candidate is rejected, or None if it survives.

        Args:
            candidate: Tallied candidate
            canon_keys: Entity keys of every registered canon name

        Returns:
            'empty', 'stoplist', 'noise', 'canon' or None
        """
        if not candidate.text or not candidate.normalized_key:
            return 'empty'
        if self.is_stopword_phrase(candidate.text):
            return 'stoplist'
        if self.heuristics.is_entity_noise(candidate.text):
            return 'noise'
        if candidate.normalized_key in canon_keys:
            return 'canon'
        return None

    def needs_confirmation(self, candidate: Candidate) -> bool:
        """Single words seen once survive only if classified as non-character."""
        return candidate.is_single_word and candidate.occurrence_count <= 1

    def filter(
        self,
        candidates: List[Candidate],
        canon_keys: Optional[Set[str]] = None,
    ) -> List[Candidate]:
        """
        Filter tallied candidates and apply the frequency cap.

        Args:
            candidates: Output of tally()
            canon_keys: Entity keys of registered canon names

        Returns:
            At most max_candidates survivors, in first-seen order
        """
        canon_keys = canon_keys or set()
        self.stats = self._empty_stats()
        self.stats['input_count'] = len(candidates)

        survivors = []
        for candidate in candidates:
            reason = self.discard_reason(candidate, canon_keys)
            if reason:
                self.stats['discard_reasons'][reason] += 1
                continue
            survivors.append(candidate)

        if len(survivors) > self.max_candidates:
            # Stable sort keeps first-seen order among equal counts
            ranked = sorted(survivors, key=lambda c: -c.occurrence_count)
            kept = ranked[:self.max_candidates]
            self.stats['truncated'] = len(survivors) - len(kept)
            survivors = sorted(kept, key=lambda c: c.first_seen)

        self.stats['output_count'] = len(survivors)
        self.stats['discard_reasons'] = dict(self.stats['discard_reasons'])

        logger.debug(
            f"Noise filter: {self.stats['input_count']} in, "
            f"{self.stats['output_count']} out, "
            f"discarded {self.stats['discard_reasons']}, "
            f"truncated {self.stats['truncated']}"
        )
        return survivors
