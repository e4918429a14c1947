# -*- coding: utf-8 -*-
"""
Canon scan orchestrator: prose + canon snapshot -> ScanResult.

Workflow:
    1. CanonMatcher counts mentions of registered entries and indexes their keys
    2. CandidateExtractor pulls capitalized spans from the prose
    3. NoiseFilter tallies, filters and caps the candidates
    4. EntityClassifier sorts survivors into category buckets
    5. Single words seen once are dropped unless classified outside CHARACTER
    6. RoleAliasDeduper collapses role-only character mentions
    7. ScanAssembler builds the result (10 names per category)

The scan is a pure function of its inputs apart from the `scannedAt` stamp.
Every stage runs behind a guard: a failure is logged and the stage degrades to
its empty output, so scan() always returns a complete ScanResult.

ScanProcessor instances keep per-run stats and are not meant to be shared
between threads; the module-level scan() builds a fresh processor per call.

Example:
    from canonscan import scan

    result = scan(chapter_text, [{'id': 'c1', 'type': 'character', 'name': 'Marcus Webb'}])
    result.to_dict()['newEntities']['locations']
"""

# Standard library
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union

# Local
from config.scan_config import SCAN_CONFIG
from canonscan.processing.candidates.candidate_extractor import CandidateExtractor
from canonscan.processing.candidates.name_normalizer import normalize_entity_key
from canonscan.processing.candidates.noise_filter import NoiseFilter
from canonscan.processing.canon.canon_matcher import CanonIndex, CanonMatcher, coerce_entries
from canonscan.processing.classification.entity_classifier import EntityClassifier
from canonscan.processing.classification.role_alias_deduper import RoleAliasDeduper
from canonscan.processing.entity_heuristics import EntityHeuristics
from canonscan.utils.dataclasses import (
    CanonEntry, Candidate, EntityCategory, ExistingMention, NewEntities, ScanResult,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

CanonInput = Iterable[Union[CanonEntry, Dict[str, Any]]]


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision ("...Z")."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


# ============================================================================
# ASSEMBLER
# ============================================================================

class ScanAssembler:
    """Merges mentions and category buckets into the ScanResult contract."""

    def __init__(self, max_per_category: Optional[int] = None):
        self.max_per_category = max_per_category or SCAN_CONFIG['max_per_category']

    def _names(self, candidates: List[Candidate], canon_keys: set) -> List[str]:
        """Display names, deduplicated by key, canon keys excluded, truncated."""
        names = []
        seen = set()
        for candidate in candidates:
            key = candidate.normalized_key or normalize_entity_key(candidate.text)
            if not key or key in seen or key in canon_keys:
                continue
            seen.add(key)
            names.append(candidate.text)
            if len(names) >= self.max_per_category:
                break
        return names

    def assemble(
        self,
        existing_mentions: List[ExistingMention],
        buckets: Dict[EntityCategory, List[Candidate]],
        scanned_at: str,
        canon_index: Optional[CanonIndex] = None,
    ) -> ScanResult:
        """
        Build the final result.

        Args:
            existing_mentions: Canon matcher output (already sorted)
            buckets: Deduplicated candidates per category, first-seen order
            scanned_at: Timestamp string
            canon_index: Registered canon keys

        Returns:
            Complete ScanResult
        """
        canon_keys = canon_index.all_keys if canon_index else set()
        new_entities = NewEntities()
        for category in EntityCategory:
            new_entities.for_category(category).extend(
                self._names(buckets.get(category, []), canon_keys)
            )
        return ScanResult(
            scanned_at=scanned_at,
            existing_mentions=list(existing_mentions),
            new_entities=new_entities,
        )


# ============================================================================
# PROCESSOR
# ============================================================================

class ScanProcessor:
    """
    Runs the full extraction pipeline for one prose/canon pair.

    Attributes:
        heuristics: Shared name predicates injected into every stage
        stats: Per-stage statistics from the last scan
    """

    def __init__(
        self,
        heuristics: Optional[EntityHeuristics] = None,
        extractor: Optional[CandidateExtractor] = None,
        noise_filter: Optional[NoiseFilter] = None,
        matcher: Optional[CanonMatcher] = None,
        classifier: Optional[EntityClassifier] = None,
        deduper: Optional[RoleAliasDeduper] = None,
        assembler: Optional[ScanAssembler] = None,
        clock: Callable[[], str] = utc_timestamp,
    ):
        self.heuristics = heuristics or EntityHeuristics()
        self.extractor = extractor or CandidateExtractor()
        self.noise_filter = noise_filter or NoiseFilter(heuristics=self.heuristics)
        self.matcher = matcher or CanonMatcher(heuristics=self.heuristics)
        self.classifier = classifier or EntityClassifier(heuristics=self.heuristics)
        self.deduper = deduper or RoleAliasDeduper(heuristics=self.heuristics)
        self.assembler = assembler or ScanAssembler()
        self.clock = clock
        self.stats: Dict[str, Any] = {}

    def _guarded(self, stage: str, func: Callable[[], T], fallback: T) -> T:
        """Run one stage; on failure log it and return the fallback."""
        try:
            return func()
        except Exception as e:
            logger.warning(f"Stage '{stage}' failed, continuing with empty output: {e}",
                           exc_info=True)
            self.stats.setdefault('failed_stages', []).append(stage)
            return fallback

    def scan(self, prose: Any, canon_entries: Optional[CanonInput] = None) -> ScanResult:
        """
        Scan prose against a canon snapshot.

        Args:
            prose: Chapter text (non-string treated as empty)
            canon_entries: CanonEntry objects or dict records; nameless ones skipped

        Returns:
            ScanResult; never raises for any string input
        """
        self.stats = {}
        text = prose if isinstance(prose, str) else ''
        entries = self._guarded('canon', lambda: coerce_entries(canon_entries), [])

        mentions = self._guarded('mentions', lambda: self.matcher.count_mentions(text, entries), [])
        canon_index = self._guarded('canon_index', lambda: self.matcher.build_index(entries),
                                    CanonIndex())

        spans = self._guarded('extract', lambda: self.extractor.extract(text), [])
        candidates = self._guarded(
            'noise_filter',
            lambda: self.noise_filter.filter(self.noise_filter.tally(spans), canon_index.all_keys),
            [],
        )

        empty_buckets = {category: [] for category in EntityCategory}
        buckets = self._guarded(
            'classify', lambda: self.classifier.classify(candidates, text, canon_index),
            empty_buckets,
        )

        characters = [
            c for c in buckets.get(EntityCategory.CHARACTER, [])
            if not self.noise_filter.needs_confirmation(c)
        ]
        named_in_canon = any(
            m.type == 'character' and ' ' in m.name.strip() for m in mentions
        )
        buckets[EntityCategory.CHARACTER] = self._guarded(
            'role_alias',
            lambda: self.deduper.deduplicate(characters, canon_index, named_in_canon),
            characters,
        )

        result = self.assembler.assemble(mentions, buckets, self.clock(), canon_index)

        self.stats.update({
            'canon_entries': len(entries),
            'mentions': len(mentions),
            'spans': len(spans),
            'candidates': len(candidates),
            'noise_filter': self.noise_filter.stats,
            'classifier': self.classifier.stats,
            'deduper': self.deduper.stats,
            'new_entities': {k: len(v) for k, v in result.new_entities.to_dict().items()},
        })
        logger.debug(
            f"Scan complete: {len(spans)} spans, {len(candidates)} candidates, "
            f"{len(mentions)} canon mentioned, new {self.stats['new_entities']}"
        )
        return result


def scan(prose: Any, canon_entries: Optional[CanonInput] = None) -> ScanResult:
    """
    Scan prose for canon mentions and newly introduced entities.

    Args:
        prose: Chapter text
        canon_entries: Registered canon for the project

    Returns:
        ScanResult
    """
    return ScanProcessor().scan(prose, canon_entries)
