# -*- coding: utf-8 -*-
"""
Mention counting for registered canon entries.

For every canon entry, counts case-insensitive whole-word occurrences of the
entry's surface name in the prose. Matching is on surface text, not keys, so
"Marcus Webb" also counts inside "Dr. Marcus Webb".

Also builds the CanonIndex: normalized keys per canon type, used downstream
to avoid re-proposing entities that are already canon.

Example:
    matcher = CanonMatcher()
    mentions = matcher.count_mentions(prose, entries)
    index = matcher.build_index(entries)
    index.has_key('marcus webb')   # True
"""

# Standard library
import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Union

# Local
from canonscan.processing.candidates.name_normalizer import normalize_entity_key
from canonscan.processing.entity_heuristics import EntityHeuristics
from canonscan.utils.dataclasses import CanonEntry, ExistingMention

logger = logging.getLogger(__name__)


def coerce_entries(entries: Optional[Iterable[Union[CanonEntry, Dict[str, Any]]]]) -> List[CanonEntry]:
    """
    Normalize a canon snapshot to CanonEntry objects.

    Dict records go through CanonEntry.from_dict; anything without a usable
    name is skipped.
    """
    coerced = []
    skipped = 0
    for entry in entries or []:
        if isinstance(entry, CanonEntry):
            if isinstance(entry.name, str) and entry.name.strip():
                coerced.append(entry)
                continue
        elif isinstance(entry, dict):
            built = CanonEntry.from_dict(entry)
            if built is not None:
                coerced.append(built)
                continue
        skipped += 1

    if skipped:
        logger.debug(f"Skipped {skipped} canon entries without a usable name")
    return coerced


# =============================================================================
# CANON INDEX
# =============================================================================

@dataclass
class CanonIndex:
    """Normalized canon keys, overall and per type."""
    keys_by_type: Dict[str, Set[str]] = field(default_factory=dict)
    character_keys: Set[str] = field(default_factory=set)
    character_tail_tokens: Set[str] = field(default_factory=set)
    character_leading_roles: Set[str] = field(default_factory=set)

    @property
    def all_keys(self) -> Set[str]:
        keys: Set[str] = set()
        for type_keys in self.keys_by_type.values():
            keys |= type_keys
        return keys

    def has_key(self, key: str, canon_type: Optional[str] = None) -> bool:
        """Check a key against one type, or against every type."""
        if canon_type is None:
            return any(key in keys for keys in self.keys_by_type.values())
        return key in self.keys_by_type.get(canon_type, set())


# =============================================================================
# MATCHER
# =============================================================================

class CanonMatcher:
    """Counts surface mentions of canon names and indexes their keys."""

    def __init__(self, heuristics: Optional[EntityHeuristics] = None):
        self.heuristics = heuristics or EntityHeuristics()
        self._pattern_cache: Dict[str, re.Pattern] = {}

    def _name_pattern(self, name: str) -> re.Pattern:
        # Look-arounds instead of \b so names ending in "." still match
        pattern = self._pattern_cache.get(name)
        if pattern is None:
            pattern = re.compile(r"(?<!\w)" + re.escape(name.strip()) + r"(?!\w)", re.IGNORECASE)
            self._pattern_cache[name] = pattern
        return pattern

    def count(self, prose: str, name: str) -> int:
        """Whole-word, case-insensitive occurrences of name in prose."""
        if not prose or not name or not name.strip():
            return 0
        return sum(1 for _ in self._name_pattern(name).finditer(prose))

    def count_mentions(
        self,
        prose: str,
        entries: Iterable[Union[CanonEntry, Dict[str, Any]]],
    ) -> List[ExistingMention]:
        """
        Count mentions of every canon entry.

        Args:
            prose: Chapter text
            entries: Canon snapshot (CanonEntry or dict records)

        Returns:
            Mentions with count > 0, sorted by count descending; ties keep
            the snapshot order
        """
        text = prose if isinstance(prose, str) else ''
        mentions = []
        for entry in coerce_entries(entries):
            count = self.count(text, entry.name)
            if count > 0:
                mentions.append(ExistingMention(
                    canon_id=entry.id,
                    name=entry.name,
                    type=entry.type,
                    count=count,
                ))

        mentions.sort(key=lambda m: -m.count)
        logger.debug(f"Canon matcher: {len(mentions)} entries mentioned")
        return mentions

    def build_index(self, entries: Iterable[Union[CanonEntry, Dict[str, Any]]]) -> CanonIndex:
        """
        Index canon names by normalized key.

        Characters are additionally indexed by role-stripped key and by their
        trailing name token, so "Detective Webb" and "Webb" are recognised.
        Leading roles ("gardener" for "Gardener Hollis") are kept so a bare
        "the Gardener" is not proposed again.
        """
        keys_by_type: Dict[str, Set[str]] = defaultdict(set)
        index = CanonIndex()

        for entry in coerce_entries(entries):
            key = normalize_entity_key(entry.name)
            if not key:
                continue
            keys_by_type[entry.type].add(key)

            if entry.type == 'character':
                character_key = self.heuristics.character_key(entry.name)
                index.character_keys.add(character_key)
                tokens = character_key.split()
                if len(tokens) > 1:
                    index.character_tail_tokens.add(tokens[-1])
                role = self.heuristics.leading_role_token(entry.name)
                if role:
                    index.character_leading_roles.add(role)

        index.keys_by_type = dict(keys_by_type)
        return index
