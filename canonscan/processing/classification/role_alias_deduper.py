# -*- coding: utf-8 -*-
"""
Role-alias deduplication for the character bucket.

Many character mentions are roles rather than names ("the Gardener",
"the Archivist"). This stage collapses them against more specific names.

Algorithm:
    1. Leading-role set: roles that open a longer character name, in this
       scan or in canon ("Gardener Hollis" -> 'gardener')
    2. For each bare-role candidate ("Gardener"):
       - drop it if its role is in the leading-role set
       - drop it if a fully-named character is present and the role is
         alias-prone ("the Detective" next to "Marcus Webb")
       - otherwise keep one representative per role, longest surface form
    3. Named candidates are merged by character key ("Hollis" and
       "Gardener Hollis" share 'hollis'); the fuller name wins
    4. A single-word name that is the surname of a longer character name,
       in this scan or in canon, is dropped ("Webb" next to "Marcus Webb")

Output keeps first-seen order.

Example:
    deduper = RoleAliasDeduper()
    characters = deduper.deduplicate(buckets[EntityCategory.CHARACTER])
"""

# Standard library
import logging
from typing import Dict, List, Optional, Set, Tuple

# Local
from canonscan.processing.canon.canon_matcher import CanonIndex
from canonscan.processing.entity_heuristics import EntityHeuristics
from canonscan.utils.dataclasses import Candidate

logger = logging.getLogger(__name__)


class RoleAliasDeduper:
    """Collapses role-only character mentions and name fragments."""

    def __init__(self, heuristics: Optional[EntityHeuristics] = None):
        self.heuristics = heuristics or EntityHeuristics()
        self.stats = {}

    def name_score(self, name: str) -> float:
        """Preference score when two surface forms share a character key."""
        multi_word = 2 if ' ' in name else 0
        specific = 0 if self.heuristics.is_generic_role_name(name) else 2
        return multi_word + specific + min(len(name) / 100, 0.5)

    def _merge_named(self, named: List[Candidate]) -> List[Tuple[int, Candidate]]:
        """One candidate per character key, best-scoring surface form."""
        groups: Dict[str, Candidate] = {}
        order: Dict[str, int] = {}
        for candidate in named:
            key = self.heuristics.character_key(candidate.text)
            existing = groups.get(key)
            if existing is None:
                groups[key] = candidate
                order[key] = candidate.first_seen
                continue
            if self.name_score(candidate.text) > self.name_score(existing.text):
                groups[key] = candidate
            self.stats['merged_named'] += 1

        return [(order[key], candidate) for key, candidate in groups.items()]

    def _merge_roles(self, generic: List[Candidate]) -> List[Tuple[int, Candidate]]:
        """One candidate per role token, longest surface form."""
        best: Dict[str, Candidate] = {}
        order: Dict[str, int] = {}
        for candidate in generic:
            role = self.heuristics.generic_role_token(candidate.text)
            existing = best.get(role)
            if existing is None:
                best[role] = candidate
                order[role] = candidate.first_seen
                continue
            if len(candidate.text) > len(existing.text):
                best[role] = candidate
            self.stats['merged_roles'] += 1

        return [(order[role], candidate) for role, candidate in best.items()]

    def deduplicate(
        self,
        characters: List[Candidate],
        canon_index: Optional[CanonIndex] = None,
        named_character_in_canon: bool = False,
    ) -> List[Candidate]:
        """
        Deduplicate the character bucket.

        Args:
            characters: Character candidates in first-seen order
            canon_index: Registered canon keys (surname fragments, leading roles)
            named_character_in_canon: A multi-word canon character is mentioned
                in this prose, which counts as an introduced named character

        Returns:
            Deduplicated characters in first-seen order
        """
        self.stats = {
            'input_count': len(characters),
            'merged_named': 0,
            'merged_roles': 0,
            'dropped_leading_role': 0,
            'dropped_alias_prone': 0,
            'dropped_fragment': 0,
        }

        generic = [c for c in characters if self.heuristics.is_generic_role_name(c.text)]
        named = [c for c in characters if not self.heuristics.is_generic_role_name(c.text)]

        leading_roles: Set[str] = {
            role for role in (self.heuristics.leading_role_token(c.text) for c in named) if role
        }
        if canon_index:
            leading_roles |= canon_index.character_leading_roles
        has_named_character = named_character_in_canon or any(' ' in c.text for c in named)

        kept_generic = []
        for candidate in generic:
            role = self.heuristics.generic_role_token(candidate.text)
            if role in leading_roles:
                self.stats['dropped_leading_role'] += 1
                continue
            if has_named_character and self.heuristics.is_alias_prone(role):
                self.stats['dropped_alias_prone'] += 1
                continue
            kept_generic.append(candidate)

        merged_named = self._merge_named(named)

        tail_tokens: Set[str] = set(canon_index.character_tail_tokens) if canon_index else set()
        for _, candidate in merged_named:
            tokens = self.heuristics.character_key(candidate.text).split()
            if len(tokens) > 1:
                tail_tokens.add(tokens[-1])

        kept_named = []
        for position, candidate in merged_named:
            key = self.heuristics.character_key(candidate.text)
            if candidate.is_single_word and key in tail_tokens:
                self.stats['dropped_fragment'] += 1
                continue
            kept_named.append((position, candidate))

        ranked = sorted(kept_named + self._merge_roles(kept_generic), key=lambda pair: pair[0])
        result = [candidate for _, candidate in ranked]
        self.stats['output_count'] = len(result)

        logger.debug(f"Role-alias deduper: {self.stats}")
        return result
