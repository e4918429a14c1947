# -*- coding: utf-8 -*-
"""
Pluggable name heuristics shared by the noise filter, classifier and deduper.

EntityHeuristics bundles the table-driven predicates the pipeline delegates to:

    is_entity_noise(name)       -> bool   common word / editorial phrase, not an entity
    is_character_noise(name)    -> bool   entity noise, or an editorial tail on the
                                          character key
    generic_role_token(name)    -> str?   "gardener" for "the Gardener", else None
    leading_role_token(name)    -> str?   "gardener" for "Gardener Hollis", else None
    is_alias_prone(role)        -> bool   role usually points back at a named character

Inputs are normalized display names (see name_normalizer.normalize_candidate);
every predicate tolerates empty strings. Stages take an EntityHeuristics in their
constructor, so tests and callers can inject stubs or retuned tables.

Example:
    heuristics = EntityHeuristics(alias_prone_role_tokens={'detective'})
    heuristics.generic_role_token("the Gardener")   # 'gardener'
    heuristics.is_alias_prone('gardener')           # False
"""

# Standard library
import re
from typing import Iterable, Optional

# Local
from config.scan_config import NOISE_FILTER_CONFIG, ROLE_ALIAS_CONFIG, TIME_WORDS
from canonscan.processing.candidates.name_normalizer import (
    normalize_candidate, normalize_character_key, normalize_entity_key, normalized_tokens,
)


class EntityHeuristics:
    """Table-driven default implementation of the pipeline's name predicates."""

    def __init__(
        self,
        generic_role_tokens: Optional[Iterable[str]] = None,
        alias_prone_role_tokens: Optional[Iterable[str]] = None,
        non_entity_single_tokens: Optional[Iterable[str]] = None,
        non_entity_tail_tokens: Optional[Iterable[str]] = None,
    ):
        self.generic_role_tokens = frozenset(
            t.lower() for t in (generic_role_tokens if generic_role_tokens is not None
                                else ROLE_ALIAS_CONFIG['generic_role_tokens'])
        )
        self.alias_prone_role_tokens = frozenset(
            t.lower() for t in (alias_prone_role_tokens if alias_prone_role_tokens is not None
                                else ROLE_ALIAS_CONFIG['alias_prone_role_tokens'])
        )
        self.non_entity_single_tokens = frozenset(
            non_entity_single_tokens if non_entity_single_tokens is not None
            else NOISE_FILTER_CONFIG['non_entity_single_tokens']
        )
        self.non_entity_tail_tokens = frozenset(
            non_entity_tail_tokens if non_entity_tail_tokens is not None
            else NOISE_FILTER_CONFIG['non_entity_tail_tokens']
        )
        self._editorial_patterns = [
            re.compile(p, re.IGNORECASE) for p in NOISE_FILTER_CONFIG['editorial_patterns']
        ]

    # -------------------------------------------------------------------------
    # Noise
    # -------------------------------------------------------------------------

    def is_entity_noise(self, name: str) -> bool:
        """
        Check if a name is a common word or editorial phrase rather than an entity.

        Args:
            name: Normalized display name

        Returns:
            True if the name should never be proposed
        """
        sanitized = normalize_candidate(name).replace('’', "'")
        if not sanitized:
            return True

        key = normalize_entity_key(sanitized)
        if not key:
            return True
        if key in self.non_entity_single_tokens or key in TIME_WORDS:
            return True

        tail = key.split(' ')[-1]
        if tail in self.non_entity_tail_tokens:
            return True

        return any(p.search(sanitized) for p in self._editorial_patterns)

    def is_character_noise(self, name: str) -> bool:
        """Entity noise, or a character key that ends in an editorial tail token."""
        if self.is_entity_noise(name):
            return True
        tokens = normalize_character_key(name, self.generic_role_tokens).split()
        if not tokens:
            return True
        return tokens[-1] in self.non_entity_tail_tokens

    # -------------------------------------------------------------------------
    # Roles
    # -------------------------------------------------------------------------

    def generic_role_token(self, name: str) -> Optional[str]:
        """Role token when the whole name is a bare role ("the Gardener")."""
        tokens = normalized_tokens(name)
        if len(tokens) == 1 and tokens[0] in self.generic_role_tokens:
            return tokens[0]
        return None

    def leading_role_token(self, name: str) -> Optional[str]:
        """Role token when a role leads a longer name ("Gardener Hollis")."""
        tokens = normalized_tokens(name)
        if len(tokens) > 1 and tokens[0] in self.generic_role_tokens:
            return tokens[0]
        return None

    def is_generic_role_name(self, name: str) -> bool:
        return self.generic_role_token(name) is not None

    def is_alias_prone(self, role: str) -> bool:
        return bool(role) and role.lower() in self.alias_prone_role_tokens

    def character_key(self, name: str) -> str:
        """Character key using this instance's role vocabulary."""
        return normalize_character_key(name, self.generic_role_tokens) or normalize_entity_key(name)
