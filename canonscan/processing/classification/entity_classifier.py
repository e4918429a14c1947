# -*- coding: utf-8 -*-
"""
Rule-cascade classification of candidates into entity categories.

The cascade is an explicit ordered list of ClassifierRule objects
(predicate + category + priority). Rules are evaluated by ascending priority
and the first match wins; anything unclaimed falls through to CHARACTER unless
the character-noise predicate rejects it.

Default rules:
    10  artifact_context     cue noun before the name ("a relic known as the X")
    10  artifact_suffix      name ends in an artifact word ("Alderman Codex")
    20  system_context       cue noun before the name ("the order called X")
    20  system_suffix        name ends in a system word ("Lantern Council")
    30  location_preposition locative preposition before the name ("into X")
    30  location_suffix      name ends in a place word ("Harrowgate Library")
    30  location_genitive    name contains "of" ("Keeper of Ash")

Artifact and system cues are the most specific, so they run before the weaker
location tests. Suffix rules also match a bare hint word ("the Codex").

Context flags are computed once per candidate (three regex probes over the
prose) and stored on the candidate, so rules themselves are cheap and can be
unit-tested with hand-built candidates.

Example:
    classifier = EntityClassifier()
    buckets = classifier.classify(candidates, prose, canon_index)
    [c.text for c in buckets[EntityCategory.ARTIFACT]]
"""

# Standard library
import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

# Local
from config.scan_config import CLASSIFIER_CONFIG
from canonscan.processing.canon.canon_matcher import CanonIndex
from canonscan.processing.entity_heuristics import EntityHeuristics
from canonscan.utils.dataclasses import Candidate, ContextFlags, EntityCategory

logger = logging.getLogger(__name__)


# =============================================================================
# RULES
# =============================================================================

@dataclass(frozen=True)
class ClassifierRule:
    """One step of the cascade."""
    name: str
    category: EntityCategory
    priority: int
    predicate: Callable[[Candidate], bool]

    def matches(self, candidate: Candidate) -> bool:
        return self.predicate(candidate)


def final_word_in(hints: Iterable[str]) -> Callable[[Candidate], bool]:
    """Predicate: last word of the candidate is a hint word."""
    hint_set = frozenset(hints)

    def predicate(candidate: Candidate) -> bool:
        words = candidate.words
        return bool(words) and words[-1] in hint_set

    return predicate


def has_word_of(candidate: Candidate) -> bool:
    return 'of' in candidate.words


def default_rules() -> List[ClassifierRule]:
    """The standard artifact > system > location cascade."""
    priorities = CLASSIFIER_CONFIG['priorities']
    return [
        ClassifierRule('artifact_context', EntityCategory.ARTIFACT, priorities['artifact'],
                       lambda c: c.context_flags.artifact_context),
        ClassifierRule('artifact_suffix', EntityCategory.ARTIFACT, priorities['artifact'],
                       final_word_in(CLASSIFIER_CONFIG['artifact_suffixes'])),
        ClassifierRule('system_context', EntityCategory.SYSTEM, priorities['system'],
                       lambda c: c.context_flags.system_context),
        ClassifierRule('system_suffix', EntityCategory.SYSTEM, priorities['system'],
                       final_word_in(CLASSIFIER_CONFIG['system_suffixes'])),
        ClassifierRule('location_preposition', EntityCategory.LOCATION, priorities['location'],
                       lambda c: c.context_flags.near_preposition),
        ClassifierRule('location_suffix', EntityCategory.LOCATION, priorities['location'],
                       final_word_in(CLASSIFIER_CONFIG['location_suffixes'])),
        ClassifierRule('location_genitive', EntityCategory.LOCATION, priorities['location'],
                       has_word_of),
    ]


# =============================================================================
# CONTEXT PROBES
# =============================================================================

class ContextProbe:
    """Builds and runs the per-candidate context regexes."""

    def __init__(
        self,
        artifact_cues: Optional[Iterable[str]] = None,
        system_cues: Optional[Iterable[str]] = None,
        prepositions: Optional[Iterable[str]] = None,
    ):
        apposition = CLASSIFIER_CONFIG['apposition_pattern']
        artifact = '|'.join(artifact_cues or CLASSIFIER_CONFIG['artifact_cues'])
        system = '|'.join(system_cues or CLASSIFIER_CONFIG['system_cues'])
        preps = '|'.join(prepositions or CLASSIFIER_CONFIG['locative_prepositions'])

        # {NAME} is substituted with the escaped candidate
        self.artifact_template = r"\b(?:" + artifact + r")\s+" + apposition + r"(?:the\s+)?{NAME}(?!\w)"
        self.system_template = r"\b(?:" + system + r")\s+" + apposition + r"(?:the\s+)?{NAME}(?!\w)"
        self.preposition_template = r"\b(?:" + preps + r")\s+(?:the\s+)?{NAME}(?!\w)"

    @staticmethod
    def has_context(text: str, name: str, template: str) -> bool:
        """Search text for template with {NAME} bound to the escaped name."""
        name_pattern = r"\s+".join(re.escape(part) for part in name.split())
        try:
            pattern = re.compile(template.replace('{NAME}', name_pattern), re.IGNORECASE)
        except re.error as e:
            logger.warning(f"Context pattern failed for {name!r}: {e}")
            return False
        return pattern.search(text) is not None

    def flags(self, text: str, name: str) -> ContextFlags:
        """Compute all context flags for one candidate."""
        if not text or not name:
            return ContextFlags()
        return ContextFlags(
            near_preposition=self.has_context(text, name, self.preposition_template),
            artifact_context=self.has_context(text, name, self.artifact_template),
            system_context=self.has_context(text, name, self.system_template),
        )


# =============================================================================
# CLASSIFIER
# =============================================================================

class EntityClassifier:
    """
    Ordered rule cascade with character fallback and canon suppression.

    Attributes:
        rules: Cascade sorted by priority (stable for equal priorities)
        heuristics: Character-noise predicate and role vocabulary
        probe: Context regex builder
    """

    def __init__(
        self,
        rules: Optional[List[ClassifierRule]] = None,
        heuristics: Optional[EntityHeuristics] = None,
        probe: Optional[ContextProbe] = None,
    ):
        self.rules = sorted(rules if rules is not None else default_rules(),
                            key=lambda r: r.priority)
        self.heuristics = heuristics or EntityHeuristics()
        self.probe = probe or ContextProbe()
        self.stats = {}

    def classify_candidate(self, candidate: Candidate) -> Optional[EntityCategory]:
        """
        Run the cascade on a candidate whose context flags are already set.

        Returns:
            Matched category, CHARACTER by default, or None for character noise
        """
        for rule in self.rules:
            if rule.matches(candidate):
                return rule.category
        if self.heuristics.is_character_noise(candidate.text):
            return None
        return EntityCategory.CHARACTER

    def is_canon(self, candidate: Candidate, category: EntityCategory,
                 canon_index: Optional[CanonIndex]) -> bool:
        """True when the candidate is already registered under the same category."""
        if canon_index is None:
            return False
        if canon_index.has_key(candidate.normalized_key, category.value):
            return True
        if category is EntityCategory.CHARACTER:
            return self.heuristics.character_key(candidate.text) in canon_index.character_keys
        return False

    def classify(
        self,
        candidates: List[Candidate],
        prose: str,
        canon_index: Optional[CanonIndex] = None,
    ) -> Dict[EntityCategory, List[Candidate]]:
        """
        Classify candidates into category buckets.

        Args:
            candidates: Noise-filtered candidates, in output order
            prose: Full chapter text for context lookups
            canon_index: Registered canon keys (for same-category suppression)

        Returns:
            {category: [candidates in input order]} for all four categories
        """
        buckets: Dict[EntityCategory, List[Candidate]] = {c: [] for c in EntityCategory}
        self.stats = {'input_count': len(candidates), 'noise': 0, 'canon': 0,
                      'by_category': defaultdict(int)}

        text = prose if isinstance(prose, str) else ''
        for candidate in candidates:
            candidate.context_flags = self.probe.flags(text, candidate.text)
            category = self.classify_candidate(candidate)

            if category is None:
                self.stats['noise'] += 1
                continue
            if self.is_canon(candidate, category, canon_index):
                self.stats['canon'] += 1
                continue

            buckets[category].append(candidate)
            self.stats['by_category'][category.value] += 1

        self.stats['by_category'] = dict(self.stats['by_category'])
        logger.debug(
            f"Classifier: {self.stats['input_count']} in, "
            f"{self.stats['by_category']}, noise {self.stats['noise']}, "
            f"canon {self.stats['canon']}"
        )
        return buckets
