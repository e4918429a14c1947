# -*- coding: utf-8 -*-
"""
Module: scan_config.py
Package: config
Purpose: Heuristic tables and limits for the canon extraction pipeline

All word lists used by extraction, noise filtering, classification and role
deduplication live here. Components read their defaults from these dicts and
accept overrides in their constructors, so tables can be tuned per project
without touching call sites.

Environment overrides (via .env):
    CANONSCAN_MAX_CANDIDATES     Candidates passed to classification (default 40)
    CANONSCAN_MAX_PER_CATEGORY   Names returned per category (default 10)
    CANONSCAN_LOG_LEVEL          Log level for scripts (default WARNING)
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read a positive int from the environment, falling back to default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


# ============================================================================
# SHARED VOCABULARY
# ============================================================================

WEEKDAYS = [
    'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday',
]

MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June', 'July',
    'August', 'September', 'October', 'November', 'December',
]

# Lowercase; used by the entity-noise predicate
TIME_WORDS = {w.lower() for w in WEEKDAYS + MONTHS} | {
    'spring', 'summer', 'autumn', 'fall', 'winter',
    'today', 'tomorrow', 'yesterday', 'midnight', 'noon',
}


# ============================================================================
# 1. CANDIDATE EXTRACTION
# ============================================================================

CANDIDATE_EXTRACTION_CONFIG = {
    # Capitalized run of 1-4 words ("Marcus", "Harrowgate Library")
    'capitalized_run_pattern': r"\b[A-Z][A-Za-z'’-]+(?:\s+[A-Z][A-Za-z'’-]+){0,3}\b",

    # "X of Y" genitive phrases, up to 2 extra capitalized words after "of"
    'genitive_pattern': (
        r"\b[A-Z][A-Za-z'’-]+\s+of\s+[A-Z][A-Za-z'’-]+"
        r"(?:\s+[A-Z][A-Za-z'’-]+){0,2}\b"
    ),

    # Determiners stripped from the front of every candidate
    'leading_determiners': ['the', 'a', 'an'],
}


# ============================================================================
# 2. NOISE FILTER
# ============================================================================

NOISE_FILTER_CONFIG = {
    # Rejected when EVERY word of the candidate is listed here (case-sensitive)
    'stoplist': [
        # Articles and conjunctions
        'The', 'A', 'An', 'And', 'But', 'Or', 'Nor', 'For', 'So', 'Yet',
        # Sentence connectives
        'If', 'Then', 'When', 'While', 'Because', 'After', 'Before', 'Although',
        'Though', 'However', 'Meanwhile', 'Still', 'Now', 'Once', 'Perhaps',
        'Maybe', 'Suddenly', 'Even', 'Just', 'Only', 'Also', 'Instead',
        'Finally', 'Later', 'Soon', 'Until', 'Since', 'As', 'Yes', 'No', 'Oh',
        'Not', 'Every', 'Each', 'Some', 'All', 'Both', 'Neither', 'Either',
        # Pronouns and demonstratives
        'I', 'He', 'She', 'It', 'We', 'You', 'They', 'Me', 'Him', 'Her', 'Us',
        'Them', 'His', 'Hers', 'Its', 'Our', 'Your', 'Their', 'My', 'This',
        'That', 'These', 'Those', 'There', 'Here', 'What', 'Who', 'Why', 'How',
        'Where', 'Which',
        # Prepositions that open sentences
        'In', 'At', 'On', 'To', 'From', 'With', 'Without', 'Into', 'Inside',
        'Under', 'Beneath', 'Near', 'Across', 'Through', 'Throughout',
        'Within', 'Of', 'By', 'Over', 'Above', 'Behind', 'Beyond', 'Outside',
        # Bare honorifics
        'Mr', 'Mrs', 'Ms', 'Mx',
        # Structure
        'Chapter',
    ] + WEEKDAYS + MONTHS,

    # Peeled off the front of a multi-word run before tallying.
    # Calendar words are not peeled ("May Harlow" stays intact).
    'leading_stopwords': [
        'The', 'A', 'An', 'And', 'But', 'Or', 'Nor', 'For', 'So', 'Yet',
        'If', 'Then', 'When', 'While', 'Because', 'After', 'Before', 'Although',
        'Though', 'However', 'Meanwhile', 'Still', 'Now', 'Once', 'Perhaps',
        'Maybe', 'Suddenly', 'Even', 'Just', 'Only', 'Also', 'Instead',
        'Finally', 'Later', 'Soon', 'Until', 'Since', 'As', 'Yes', 'No', 'Oh',
        'Not', 'I', 'He', 'She', 'It', 'We', 'You', 'They', 'His', 'Her',
        'Its', 'Our', 'Your', 'Their', 'My', 'This', 'That', 'These', 'Those',
        'There', 'Here', 'What', 'Who', 'Why', 'How', 'Where', 'Which',
        'In', 'At', 'On', 'To', 'From', 'With', 'Into', 'Inside', 'Under',
        'Beneath', 'Near', 'Across', 'Through', 'Throughout', 'Within', 'By',
        'Over', 'Behind', 'Beyond', 'Outside',
    ],

    # Single-token keys that are never entities (lowercase)
    'non_entity_single_tokens': sorted({
        'ai', 'story', 'novel', 'book', 'chapter', 'chapters',
        'project', 'plan', 'outline', 'outlines', 'metadata',
        'settings', 'conversation',
        'title', 'premise', 'length', 'tone', 'pacing',
        'character', 'characters', 'location', 'locations', 'system', 'systems',
        'artifact', 'artifacts', 'event', 'events',
        'question', 'questions', 'notes', 'note',
    } | TIME_WORDS),

    # Trailing tokens that mark editorial phrases, not entities (lowercase)
    'non_entity_tail_tokens': [
        'question', 'questions', 'note', 'notes',
        'outline', 'outlines', 'plan', 'plans',
        'metadata', 'detail', 'details', 'info', 'information',
        'prompt', 'prompts', 'draft', 'drafts',
        'chapter', 'chapters', 'scene', 'scenes',
    ],

    # "Marcus's Notes", "Chapter 3", "Part Two"
    'editorial_patterns': [
        r"(?:'s|s')\s+(?:question|questions|note|notes|outline|outlines|plan|plans|"
        r"metadata|chapter|chapters|scene|scenes|draft|drafts)\b",
        r"^(?:chapter|book|novel|part)\s+(?:\d+|[ivxl]+|one|two|three|four|five|six|"
        r"seven|eight|nine|ten|eleven|twelve)$",
    ],
}


# ============================================================================
# 3. CLASSIFIER
# ============================================================================

CLASSIFIER_CONFIG = {
    # Noun cues that may directly precede an artifact name
    'artifact_cues': [
        'artifact', 'relic', 'object', 'item', 'device', 'book', 'weapon',
        'sword', 'amulet', 'key', 'codex',
    ],
    'artifact_suffixes': [
        'Codex', 'Amulet', 'Sword', 'Key', 'Crown', 'Orb', 'Tome', 'Relic',
        'Artifact', 'Device', 'Book', 'Engine',
    ],

    'system_cues': [
        'system', 'protocol', 'order', 'law', 'magic', 'code', 'doctrine', 'network',
    ],
    'system_suffixes': [
        'System', 'Protocol', 'Order', 'Law', 'Magic', 'Code', 'Doctrine',
        'Network', 'Council',
    ],

    'locative_prepositions': [
        'in', 'at', 'to', 'from', 'into', 'inside', 'under', 'beneath', 'near',
        'across', 'throughout', 'within',
    ],
    'location_suffixes': [
        'City', 'Town', 'Village', 'Forest', 'Garden', 'Library', 'Castle', 'Hall',
        'Street', 'River', 'Mountain', 'Kingdom', 'Realm', 'World', 'Planet',
        'Station', 'District', 'Valley', 'Island', 'Province', 'Country',
        'Harbor', 'Bay', 'Temple',
    ],

    # Optional apposition between a cue noun and the name
    'apposition_pattern': r"(?:(?:called|named|known\s+as)\s+)?",

    # Rule priorities (lower runs first)
    'priorities': {
        'artifact': 10,
        'system': 20,
        'location': 30,
    },
}


# ============================================================================
# 4. ROLE-ALIAS DEDUPLICATION
# ============================================================================

ROLE_ALIAS_CONFIG = {
    # Common nouns used as a character's stand-in name (lowercase)
    'generic_role_tokens': [
        'detective', 'inspector', 'officer', 'agent', 'captain', 'commander',
        'doctor', 'dr', 'professor', 'teacher', 'king', 'queen', 'prince', 'princess',
        'lord', 'lady', 'sir', 'madam', 'duke', 'duchess', 'chief', 'guard', 'guardian',
        'hunter', 'warden', 'pilot', 'narrator', 'witness', 'gardener', 'archivist',
        'priest', 'monk',
    ],

    # Roles that usually refer back to an already-named character.
    # Membership is a product-tunable heuristic, not a fixed rule.
    'alias_prone_role_tokens': [
        'detective', 'inspector', 'officer', 'agent', 'captain', 'commander',
        'doctor', 'dr', 'professor', 'chief', 'warden', 'pilot',
    ],
}


# ============================================================================
# 5. SCAN LIMITS
# ============================================================================

SCAN_CONFIG = {
    'max_candidates': _env_int('CANONSCAN_MAX_CANDIDATES', 40),
    'max_per_category': _env_int('CANONSCAN_MAX_PER_CATEGORY', 10),
    'log_level': os.getenv('CANONSCAN_LOG_LEVEL', 'WARNING').upper(),
}
