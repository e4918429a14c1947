# -*- coding: utf-8 -*-
"""
Name normalization for candidate display forms and comparison keys.

Two levels of normalization:
    normalize_candidate()        display form: enclosing punctuation trimmed,
                                 leading determiner stripped, whitespace collapsed
    normalize_entity_key()       comparison key: NFKC, casefolded, token edges
                                 stripped of non-letters, possessives dropped
    normalize_character_key()    entity key minus a leading generic role token
                                 ("Detective Marcus Webb" -> "marcus webb")

All functions are pure and never raise on string input.

Example:
    >>> normalize_candidate('"The  Alderman Codex,"')
    'Alderman Codex'
    >>> normalize_entity_key("Marcus Webb's")
    'marcus webb'
"""

# Standard library
import re
import unicodedata
from typing import Iterable, List, Optional

# Local
from config.scan_config import CANDIDATE_EXTRACTION_CONFIG, ROLE_ALIAS_CONFIG


# =============================================================================
# PATTERNS
# =============================================================================

_ENCLOSING_PUNCT = re.compile(
    r"^[\s\"'`(\[{“‘«]+|[\s\"'`)\]}.,!?;:”’»]+$"
)
_LEADING_DETERMINER = re.compile(
    r"^(?:" + "|".join(CANDIDATE_EXTRACTION_CONFIG['leading_determiners']) + r")\s+",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")

# Token edges: anything that is not a letter or hyphen
_TOKEN_EDGES = re.compile(r"^(?:[^\w-]|[\d_])+|(?:[^\w-]|[\d_])+$")
_POSSESSIVE = re.compile(r"(?:'s|s')$")

_DEFAULT_ROLE_TOKENS = frozenset(ROLE_ALIAS_CONFIG['generic_role_tokens'])


# =============================================================================
# DISPLAY FORM
# =============================================================================

def normalize_candidate(raw: str) -> str:
    """
    Canonical display form of a matched span.

    Steps, in order:
        1. Trim enclosing quotes, brackets and punctuation
        2. Strip a leading determiner (the/a/an), case-insensitive
        3. Collapse internal whitespace runs to single spaces
        4. Trim again

    Args:
        raw: Matched substring from prose

    Returns:
        Display candidate (may be empty)
    """
    if not isinstance(raw, str):
        return ''
    text = _ENCLOSING_PUNCT.sub('', raw)
    text = _LEADING_DETERMINER.sub('', text)
    text = _WHITESPACE.sub(' ', text)
    return text.strip()


# =============================================================================
# COMPARISON KEYS
# =============================================================================

def normalize_token(raw: str) -> str:
    """
    Comparison form of a single word.

    Curly apostrophes are folded, edges stripped of non-letters and a trailing
    possessive removed ("Webb's" -> "webb").
    """
    token = unicodedata.normalize('NFKC', raw).casefold().replace('’', "'")
    token = _TOKEN_EDGES.sub('', token)
    return _POSSESSIVE.sub('', token)


def normalized_tokens(name: str) -> List[str]:
    """Split a name into non-empty comparison tokens."""
    sanitized = normalize_candidate(name)
    tokens = (normalize_token(part) for part in sanitized.split())
    return [t for t in tokens if t]


def normalize_entity_key(name: str) -> str:
    """
    Case, article and whitespace insensitive key used for equality checks.

    Args:
        name: Any display name or raw span

    Returns:
        Space-joined token key ('' when nothing usable remains)
    """
    return ' '.join(normalized_tokens(name))


def normalize_character_key(
    name: str,
    role_tokens: Optional[Iterable[str]] = None,
) -> str:
    """
    Character key: entity key with a leading generic role token removed.

    The role is only dropped when a name follows it, so "Gardener" keeps its
    key while "Gardener Hollis" becomes "hollis".

    Args:
        name: Character display name
        role_tokens: Generic role vocabulary (defaults to config)

    Returns:
        Character key, falling back to the entity key
    """
    roles = _DEFAULT_ROLE_TOKENS if role_tokens is None else frozenset(role_tokens)
    tokens = normalized_tokens(name)
    if len(tokens) > 1 and tokens[0] in roles:
        tokens = tokens[1:]
    return ' '.join(tokens)
