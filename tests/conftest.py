# -*- coding: utf-8 -*-
"""
Shared fixtures for the canon scan test suite.
"""
import sys
from pathlib import Path

# Project root (tests/conftest.py → 2 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from canonscan.utils.dataclasses import Candidate
from canonscan.processing.candidates.name_normalizer import normalize_entity_key


FIXED_TIMESTAMP = "2026-01-01T00:00:00.000Z"


def _make_candidate(text: str, count: int = 2, first_seen: int = 0) -> Candidate:
    """Build a tallied candidate without running the extractor."""
    return Candidate(
        text=text,
        normalized_key=normalize_entity_key(text),
        occurrence_count=count,
        first_seen=first_seen,
        raw_forms=[text],
    )


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def canon_entries():
    """Small canon snapshot as the store would return it."""
    return [
        {'id': 'c_001', 'type': 'character', 'name': 'Marcus Webb'},
        {'id': 'c_002', 'type': 'location', 'name': 'Harrowgate Library'},
        {'id': 'c_003', 'type': 'artifact', 'name': 'Alderman Codex'},
        {'id': 'c_004', 'type': 'system', 'name': 'Lantern Council'},
    ]


@pytest.fixture
def make_candidate():
    """Factory fixture: make_candidate(text, count=2, first_seen=0)."""
    return _make_candidate
