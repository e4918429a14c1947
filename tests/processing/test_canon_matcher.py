# -*- coding: utf-8 -*-
"""
Canon matcher tests: mention counting and canon key index.

Run: pytest tests/processing/test_canon_matcher.py -v
"""
import pytest

from canonscan.processing.canon.canon_matcher import CanonMatcher, coerce_entries
from canonscan.utils.dataclasses import CanonEntry


@pytest.fixture
def matcher():
    return CanonMatcher()


class TestMentionCounting:
    """Surface-text counting."""

    def test_counts_inside_longer_phrase(self, matcher):
        prose = "Marcus Webb entered. Marcus Webb sat. Dr. Marcus Webb frowned."
        mentions = matcher.count_mentions(prose, [CanonEntry('c_001', 'character', 'Marcus Webb')])
        assert len(mentions) == 1
        assert mentions[0].count == 3
        assert mentions[0].canon_id == 'c_001'
        assert mentions[0].type == 'character'

    def test_case_insensitive(self, matcher):
        assert matcher.count("marcus webb and MARCUS WEBB", 'Marcus Webb') == 2

    def test_word_boundaries(self, matcher):
        assert matcher.count("Webbley and Webb's coat", 'Webb') == 1

    def test_name_ending_in_punctuation(self, matcher):
        assert matcher.count("They sailed to St. Ives. St. Ives was cold.", 'St. Ives') == 2
        assert matcher.count("Ask Dr. Hollis.", 'Dr.') == 1

    def test_regex_characters_escaped(self, matcher):
        assert matcher.count("The (Veiled) One returned.", '(Veiled) One') == 1

    def test_zero_counts_filtered(self, matcher, canon_entries):
        mentions = matcher.count_mentions("Nobody here.", canon_entries)
        assert mentions == []

    def test_sorted_by_count_with_stable_ties(self, matcher, canon_entries):
        prose = (
            "Harrowgate Library. Lantern Council. Lantern Council. "
            "Marcus Webb. Alderman Codex. Lantern Council."
        )
        mentions = matcher.count_mentions(prose, canon_entries)
        assert [(m.name, m.count) for m in mentions] == [
            ('Lantern Council', 3),
            ('Marcus Webb', 1),
            ('Harrowgate Library', 1),
            ('Alderman Codex', 1),
        ]

    def test_malformed_entries_skipped(self, matcher):
        entries = [
            {'id': 'c_1', 'type': 'character'},
            {'id': 'c_2', 'type': 'character', 'name': '   '},
            {'id': 'c_3', 'type': 'character', 'name': None},
            'not an entry',
            None,
            {'id': 'c_4', 'type': 'location', 'name': 'Harrowgate'},
        ]
        mentions = matcher.count_mentions("Harrowgate at dusk.", entries)
        assert [m.canon_id for m in mentions] == ['c_4']

    def test_non_string_prose(self, matcher, canon_entries):
        assert matcher.count_mentions(None, canon_entries) == []


class TestCanonIndex:
    """Normalized key lookup sets."""

    def test_keys_by_type(self, matcher, canon_entries):
        index = matcher.build_index(canon_entries)
        assert index.has_key('marcus webb', 'character')
        assert index.has_key('harrowgate library', 'location')
        assert not index.has_key('harrowgate library', 'character')
        assert index.has_key('alderman codex')
        assert 'lantern council' in index.all_keys

    def test_character_keys_and_tails(self, matcher):
        index = matcher.build_index([
            {'id': 'c_1', 'type': 'character', 'name': 'Detective Marcus Webb'},
            {'id': 'c_2', 'type': 'character', 'name': 'Hollis'},
        ])
        assert 'marcus webb' in index.character_keys
        assert 'hollis' in index.character_keys
        assert index.character_tail_tokens == {'webb'}
        assert index.character_leading_roles == {'detective'}

    def test_coerce_accepts_canon_id(self):
        entries = coerce_entries([{'canonId': 'x9', 'type': 'artifact', 'name': 'Orb'}])
        assert entries == [CanonEntry('x9', 'artifact', 'Orb')]
