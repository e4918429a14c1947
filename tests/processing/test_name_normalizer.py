# -*- coding: utf-8 -*-
"""
Name normalization tests.

Run: pytest tests/processing/test_name_normalizer.py -v
"""
import pytest

from canonscan.processing.candidates.name_normalizer import (
    normalize_candidate,
    normalize_character_key,
    normalize_entity_key,
    normalize_token,
)


class TestNormalizeCandidate:
    """Display-form normalization."""

    def test_strips_enclosing_punctuation_and_article(self):
        assert normalize_candidate('"The  Alderman Codex,"') == 'Alderman Codex'

    def test_strips_brackets(self):
        assert normalize_candidate('(Harrowgate Library).') == 'Harrowgate Library'

    @pytest.mark.parametrize('raw,expected', [
        ('the Gardener', 'Gardener'),
        ('A Lantern', 'Lantern'),
        ('an Orb', 'Orb'),
    ])
    def test_strips_leading_determiner(self, raw, expected):
        assert normalize_candidate(raw) == expected

    def test_determiner_prefix_inside_word_kept(self):
        """'Annabel' starts with 'An' but is not a determiner."""
        assert normalize_candidate('Annabel Lee') == 'Annabel Lee'
        assert normalize_candidate('Theodora') == 'Theodora'

    def test_bare_article_unchanged(self):
        assert normalize_candidate('The') == 'The'

    def test_collapses_whitespace(self):
        assert normalize_candidate('Marcus\n   Webb') == 'Marcus Webb'

    def test_non_string_is_empty(self):
        assert normalize_candidate(None) == ''

    def test_pure(self):
        raw = '  "the Order  of Seven Lamps!" '
        assert normalize_candidate(raw) == normalize_candidate(raw) == 'Order of Seven Lamps'


class TestEntityKeys:
    """Comparison keys."""

    def test_case_and_article_insensitive(self):
        assert normalize_entity_key('the  HARROWGATE   Library') == 'harrowgate library'
        assert normalize_entity_key('Harrowgate Library') == 'harrowgate library'

    def test_possessive_dropped(self):
        assert normalize_entity_key("Marcus Webb's") == 'marcus webb'
        assert normalize_token("Webb’s") == 'webb'

    def test_internal_apostrophe_kept(self):
        assert normalize_entity_key("O'Hara") == "o'hara"

    def test_empty(self):
        assert normalize_entity_key('') == ''
        assert normalize_entity_key('"..."') == ''

    def test_character_key_drops_leading_role(self):
        assert normalize_character_key('Detective Marcus Webb') == 'marcus webb'
        assert normalize_character_key('Gardener Hollis') == 'hollis'

    def test_character_key_keeps_bare_role(self):
        assert normalize_character_key('the Gardener') == 'gardener'

    def test_character_key_custom_roles(self):
        assert normalize_character_key('Ferryman Oss', role_tokens={'ferryman'}) == 'oss'
        assert normalize_character_key('Gardener Hollis', role_tokens=set()) == 'gardener hollis'
