# -*- coding: utf-8 -*-
"""
Candidate extraction tests.

Run: pytest tests/processing/test_candidate_extractor.py -v
"""
import pytest

from canonscan.processing.candidates.candidate_extractor import CandidateExtractor


@pytest.fixture
def extractor():
    return CandidateExtractor()


class TestCapitalizedRuns:
    """Pass 1: capitalized runs."""

    def test_multi_word_runs(self, extractor):
        spans = extractor.extract("Marcus Webb walked into Harrowgate Library.")
        assert spans == ['Marcus Webb', 'Harrowgate Library']

    def test_duplicates_retained(self, extractor):
        spans = extractor.extract("Marcus entered. Marcus sat.")
        assert spans == ['Marcus', 'Marcus']
        assert extractor.stats['runs'] == 2

    def test_runs_capped_at_four_words(self, extractor):
        spans = extractor.extract("Alpha Beta Gamma Delta Epsilon")
        assert spans == ['Alpha Beta Gamma Delta', 'Epsilon']

    def test_sentence_initial_article_included(self, extractor):
        """Articles are stripped later by the normalizer, not here."""
        assert extractor.extract("The Gardener knelt.") == ['The Gardener']

    def test_mixed_case_names(self, extractor):
        assert extractor.extract("She met McAllister there.") == ['She', 'McAllister']


class TestGenitivePhrases:
    """Pass 2: 'X of Y' phrases."""

    def test_genitive_appended_after_runs(self, extractor):
        spans = extractor.extract("She served the Order of Seven Lamps.")
        assert spans == ['She', 'Order', 'Seven Lamps', 'Order of Seven Lamps']
        assert extractor.stats['genitives'] == 1

    def test_lowercase_after_of_not_matched(self, extractor):
        spans = extractor.extract("the Keeper of the gate")
        assert 'Keeper of the gate' not in spans


class TestTotality:
    """Extraction never raises."""

    @pytest.mark.parametrize('prose', ['', None, 42, '   ', 'lowercase only here'])
    def test_empty_inputs(self, extractor, prose):
        assert extractor.extract(prose) == []

    def test_non_ascii(self, extractor):
        spans = extractor.extract("Ζεύς και 東京 — Zoë went north.")
        assert isinstance(spans, list)
