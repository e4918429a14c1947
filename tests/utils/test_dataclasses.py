# -*- coding: utf-8 -*-
"""
Data structure tests: canon entries, candidates and the result contract.

Run: pytest tests/utils/test_dataclasses.py -v
"""
import pytest

from canonscan.utils.dataclasses import (
    CanonEntry, Candidate, EntityCategory, ExistingMention, NewEntities, ScanResult,
)


class TestCanonEntry:

    def test_from_dict(self):
        entry = CanonEntry.from_dict({'id': 'c_001', 'type': 'character', 'name': 'Marcus Webb'})
        assert entry == CanonEntry('c_001', 'character', 'Marcus Webb')

    def test_from_dict_canon_id_alias(self):
        assert CanonEntry.from_dict({'canonId': 7, 'type': 'rule', 'name': 'No Magic'}).id == '7'

    @pytest.mark.parametrize('record', [
        {'id': 'x', 'type': 'character'},
        {'id': 'x', 'type': 'character', 'name': ''},
        {'id': 'x', 'type': 'character', 'name': 12},
        'Marcus Webb',
    ])
    def test_unusable_records(self, record):
        assert CanonEntry.from_dict(record) is None


class TestCandidate:

    def test_word_helpers(self):
        candidate = Candidate(text='Keeper of Ash', normalized_key='keeper of ash')
        assert candidate.words == ['Keeper', 'of', 'Ash']
        assert not candidate.is_single_word
        assert Candidate(text='Hollis', normalized_key='hollis').is_single_word


class TestScanResult:

    @pytest.fixture
    def result(self):
        return ScanResult(
            scanned_at='2026-01-01T00:00:00.000Z',
            existing_mentions=[ExistingMention('c_001', 'Marcus Webb', 'character', 3)],
            new_entities=NewEntities(characters=['Hollis'], artifacts=['Alderman Codex']),
        )

    def test_camel_case_contract(self, result):
        assert result.to_dict() == {
            'scannedAt': '2026-01-01T00:00:00.000Z',
            'existingMentions': [
                {'canonId': 'c_001', 'name': 'Marcus Webb', 'type': 'character', 'count': 3},
            ],
            'newEntities': {
                'characters': ['Hollis'],
                'locations': [],
                'systems': [],
                'artifacts': ['Alderman Codex'],
            },
        }

    def test_from_dict_inverse(self, result):
        assert ScanResult.from_dict(result.to_dict()) == result

    def test_for_category(self, result):
        assert result.new_entities.for_category(EntityCategory.ARTIFACT) == ['Alderman Codex']
