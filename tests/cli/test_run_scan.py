# -*- coding: utf-8 -*-
"""
CLI tests for scripts/run_scan.py.

Run: pytest tests/cli/test_run_scan.py -v
"""
import json
import logging

import pytest

from canonscan.utils import logger as logger_module
from scripts.run_scan import main


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(logger_module, '_logging_configured', False)
    yield
    root.handlers = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def canon_file(tmp_path, canon_entries):
    path = tmp_path / 'canon.json'
    path.write_text(json.dumps(canon_entries), encoding='utf-8')
    return path


def test_single_chapter_to_stdout(tmp_path, canon_file, capsys):
    chapter = tmp_path / 'chapter_01.txt'
    chapter.write_text("Marcus Webb walked into Saltmere Station.", encoding='utf-8')

    assert main([str(chapter), '--canon', str(canon_file)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['existingMentions'][0]['name'] == 'Marcus Webb'
    assert data['newEntities']['locations'] == ['Saltmere Station']


def test_single_chapter_to_file(tmp_path):
    chapter = tmp_path / 'chapter_01.txt'
    chapter.write_text("A relic known as the Brass Key lay there.", encoding='utf-8')
    output = tmp_path / 'out' / 'scan.json'

    assert main([str(chapter), '--output', str(output)]) == 0
    data = json.loads(output.read_text(encoding='utf-8'))
    assert data['newEntities']['artifacts'] == ['Brass Key']


def test_directory_to_jsonl(tmp_path, canon_file):
    chapters = tmp_path / 'manuscript'
    chapters.mkdir()
    (chapters / 'ch02.txt').write_text("Hollis waited. Hollis left.", encoding='utf-8')
    (chapters / 'ch01.md').write_text("She walked into Harrowgate Library.", encoding='utf-8')
    output = tmp_path / 'scans.jsonl'
    output.write_text('{"stale": true}\n', encoding='utf-8')

    assert main(['--chapters-dir', str(chapters), '--canon', str(canon_file),
                 '--output', str(output)]) == 0
    records = [json.loads(line) for line in output.read_text(encoding='utf-8').splitlines()]
    assert [r['chapter'] for r in records] == ['ch01.md', 'ch02.txt']
    assert records[0]['scan']['existingMentions'][0]['canonId'] == 'c_002'
    assert records[1]['scan']['newEntities']['characters'] == ['Hollis']


def test_missing_chapter_returns_error(tmp_path):
    assert main([str(tmp_path / 'missing.txt')]) == 1


def test_invalid_canon_json_returns_error(tmp_path):
    chapter = tmp_path / 'chapter.txt'
    chapter.write_text("Hollis waited.", encoding='utf-8')
    canon = tmp_path / 'canon.json'
    canon.write_text('{not json', encoding='utf-8')
    assert main([str(chapter), '--canon', str(canon)]) == 1
