# -*- coding: utf-8 -*-
"""
I/O utilities for canon snapshots, chapter files and scan output

Only the developer CLI touches the filesystem; the engine itself is pure.

Examples:
    from canonscan.utils.io import load_canon_entries, save_json, append_jsonl
    entries = load_canon_entries("data/canon.json")
    save_json(result.to_dict(), "out/chapter_01.scan.json")

"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

from canonscan.utils.dataclasses import CanonEntry

logger = logging.getLogger(__name__)

CHAPTER_SUFFIXES = ('.txt', '.md')


# ============================================================================
# JSON
# ============================================================================

def load_json(path: Union[str, Path]) -> Any:
    """
    Load JSON file.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON content
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    logger.info(f"Loaded {path} ({_size_str(path)})")
    return data


def save_json(
    data: Any,
    path: Union[str, Path],
    indent: int = 2,
) -> str:
    """
    Save data to JSON file.

    Args:
        data: Data to save (must be JSON-serializable)
        path: Output path
        indent: Indentation level (default 2)

    Returns:
        Path string
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)

    logger.info(f"Saved {path} ({_size_str(path)})")
    return str(path)


# ============================================================================
# JSONL
# ============================================================================

def append_jsonl(
    record: Dict,
    path: Union[str, Path],
) -> None:
    """
    Append single record to JSONL file.

    Args:
        record: Dict to append
        path: Output path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'a', encoding='utf-8') as f:
        f.write(json.dumps(record, ensure_ascii=False) + '\n')


# ============================================================================
# CANON + CHAPTERS
# ============================================================================

def load_canon_entries(path: Union[str, Path]) -> List[CanonEntry]:
    """
    Load a canon snapshot.

    Accepts either a JSON list of entries or an object with an "entries" key.
    Records without a usable name are skipped.

    Args:
        path: Path to canon JSON

    Returns:
        List of CanonEntry
    """
    data = load_json(path)
    records = data.get('entries', []) if isinstance(data, dict) else data

    entries = []
    skipped = 0
    for record in records or []:
        entry = CanonEntry.from_dict(record)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    if skipped:
        logger.warning(f"Skipped {skipped} canon records without a name in {path}")
    return entries


def read_chapter(path: Union[str, Path]) -> str:
    """Read one chapter as UTF-8 text."""
    with open(Path(path), 'r', encoding='utf-8') as f:
        return f.read()


def iter_chapter_files(directory: Union[str, Path]) -> Iterator[Path]:
    """Yield chapter files in a directory, sorted by name."""
    for path in sorted(Path(directory).iterdir()):
        if path.is_file() and path.suffix.lower() in CHAPTER_SUFFIXES:
            yield path


# ============================================================================
# HELPERS
# ============================================================================

def _size_str(path: Path) -> str:
    """Human-readable file size."""
    size = path.stat().st_size
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
