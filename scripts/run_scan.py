#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Script: run_scan.py
Package: scripts
Purpose: CLI for scanning chapters against a canon snapshot

Usage:
    python scripts/run_scan.py chapter_01.txt --canon canon.json
    python scripts/run_scan.py chapter_01.txt --canon canon.json --output scan.json
    python scripts/run_scan.py --chapters-dir manuscript/ --canon canon.json --output scans.jsonl
    python scripts/run_scan.py chapter_01.txt --verbose   # DEBUG stage statistics

Canon JSON is either a list of {id, type, name} records or {"entries": [...]}.
Single-chapter output is one JSON object; directory mode writes one JSONL
record per chapter ({"chapter": ..., "scan": ...}).
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Third-party
from tqdm import tqdm

# Local imports
from config.scan_config import SCAN_CONFIG
from canonscan.processing.scan_processor import ScanProcessor
from canonscan.utils.dataclasses import CanonEntry
from canonscan.utils.io import (
    append_jsonl, iter_chapter_files, load_canon_entries, read_chapter, save_json,
)
from canonscan.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


# ============================================================================
# ARGUMENT PARSING
# ============================================================================

def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Scan chapter prose for canon mentions and new entities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_scan.py chapter_01.txt --canon canon.json
  python scripts/run_scan.py --chapters-dir manuscript/ --canon canon.json --output scans.jsonl
"""
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        'chapter',
        nargs='?',
        type=str,
        help='Chapter file to scan'
    )
    source.add_argument(
        '--chapters-dir',
        type=str,
        help='Scan every .txt/.md file in a directory'
    )

    parser.add_argument(
        '--canon',
        type=str,
        help='Canon snapshot JSON (optional; empty canon if omitted)'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Write results to file instead of stdout'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log per-stage statistics'
    )

    return parser.parse_args(argv)


# ============================================================================
# SCANNING
# ============================================================================

def scan_chapter(path: Path, canon: List[CanonEntry], output: Optional[str]) -> dict:
    """Scan one chapter and write or print the result."""
    processor = ScanProcessor()
    result = processor.scan(read_chapter(path), canon).to_dict()
    logger.debug(f"{path.name}: {processor.stats}")

    if output:
        save_json(result, output)
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return result


def scan_directory(directory: Path, canon: List[CanonEntry], output: Optional[str]) -> int:
    """
    Scan every chapter in a directory.

    Returns:
        Number of chapters scanned
    """
    chapters = list(iter_chapter_files(directory))
    if not chapters:
        logger.warning(f"No chapter files found in {directory}")
        return 0

    if output and Path(output).exists():
        Path(output).unlink()

    processor = ScanProcessor()
    for path in tqdm(chapters, desc="Scanning chapters", unit="chapter"):
        result = processor.scan(read_chapter(path), canon)
        record = {'chapter': path.name, 'scan': result.to_dict()}
        if output:
            append_jsonl(record, output)
        else:
            print(json.dumps(record, ensure_ascii=False))

    logger.info(f"Scanned {len(chapters)} chapters from {directory}")
    return len(chapters)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level='DEBUG' if args.verbose else SCAN_CONFIG['log_level'])

    try:
        canon = load_canon_entries(args.canon) if args.canon else []
        if args.chapters_dir:
            scan_directory(Path(args.chapters_dir), canon, args.output)
        else:
            scan_chapter(Path(args.chapter), canon, args.output)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Scan failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
