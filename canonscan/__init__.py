# -*- coding: utf-8 -*-
"""
Canon extraction and consistency engine.

Scans chapter prose for mentions of registered canon entries and proposes
newly introduced characters, locations, systems and artifacts. Deterministic,
rule-based and side-effect free.

Example:
    from canonscan import scan
    result = scan(prose, canon_entries)
"""
from canonscan.processing.scan_processor import ScanProcessor, scan
from canonscan.utils.dataclasses import CanonEntry, EntityCategory, ScanResult

__all__ = ['scan', 'ScanProcessor', 'ScanResult', 'CanonEntry', 'EntityCategory']
