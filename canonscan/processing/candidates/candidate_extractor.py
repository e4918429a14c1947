# -*- coding: utf-8 -*-
"""
Capitalized-phrase candidate extraction from chapter prose.

Two independent pattern passes over the raw text:
    Pass 1: capitalized runs of 1-4 words ("Marcus", "Harrowgate Library")
    Pass 2: genitive phrases ("Order of Seven Lamps", "Keeper of Ash")

Duplicates are retained so the noise filter can tally frequency. Pass 1
results come first, then pass 2, each in document order.

Example:
    extractor = CandidateExtractor()
    spans = extractor.extract("Marcus Webb walked into Harrowgate Library.")
    # ['Marcus Webb', 'Harrowgate Library']
"""

# Standard library
import logging
import re
from typing import List, Optional

# Local
from config.scan_config import CANDIDATE_EXTRACTION_CONFIG

logger = logging.getLogger(__name__)


class CandidateExtractor:
    """
    Extracts raw capitalized spans; never raises.

    Patterns default to the config and may be overridden for experiments.
    """

    def __init__(
        self,
        run_pattern: Optional[str] = None,
        genitive_pattern: Optional[str] = None,
    ):
        self.run_pattern = re.compile(
            run_pattern or CANDIDATE_EXTRACTION_CONFIG['capitalized_run_pattern']
        )
        self.genitive_pattern = re.compile(
            genitive_pattern or CANDIDATE_EXTRACTION_CONFIG['genitive_pattern']
        )
        self.stats = {'runs': 0, 'genitives': 0}

    def extract(self, prose: str) -> List[str]:
        """
        Extract raw candidate spans from prose.

        Args:
            prose: Chapter text (None or non-string treated as empty)

        Returns:
            Matched substrings, duplicates retained
        """
        self.stats = {'runs': 0, 'genitives': 0}
        if not isinstance(prose, str) or not prose:
            return []

        runs = [m.group(0) for m in self.run_pattern.finditer(prose)]
        genitives = [m.group(0) for m in self.genitive_pattern.finditer(prose)]

        self.stats['runs'] = len(runs)
        self.stats['genitives'] = len(genitives)
        logger.debug(f"Extracted {len(runs)} capitalized runs, {len(genitives)} genitive phrases")

        return runs + genitives
