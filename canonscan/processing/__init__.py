# -*- coding: utf-8 -*-
"""
Processing package for the canon scan pipeline.

Contains subpackages: candidates (extraction, normalization, noise filtering),
canon (mention counting and canon key index) and classification (rule cascade
and role-alias deduplication), plus the shared name heuristics and the
scan_processor orchestrator.
"""
