# -*- coding: utf-8 -*-
"""
Utilities package shared across the scan pipeline.

Contains the core dataclasses (canon entries, candidates, scan result), logging
setup and JSON helpers used by the developer CLI.
"""
