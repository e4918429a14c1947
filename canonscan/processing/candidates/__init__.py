# -*- coding: utf-8 -*-
"""
Candidate subpackage: capitalized-span extraction, name normalization and
noise filtering.
"""
