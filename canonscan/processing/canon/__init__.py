# -*- coding: utf-8 -*-
"""
Canon subpackage: mention counting for registered entries and the canon key
index used to suppress re-proposals.
"""
